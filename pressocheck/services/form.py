"""
Parsing of the measurement entry form.

The form holds raw text as typed. It decides when submitting is allowed,
which field-specific message to show, and which category preview to render
while the user is still typing.
"""

import asyncio

from pydantic import BaseModel

from pressocheck.domain.errors import ValidationError
from pressocheck.domain.models import PressureCategory, PressureRecord
from pressocheck.domain.pressure import check_pressure, classify_pressure, is_valid_pressure
from pressocheck.domain.result import Result
from pressocheck.services.pressure_state import PressureStateManager

MISSING_SYSTOLIC = "Por favor, informe a pressão sistólica"
MISSING_DIASTOLIC = "Por favor, informe a pressão diastólica"
INVALID_READING = "Valores inválidos. A sistólica deve ser maior que a diastólica."


def _parse_int(text: str) -> int | None:
    # Plain ASCII digits only
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


class PressureForm(BaseModel):
    """Raw contents of the entry form."""

    systolic: str = ""
    diastolic: str = ""
    note: str = ""

    @classmethod
    def from_record(cls, record: PressureRecord) -> "PressureForm":
        """Prefill the form for editing an existing reading."""
        return cls(
            systolic=str(record.systolic),
            diastolic=str(record.diastolic),
            note=record.note,
        )

    @property
    def can_submit(self) -> bool:
        return bool(self.systolic) and bool(self.diastolic)

    def parse(self) -> Result[tuple[int, int], ValidationError]:
        systolic = _parse_int(self.systolic)
        if systolic is None:
            return Result.err(ValidationError(MISSING_SYSTOLIC))

        diastolic = _parse_int(self.diastolic)
        if diastolic is None:
            return Result.err(ValidationError(MISSING_DIASTOLIC))

        return check_pressure(systolic, diastolic, message=INVALID_READING)

    def preview(self) -> PressureCategory | None:
        """Category of the typed reading, or None until it is complete and valid."""
        systolic = _parse_int(self.systolic)
        diastolic = _parse_int(self.diastolic)
        if systolic is None or diastolic is None:
            return None
        if not is_valid_pressure(systolic, diastolic):
            return None
        return classify_pressure(systolic, diastolic)

    def submit(
        self, manager: PressureStateManager, editing: PressureRecord | None = None
    ) -> Result[asyncio.Task[None], ValidationError]:
        """
        Hand the parsed reading to the state manager.

        With ``editing`` the stored reading is replaced, keeping its id,
        timestamp and time label. Otherwise a new reading is inserted.
        """
        parsed = self.parse()
        if parsed.is_err():
            return Result.err(parsed.unwrap_err())

        systolic, diastolic = parsed.unwrap()
        if editing is None:
            return Result.ok(manager.insert_pressure(systolic, diastolic, self.note))

        updated = editing.model_copy(
            update={"systolic": systolic, "diastolic": diastolic, "note": self.note}
        )
        return Result.ok(manager.update_pressure(updated))
