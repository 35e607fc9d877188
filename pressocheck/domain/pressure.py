"""
Validation and classification rules for blood-pressure readings.

All functions here are pure. Thresholds follow the WHO and Brazilian Society
of Cardiology guidelines the tracker was built around.
"""

from datetime import datetime

from pressocheck.domain.errors import ValidationError
from pressocheck.domain.models import CategoryColor, PressureCategory
from pressocheck.domain.result import Result

SYSTOLIC_MIN = 70
SYSTOLIC_MAX = 250
DIASTOLIC_MIN = 40
DIASTOLIC_MAX = 150

SYSTOLIC_NORMAL_MAX = 120
DIASTOLIC_NORMAL_MAX = 80
SYSTOLIC_ALERT = 140
DIASTOLIC_ALERT = 90

DAY_MILLIS = 86_400_000

INVALID_PRESSURE_MESSAGE = "Valores de pressão inválidos. Verifique os valores inseridos."

# First match wins, evaluated top-down
_CLASSIFICATION_LADDER: tuple[tuple[int, int, PressureCategory], ...] = (
    (180, 120, PressureCategory.CRITICAL),
    (160, 100, PressureCategory.HYPERTENSION_2),
    (SYSTOLIC_ALERT, DIASTOLIC_ALERT, PressureCategory.HYPERTENSION_1),
    (SYSTOLIC_NORMAL_MAX, DIASTOLIC_NORMAL_MAX, PressureCategory.PRE_HYPERTENSION),
)

CATEGORY_LABELS: dict[PressureCategory, str] = {
    PressureCategory.NORMAL: "Pressão Normal",
    PressureCategory.PRE_HYPERTENSION: "Pré-Hipertensão",
    PressureCategory.HYPERTENSION_1: "Hipertensão Estágio 1",
    PressureCategory.HYPERTENSION_2: "Hipertensão Estágio 2",
    PressureCategory.CRITICAL: "Crise Hipertensiva - Procure atendimento médico!",
}

CATEGORY_COLORS: dict[PressureCategory, CategoryColor] = {
    PressureCategory.NORMAL: CategoryColor(red=0x4C, green=0xAF, blue=0x50),
    PressureCategory.PRE_HYPERTENSION: CategoryColor(red=0xFF, green=0x98, blue=0x00),
    PressureCategory.HYPERTENSION_1: CategoryColor(red=0xF4, green=0x43, blue=0x36),
    PressureCategory.HYPERTENSION_2: CategoryColor(red=0xD3, green=0x2F, blue=0x2F),
    PressureCategory.CRITICAL: CategoryColor(red=0xB7, green=0x1C, blue=0x1C),
}


def is_valid_pressure(systolic: int, diastolic: int) -> bool:
    """Check both values are within plausible ranges and systolic exceeds diastolic."""
    return (
        SYSTOLIC_MIN <= systolic <= SYSTOLIC_MAX
        and DIASTOLIC_MIN <= diastolic <= DIASTOLIC_MAX
        and systolic > diastolic
    )


def check_pressure(
    systolic: int, diastolic: int, message: str = INVALID_PRESSURE_MESSAGE
) -> Result[tuple[int, int], ValidationError]:
    """Validate a reading, returning the pair or a ValidationError carrying ``message``."""
    if is_valid_pressure(systolic, diastolic):
        return Result.ok((systolic, diastolic))
    return Result.err(ValidationError(message))


def classify_pressure(systolic: int, diastolic: int) -> PressureCategory:
    """
    Classify a reading into a risk category.

    Either metric alone can lift the reading into a higher bucket, so
    ``classify_pressure(110, 121)`` is CRITICAL even though the systolic value
    is normal.
    """
    for systolic_floor, diastolic_floor, category in _CLASSIFICATION_LADDER:
        if systolic >= systolic_floor or diastolic >= diastolic_floor:
            return category
    return PressureCategory.NORMAL


def is_high_pressure(systolic: int, diastolic: int) -> bool:
    """Alert threshold at 140/90, independent of the classification ladder."""
    return systolic >= SYSTOLIC_ALERT or diastolic >= DIASTOLIC_ALERT


def category_label(category: PressureCategory) -> str:
    return CATEGORY_LABELS[category]


def category_color(category: PressureCategory) -> CategoryColor:
    return CATEGORY_COLORS[category]


def to_millis(moment: datetime) -> int:
    """Milliseconds since epoch. Naive datetimes are taken as local time."""
    return int(moment.timestamp() * 1000)


def format_time(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def format_date(timestamp: int) -> str:
    """Format a millisecond timestamp as dd/MM/yyyy in local time."""
    return datetime.fromtimestamp(timestamp / 1000).strftime("%d/%m/%Y")


def day_start(timestamp: int) -> int:
    """Local midnight of the day containing ``timestamp``, in milliseconds."""
    moment = datetime.fromtimestamp(timestamp / 1000)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    return to_millis(midnight)


def today_start() -> int:
    return day_start(to_millis(datetime.now()))


def day_range(start: int) -> tuple[int, int]:
    """Half-open millisecond window ``[start, start + one day)``."""
    return start, start + DAY_MILLIS
