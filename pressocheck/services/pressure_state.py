"""
State manager behind the measurement screens.

Holds four observable fields for a rendering layer (record list, loading flag,
error message, success message) and exposes the write operations as tasks
launched in the owner's cancellation scope.

Error boundary: nothing raised by the store reaches the caller. Every failure
is logged and surfaced once through ``error_message``; the user re-triggers
the action manually. The loading flag is cleared on every path.
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime

import structlog

from pressocheck.domain.models import PressureCategory, PressureRecord
from pressocheck.domain.pressure import (
    category_label,
    check_pressure,
    classify_pressure,
    format_time,
    to_millis,
)
from pressocheck.services.observable import Observable
from pressocheck.services.record_store import RecordStore
from pressocheck.services.scope import CancellationScope

logger = structlog.get_logger(__name__)

INSERT_SUCCESS = "Medição registrada com sucesso!"
INSERT_SUCCESS_WITH_ALERT = "Medição registrada! {label}"
UPDATE_SUCCESS = "Medição atualizada com sucesso!"
DELETE_SUCCESS = "Medição excluída com sucesso!"

INSERT_FAILED = "Erro ao salvar medição: {error}"
UPDATE_FAILED = "Erro ao atualizar medição: {error}"
DELETE_FAILED = "Erro ao excluir medição: {error}"


class PressureStateManager:
    """
    Orchestrates readings between the store and the presentation layer.

    Design principles:
    - Validate before any write, the store never sees invalid readings
    - Never fail silently, never crash: store errors become messages
    - Live list is owned by the store, this class only caches its snapshots
    """

    def __init__(
        self,
        store: RecordStore,
        scope: CancellationScope,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._scope = scope
        self._clock = clock
        self.logger = logger.bind(component="pressure_state", scope=scope.name)

        self.pressures: Observable[list[PressureRecord]] = Observable([], name="pressures")
        self.is_loading: Observable[bool] = Observable(False, name="is_loading")
        self.error_message: Observable[str | None] = Observable(None, name="error_message")
        self.success_message: Observable[str | None] = Observable(None, name="success_message")

        subscription = store.subscribe_all().subscribe(self.pressures.set)
        scope.add_finalizer(subscription.dispose)

    def insert_pressure(self, systolic: int, diastolic: int, note: str = "") -> asyncio.Task[None]:
        """Record a new reading stamped with the current time."""
        return self._scope.launch(
            self._insert(systolic, diastolic, note), name="insert_pressure"
        )

    def update_pressure(self, record: PressureRecord) -> asyncio.Task[None]:
        """Replace a stored reading. Timestamp and time label are kept as given."""
        return self._scope.launch(self._update(record), name="update_pressure")

    def delete_pressure(self, record: PressureRecord) -> asyncio.Task[None]:
        return self._scope.launch(
            self._delete(record.id, lambda: self._store.delete(record)), name="delete_pressure"
        )

    def delete_pressure_by_id(self, record_id: int) -> asyncio.Task[None]:
        return self._scope.launch(
            self._delete(record_id, lambda: self._store.delete_by_id(record_id)),
            name="delete_pressure_by_id",
        )

    def clear_error(self) -> None:
        self.error_message.set(None)

    def clear_success(self) -> None:
        self.success_message.set(None)

    async def _insert(self, systolic: int, diastolic: int, note: str) -> None:
        try:
            checked = check_pressure(systolic, diastolic)
            if checked.is_err():
                self._reject(checked.unwrap_err())
                return

            self._begin()
            now = self._clock()
            record = PressureRecord(
                systolic=systolic,
                diastolic=diastolic,
                timestamp=to_millis(now),
                time_label=format_time(now),
                note=note,
            )

            self._scope.raise_if_cancelled()
            record_id = await self._store.insert(record)

            category = classify_pressure(systolic, diastolic)
            if category is PressureCategory.NORMAL:
                self.success_message.set(INSERT_SUCCESS)
            else:
                self.success_message.set(
                    INSERT_SUCCESS_WITH_ALERT.format(label=category_label(category))
                )
            self.logger.info(
                "pressure_inserted", record_id=record_id, category=category.value
            )
        except Exception as e:
            self._fail("insert", INSERT_FAILED, e)
        finally:
            self.is_loading.set(False)

    async def _update(self, record: PressureRecord) -> None:
        try:
            checked = check_pressure(record.systolic, record.diastolic)
            if checked.is_err():
                self._reject(checked.unwrap_err())
                return

            self._begin()
            self._scope.raise_if_cancelled()
            await self._store.update(record)

            self.success_message.set(UPDATE_SUCCESS)
            self.logger.info("pressure_updated", record_id=record.id)
        except Exception as e:
            self._fail("update", UPDATE_FAILED, e)
        finally:
            self.is_loading.set(False)

    async def _delete(self, record_id: int, operation: Callable[[], Awaitable[None]]) -> None:
        try:
            self._begin()
            self._scope.raise_if_cancelled()
            await operation()

            self.success_message.set(DELETE_SUCCESS)
            self.logger.info("pressure_deleted", record_id=record_id)
        except Exception as e:
            self._fail("delete", DELETE_FAILED, e)
        finally:
            self.is_loading.set(False)

    def _begin(self) -> None:
        self.is_loading.set(True)
        self.error_message.set(None)

    def _reject(self, error: Exception) -> None:
        self.logger.info("pressure_rejected", reason=str(error))
        self.error_message.set(str(error))

    def _fail(self, operation: str, template: str, error: Exception) -> None:
        self.logger.error(
            "store_operation_failed",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
        )
        self.error_message.set(template.format(error=error))
