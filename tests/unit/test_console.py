"""Tests for the rich console summary."""

from pathlib import Path

from rich.console import Console

from pressocheck.adapters.sqlite import SqlAlchemyRecordStore
from pressocheck.config import AppConfig, StorageConfig, TrackerConfig
from pressocheck.console import EMPTY_MESSAGE, render_summary, show_summary
from pressocheck.domain.models import PressureRecord


def _record(systolic: int, diastolic: int, timestamp: int, note: str = "") -> PressureRecord:
    return PressureRecord(
        systolic=systolic, diastolic=diastolic, timestamp=timestamp, time_label="08:00", note=note
    )


def _console() -> Console:
    return Console(record=True, width=160, color_system=None)


def test_empty_store_renders_placeholder() -> None:
    console = _console()

    render_summary(console, [], [])

    assert EMPTY_MESSAGE in console.export_text()


def test_summary_shows_labels_and_statistics() -> None:
    console = _console()
    records = [_record(120, 80, 1), _record(140, 90, 2, note="stress"), _record(100, 70, 3)]

    render_summary(console, records[:2], records)

    output = console.export_text()
    assert "Pressão Normal" not in output  # 120/80 is pre-hypertension
    assert "Pré-Hipertensão" in output
    assert "Hipertensão Estágio 1" in output
    assert "stress" in output
    assert "Média: 120 mmHg" in output
    assert "Máx: 140 | Mín: 100" in output
    assert "3 medições" in output


async def test_show_summary_reads_configured_store(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'readings.db'}"
    store = SqlAlchemyRecordStore.from_config(StorageConfig(url=url))
    for offset in range(3):
        await store.insert(_record(110 + offset, 70, 1_700_000_000_000 + offset))
    store.close()

    console = _console()
    config = AppConfig(storage=StorageConfig(url=url), tracker=TrackerConfig(recent_limit=2))

    await show_summary(config, console)

    output = console.export_text()
    assert "112" in output
    assert "111" in output
    assert "Máx: 112 | Mín: 110" in output
