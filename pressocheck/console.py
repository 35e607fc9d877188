"""
Read-only console summary of stored readings.

Renders the live list and its statistics with rich, the same way the
measurement screens present them.

Run with: python -m pressocheck
"""

import asyncio
from collections.abc import Sequence

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pressocheck.adapters.sqlite import SqlAlchemyRecordStore
from pressocheck.config import AppConfig, get_config
from pressocheck.domain.models import PressureRecord
from pressocheck.domain.pressure import (
    category_color,
    category_label,
    classify_pressure,
    format_date,
    is_high_pressure,
)
from pressocheck.domain.statistics import summarize
from pressocheck.observability import configure_logging
from pressocheck.services.pressure_state import PressureStateManager
from pressocheck.services.scope import open_scope

EMPTY_MESSAGE = "Nenhuma medição registrada"


def records_table(records: Sequence[PressureRecord], title: str = "Medições") -> Table:
    table = Table(title=title)
    table.add_column("Data")
    table.add_column("Hora")
    table.add_column("Sistólica", justify="right")
    table.add_column("Diastólica", justify="right")
    table.add_column("Classificação")
    table.add_column("Observação")

    for record in records:
        category = classify_pressure(record.systolic, record.diastolic)
        reading_style = "bold" if is_high_pressure(record.systolic, record.diastolic) else ""
        table.add_row(
            format_date(record.timestamp),
            record.time_label,
            Text(str(record.systolic), style=reading_style),
            Text(str(record.diastolic), style=reading_style),
            Text(category_label(category), style=category_color(category).hex),
            record.note,
        )
    return table


def statistics_panel(records: Sequence[PressureRecord]) -> Panel:
    stats = summarize(records)
    body = Text.assemble(
        ("Sistólica\n", "bold"),
        f"Média: {stats.average_systolic} mmHg\n",
        f"Máx: {stats.max_systolic} | Mín: {stats.min_systolic}\n\n",
        ("Diastólica\n", "bold"),
        f"Média: {stats.average_diastolic} mmHg\n",
        f"Máx: {stats.max_diastolic} | Mín: {stats.min_diastolic}",
    )
    return Panel(body, title=f"Estatísticas ({stats.count} medições)")


def render_summary(
    console: Console, recent: Sequence[PressureRecord], records: Sequence[PressureRecord]
) -> None:
    """Print the recent readings table and statistics over every reading."""
    if not records:
        console.print(Panel(EMPTY_MESSAGE))
        return
    console.print(Group(records_table(recent), statistics_panel(records)))


async def show_summary(config: AppConfig, console: Console | None = None) -> None:
    """Open the configured store and print the most recent readings."""
    console = console or Console()
    store = SqlAlchemyRecordStore.from_config(config.storage)
    try:
        async with open_scope("console") as scope:
            manager = PressureStateManager(store, scope)
            recent = store.subscribe_recent(config.tracker.recent_limit).snapshot()
            render_summary(console, recent, manager.pressures.value)
    finally:
        store.close()


def main() -> None:
    config = get_config()
    configure_logging(config.logging)
    asyncio.run(show_summary(config))


if __name__ == "__main__":
    main()
