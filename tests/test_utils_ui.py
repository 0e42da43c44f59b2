from datetime import date

from rich.console import Console

from campus_signage.models import Event
from campus_signage.utils.ui import events_table


def test_events_table_renders_rows():
    table = events_table([
        Event(id=1, event_date=date(2025, 9, 1), title="Open House", time="2:00 PM"),
        Event(id=2, event_date=date(2025, 9, 2), title="Seminar", venue="Room 101"),
    ], title="Events (2)")
    assert table.row_count == 2

    console = Console(record=True, width=120)
    console.print(table)
    text = console.export_text()
    assert "Open House" in text
    assert "Room 101" in text
