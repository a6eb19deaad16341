# app/services/export_service.py
import logging
from datetime import date
from pathlib import Path

from openpyxl import Workbook

from app.models.ticket import LineItem
from app.schemas.ticket import Notice

logger = logging.getLogger(__name__)

SHEET_TITLE = "Ticket"
COLUMNS = ("Name", "Price", "Quantity", "Total")

NOTHING_TO_EXPORT = "No items to export!"


def export_filename(day: date | None = None) -> str:
    day = day or date.today()
    return f"ticket_{day.isoformat()}.xlsx"


def build_rows(lines: list[LineItem]) -> list[dict]:
    """
    One row per line plus a trailing "Total" summary row.

    Totals are 2-decimal text; the summary row leaves Price and
    Quantity blank.
    """
    rows = [
        {
            "Name": line.name,
            "Price": line.price,
            "Quantity": line.quantity,
            "Total": f"{line.price * line.quantity:.2f}",
        }
        for line in lines
    ]
    grand_total = sum(line.price * line.quantity for line in lines)
    rows.append(
        {
            "Name": "Total",
            "Price": "",
            "Quantity": "",
            "Total": f"{grand_total:.2f}",
        }
    )
    return rows


def build_workbook(lines: list[LineItem]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append(list(COLUMNS))
    for row in build_rows(lines):
        ws.append([row[col] for col in COLUMNS])
    return wb


class TicketExporter:
    """
    Writes the ticket as a spreadsheet download.

    Stateless: each call works on the lines it is given.
    """

    def __init__(self, export_dir: str | Path = "."):
        self.export_dir = Path(export_dir)

    def export(self, lines: list[LineItem], day: date | None = None) -> Notice:
        if not lines:
            return Notice(level="error", message=NOTHING_TO_EXPORT)

        self.export_dir.mkdir(parents=True, exist_ok=True)
        path = self.export_dir / export_filename(day)

        logger.info("Exporting %d ticket lines to %s", len(lines), path)
        build_workbook(lines).save(path)

        return Notice(
            level="info",
            message=f"Ticket exported to {path.name}",
            path=str(path),
        )
