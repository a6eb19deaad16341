# app/schemas/ticket.py
from typing import Literal

from sqlmodel import SQLModel

NoticeLevel = Literal["info", "error"]


class SaveTicketResponse(SQLModel):
    message: str = "Ticket saved successfully"


class SaveTicketError(SQLModel):
    """
    Error body for POST /save-ticket.

    `details` is only present for client errors (400).
    """

    error: str = "Failed to save ticket"
    details: str | None = None


class LineView(SQLModel):
    """
    A rendered ticket line: name, quantity and the line total.
    """

    name: str
    quantity: int
    line_total: float
    display_total: str


class TicketView(SQLModel):
    """
    Full redraw of the ticket after a mutation.
    """

    lines: list[LineView]
    subtotal: float
    display_total: str


class CatalogTile(SQLModel):
    """
    A selectable catalog tile bound to one item's name and price.
    """

    name: str
    price: float
    css_class: str
    label: str


class CatalogView(SQLModel):
    """
    Rendered catalog area: either tiles or a visible error message.
    """

    tiles: list[CatalogTile] = []
    error: str | None = None


class Notice(SQLModel):
    """
    Operator-facing message produced by save / export / charge.
    """

    level: NoticeLevel = "info"
    message: str
    path: str | None = None
