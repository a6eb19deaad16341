# app/services/ticket_service.py
import logging
import math
from typing import Any

from app.models.catalog import CatalogItem
from app.models.ticket import LineItem
from app.schemas.ticket import LineView, TicketView

logger = logging.getLogger(__name__)

# A line is addressed either by its position in the last rendered view
# or by its name (unique within a ticket).
LineKey = int | str


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


def _parse_price(raw: Any) -> float | None:
    """
    Parse a catalog price the way a tile click reads it back.

    Accepts numbers and numeric strings; anything else (including
    NaN / infinity and booleans) is not a valid price.
    """
    if isinstance(raw, bool):
        return None
    try:
        price = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


class TicketStateManager:
    """
    Owns the running ticket.

    Responsibilities:
      - keep at most one line per item name (adding again increments)
      - adjust / remove lines by position or by name
      - recompute the subtotal and redraw the line list after every mutation

    Every mutation returns the new TicketView. Stale or unknown line
    keys are ignored instead of raising.
    """

    def __init__(self):
        self._lines: list[LineItem] = []

    # ---- read access ----

    @property
    def lines(self) -> list[LineItem]:
        """Copies of the current lines, in display order."""
        return [line.model_copy() for line in self._lines]

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    # ---- internal helpers ----

    def _find(self, key: LineKey) -> int | None:
        """
        Resolve a line key to a current position.

        Returns None for out-of-range positions and unknown names.
        """
        if isinstance(key, bool):
            return None
        if isinstance(key, int):
            if 0 <= key < len(self._lines):
                return key
            return None
        for index, line in enumerate(self._lines):
            if line.name == key:
                return index
        return None

    # ---- mutations ----

    def add(self, item: CatalogItem | dict[str, Any]) -> TicketView:
        """
        Add one unit of a catalog item.

        The price is snapshotted on the new line; later catalog price
        changes do not affect existing lines. An item without a valid
        numeric price is logged and ignored.
        """
        if isinstance(item, CatalogItem):
            name, raw_price = item.name, item.price
        else:
            name, raw_price = item.get("name"), item.get("price")

        if not isinstance(name, str) or not name:
            logger.error("Catalog item without a name: %r", item)
            return self.recompute_and_render()

        price = _parse_price(raw_price)
        if price is None:
            logger.error("Invalid price for %s: %r", name, raw_price)
            return self.recompute_and_render()

        index = self._find(name)
        if index is not None:
            self._lines[index].quantity += 1
        else:
            self._lines.append(LineItem(name=name, price=price, quantity=1))

        logger.debug("Ticket items: %s", self._lines)
        return self.recompute_and_render()

    def increment(self, key: LineKey) -> TicketView:
        index = self._find(key)
        if index is None:
            logger.warning("Increment ignored, no line for %r", key)
        else:
            self._lines[index].quantity += 1
        return self.recompute_and_render()

    def decrement(self, key: LineKey) -> TicketView:
        """
        Take one unit off a line; a line reaching 0 is removed.

        Removal shifts the positions of every later line.
        """
        index = self._find(key)
        if index is None:
            logger.warning("Decrement ignored, no line for %r", key)
            return self.recompute_and_render()

        line = self._lines[index]
        line.quantity -= 1
        if line.quantity <= 0:
            del self._lines[index]
        return self.recompute_and_render()

    def remove(self, key: LineKey) -> TicketView:
        index = self._find(key)
        if index is None:
            logger.warning("Remove ignored, no line for %r", key)
        else:
            del self._lines[index]
        return self.recompute_and_render()

    def clear(self) -> TicketView:
        self._lines = []
        return self.recompute_and_render()

    # ---- rendering ----

    def subtotal(self) -> float:
        return round(sum(line.line_total for line in self._lines), 2)

    def recompute_and_render(self) -> TicketView:
        """
        Full redraw: one LineView per line plus the rounded subtotal.
        """
        views: list[LineView] = []
        for line in self._lines:
            total = line.line_total
            views.append(
                LineView(
                    name=line.name,
                    quantity=line.quantity,
                    line_total=round(total, 2),
                    display_total=format_money(total),
                )
            )

        subtotal = self.subtotal()
        logger.debug("Subtotal: %s", subtotal)
        return TicketView(
            lines=views,
            subtotal=subtotal,
            display_total=format_money(subtotal),
        )

    view = recompute_and_render
