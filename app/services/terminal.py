# app/services/terminal.py
import logging
from datetime import date

from app.core.config import Settings, get_settings
from app.schemas.ticket import CatalogView, Notice, TicketView
from app.services.catalog_service import CatalogLoader
from app.services.export_service import TicketExporter
from app.services.persistence_client import TicketPersistenceClient
from app.services.ticket_service import LineKey, TicketStateManager

logger = logging.getLogger(__name__)

CHARGE_MESSAGE = "Processing payment..."


class PosTerminal:
    """
    Operator-side controller for one POS screen.

    Wires the catalog, the running ticket, saving and exporting:
      - tap(name)      : catalog tile click -> add one unit
      - increment / decrement / remove : line buttons
      - save()         : send the ticket to the backend log
      - export()       : write ticket_<date>.xlsx
      - charge()       : simulated payment, clears the ticket
    """

    def __init__(
        self,
        catalog: CatalogLoader,
        ticket: TicketStateManager,
        persistence: TicketPersistenceClient,
        exporter: TicketExporter,
    ):
        self.catalog = catalog
        self.ticket = ticket
        self.persistence = persistence
        self.exporter = exporter

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PosTerminal":
        settings = settings or get_settings()
        return cls(
            catalog=CatalogLoader(settings.CATALOG_SOURCE),
            ticket=TicketStateManager(),
            persistence=TicketPersistenceClient(
                settings.SERVER_URL, timeout=settings.REQUEST_TIMEOUT
            ),
            exporter=TicketExporter(settings.EXPORT_DIR),
        )

    # ---- catalog / ticket ----

    def load_catalog(self) -> CatalogView:
        return self.catalog.load()

    def tap(self, name: str) -> TicketView:
        """Add the tapped catalog item; unknown tiles are ignored."""
        item = self.catalog.get(name)
        if item is None:
            logger.warning("No catalog tile named %r", name)
            return self.ticket.view()
        return self.ticket.add(item)

    def increment(self, key: LineKey) -> TicketView:
        return self.ticket.increment(key)

    def decrement(self, key: LineKey) -> TicketView:
        return self.ticket.decrement(key)

    def remove(self, key: LineKey) -> TicketView:
        return self.ticket.remove(key)

    # ---- actions ----

    def save(self) -> Notice:
        return self.persistence.submit(self.ticket.lines)

    def export(self, day: date | None = None) -> Notice:
        return self.exporter.export(self.ticket.lines, day=day)

    def charge(self) -> tuple[Notice, TicketView]:
        """
        Simulated payment: no money moves, the ticket is cleared.
        """
        notice = Notice(level="info", message=CHARGE_MESSAGE)
        logger.info("Charging ticket of %s", self.ticket.view().display_total)
        return notice, self.ticket.clear()
