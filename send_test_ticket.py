# send_test_ticket.py

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.models.catalog import CatalogItem
from app.services.persistence_client import TicketPersistenceClient
from app.services.ticket_service import TicketStateManager

def main():
    configure_logging()
    settings = get_settings()
    print(f"Sending test ticket to {settings.SERVER_URL}...")

    ticket = TicketStateManager()
    ticket.add(CatalogItem(name="Cookie", price=2.5, imageClass="cookie"))
    ticket.add(CatalogItem(name="Cookie", price=2.5, imageClass="cookie"))
    view = ticket.add(CatalogItem(name="Brownie", price=3.25, imageClass="brownie"))
    print(f"Ticket total: {view.display_total}")

    client = TicketPersistenceClient(settings.SERVER_URL, timeout=settings.REQUEST_TIMEOUT)
    notice = client.submit(ticket.lines)

    print(f"[{notice.level}] {notice.message}")

if __name__ == "__main__":
    main()
