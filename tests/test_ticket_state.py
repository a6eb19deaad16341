# tests/test_ticket_state.py
import pytest

from app.models.catalog import CatalogItem
from app.services.ticket_service import TicketStateManager


@pytest.fixture
def ticket():
    return TicketStateManager()


def test_add_same_item_twice_increments(ticket, cookie):
    ticket.add(cookie)
    view = ticket.add(cookie)

    assert len(ticket) == 1
    assert ticket.lines[0].quantity == 2
    assert [line.name for line in view.lines] == ["Cookie"]


def test_add_then_plus_gives_five_dollars(ticket, cookie):
    ticket.add(cookie)
    view = ticket.increment(0)

    line = ticket.lines[0]
    assert (line.name, line.price, line.quantity) == ("Cookie", 2.50, 2)
    assert view.display_total == "$5.00"
    assert view.subtotal == 5.0


def test_decrement_at_one_removes_line(ticket, cookie, brownie):
    ticket.add(cookie)
    ticket.add(brownie)

    view = ticket.decrement(0)

    assert [line.name for line in view.lines] == ["Brownie"]
    assert ticket.lines[0].name == "Brownie"


def test_decrement_keeps_line_above_one(ticket, cookie):
    ticket.add(cookie)
    ticket.add(cookie)

    view = ticket.decrement("Cookie")

    assert view.lines[0].quantity == 1
    assert view.display_total == "$2.50"


def test_remove_by_name_and_position(ticket, cookie, brownie):
    ticket.add(cookie)
    ticket.add(brownie)

    ticket.remove("Cookie")
    assert [line.name for line in ticket.lines] == ["Brownie"]

    view = ticket.remove(0)
    assert view.lines == []
    assert view.display_total == "$0.00"


@pytest.mark.parametrize("key", [5, -1, "Eclair", True])
def test_stale_keys_are_noops(ticket, cookie, key):
    ticket.add(cookie)

    ticket.increment(key)
    ticket.decrement(key)
    view = ticket.remove(key)

    assert len(view.lines) == 1
    assert view.lines[0].quantity == 1


@pytest.mark.parametrize("price", ["abc", None, float("nan"), float("inf"), True])
def test_invalid_price_is_ignored(ticket, price):
    view = ticket.add({"name": "Mystery", "price": price})

    assert view.lines == []
    assert ticket.is_empty()


def test_numeric_string_price_is_parsed(ticket):
    view = ticket.add({"name": "Tart", "price": "4.20"})

    assert ticket.lines[0].price == pytest.approx(4.20)
    assert view.display_total == "$4.20"


def test_subtotal_tracks_every_mutation(ticket, cookie, brownie):
    ticket.add(cookie)
    ticket.add(brownie)
    ticket.increment("Brownie")
    view = ticket.decrement("Cookie")

    expected = sum(line.price * line.quantity for line in ticket.lines)
    assert view.subtotal == round(expected, 2)
    assert view.display_total == "$6.50"


def test_price_is_snapshotted_at_add_time(ticket):
    ticket.add(CatalogItem(name="Pie", price=4.00, imageClass="p"))
    ticket.add(CatalogItem(name="Pie", price=9.99, imageClass="p"))

    assert ticket.lines[0].price == 4.00
    assert ticket.view().display_total == "$8.00"


def test_lines_are_copies(ticket, cookie):
    ticket.add(cookie)

    ticket.lines[0].quantity = 99

    assert ticket.lines[0].quantity == 1


def test_clear_empties_ticket(ticket, cookie, brownie):
    ticket.add(cookie)
    ticket.add(brownie)

    view = ticket.clear()

    assert ticket.is_empty()
    assert view.lines == []
    assert view.subtotal == 0
