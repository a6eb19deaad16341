# tests/conftest.py
import logging
import sys

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.catalog import CatalogItem
from app.repositories.manifest_repo import ManifestRepository
from app.routers.tickets import get_ticket_log_service
from app.services.ticket_log_service import TicketLogService


# =========================
# Logging -> stdout
# =========================
@pytest.fixture(scope="session", autouse=True)
def _tests_log_to_stdout():
    """
    Send test logs to stdout so they show up under pytest -s.
    """
    root = logging.getLogger()
    if not any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stdout
        for h in root.handlers
    ):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        root.addHandler(handler)


@pytest.fixture
def manifest_path(tmp_path):
    return tmp_path / "manifest.json"


@pytest.fixture
def client(manifest_path):
    """TestClient whose ticket log writes to a temporary manifest."""
    app.dependency_overrides[get_ticket_log_service] = lambda: TicketLogService(
        ManifestRepository(manifest_path)
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def cookie():
    return CatalogItem(name="Cookie", price=2.50, imageClass="c1")


@pytest.fixture
def brownie():
    return CatalogItem(name="Brownie", price=3.25, imageClass="c2")
