# app/services/catalog_service.py
import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from app.core.errors import CatalogLoadError
from app.models.catalog import CatalogItem
from app.schemas.ticket import CatalogTile, CatalogView

logger = logging.getLogger(__name__)

CATALOG_ERROR_MESSAGE = "Error loading catalog items. Check console for details."


class CatalogLoader:
    """
    Loads the read-only catalog and renders it as selectable tiles.

    The source is either a local JSON file or an http(s) URL. It is read
    once; the result (tiles or error) is kept for the loader's lifetime.
    """

    def __init__(self, source: str | Path, client: httpx.Client | None = None):
        self.source = source
        self._client = client
        self._items: dict[str, CatalogItem] = {}
        self._view: CatalogView | None = None

    # ---- internal helpers ----

    def _is_remote(self) -> bool:
        return isinstance(self.source, str) and self.source.startswith(
            ("http://", "https://")
        )

    def _read_remote(self) -> Any:
        client = self._client or httpx.Client()
        try:
            response = client.get(str(self.source))
        except httpx.HTTPError as e:
            raise CatalogLoadError(f"Failed to load {self.source}: {e}") from e
        finally:
            if self._client is None:
                client.close()

        if not response.is_success:
            raise CatalogLoadError(
                f"Failed to load {self.source}: {response.reason_phrase}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise CatalogLoadError(f"Invalid JSON in {self.source}: {e}") from e

    def _read_local(self) -> Any:
        path = Path(self.source)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogLoadError(f"Failed to load {path}: {e}") from e
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e

    def _parse(self, data: Any) -> list[CatalogItem]:
        if not isinstance(data, list):
            raise CatalogLoadError("Catalog data is not a list")
        try:
            return [CatalogItem.model_validate(entry) for entry in data]
        except ValidationError as e:
            raise CatalogLoadError(f"Malformed catalog entry: {e}") from e

    # ---- public operations ----

    def fetch(self) -> list[CatalogItem]:
        """
        Read and validate the catalog source.

        Raises:
            CatalogLoadError: on any read, transport or format problem.
        """
        data = self._read_remote() if self._is_remote() else self._read_local()
        return self._parse(data)

    def load(self) -> CatalogView:
        """
        Load the catalog once and return the rendered catalog area.

        On failure the tiles are replaced by a visible error message
        and the cause is logged.
        """
        if self._view is not None:
            return self._view

        try:
            items = self.fetch()
        except CatalogLoadError as e:
            logger.error("Error loading catalog: %s", e)
            self._items = {}
            self._view = CatalogView(tiles=[], error=CATALOG_ERROR_MESSAGE)
            return self._view

        logger.info("Loaded %d catalog items from %s", len(items), self.source)
        self._items = {item.name: item for item in items}
        self._view = CatalogView(
            tiles=[
                CatalogTile(
                    name=item.name,
                    price=item.price,
                    css_class=f"card {item.image_class}".strip(),
                    label=item.name,
                )
                for item in items
            ]
        )
        return self._view

    def get(self, name: str) -> CatalogItem | None:
        """Item bound to the tile with this name, if loaded."""
        return self._items.get(name)
