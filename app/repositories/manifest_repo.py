# app/repositories/manifest_repo.py
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ManifestRepository:
    """
    Data access for manifest.json, the append-only ticket log.

    - Pure file operations, no validation of entries.
    - The whole array is rewritten on every save (not crash-atomic).
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read_all(self) -> list:
        """
        Return the stored array.

        - missing file           -> []
        - invalid JSON / non-array -> [] (healed on next write)
        - any other OSError propagates
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("%s not found, creating new array", self.path.name)
            return []
        except UnicodeDecodeError:
            logger.warning("%s is not valid UTF-8, resetting to empty array", self.path.name)
            return []

        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            logger.warning("%s is not valid JSON, resetting to empty array", self.path.name)
            return []

        if not isinstance(data, list):
            logger.warning("%s is not an array, resetting to empty array", self.path.name)
            return []
        return data

    def write_all(self, entries: list) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(entries, indent=2, allow_nan=False)
        self.path.write_text(text, encoding="utf-8")

    def append(self, entries: list) -> list:
        """
        Read-modify-write: append entries and write the full array back.

        Returns the updated array.
        """
        manifest = self.read_all()
        manifest.extend(entries)
        self.write_all(manifest)
        return manifest
