"""JSON persistence for the todo list."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from tuido.core.items import ItemList, TodoItem
from tuido.errors import PersistenceFailure

logger = logging.getLogger(__name__)


def default_store_path() -> Path:
    return Path.home() / ".tuido.json"


class JsonStore:
    """Reads and writes the todo list as a JSON array of records."""

    def __init__(self, path: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Path to the store file. Defaults to ~/.tuido.json
        """
        self._path = Path(path).expanduser() if path is not None else default_store_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> tuple[ItemList, str | None]:
        """Load the list from the store file.

        A missing file is a fresh start. A corrupt or unreadable file yields
        an empty list and an error message instead of aborting.

        Returns:
            A tuple of (items, error_message).
        """
        if not self._path.exists():
            return ItemList(), None
        try:
            return ItemList(self.read(self._path)), None
        except PersistenceFailure as e:
            logger.warning("Failed to load todos from %s: %s", self._path, e)
            return ItemList(), str(e)

    def read(self, path: str | Path) -> list[TodoItem]:
        """Parse a store file.

        Raises:
            PersistenceFailure: If the file cannot be read or is not a valid
                list of todo records.
        """
        path = Path(path).expanduser()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceFailure(f"Invalid file format in {path}") from e
        except OSError as e:
            raise PersistenceFailure(f"Error opening {path}: {e.strerror or e}") from e

        if not isinstance(data, list):
            raise PersistenceFailure(f"Invalid file format in {path}")
        try:
            return [TodoItem.from_dict(record) for record in data]
        except ValueError as e:
            raise PersistenceFailure(f"Invalid file format in {path}: {e}") from e

    def save(self, items: ItemList, path: str | Path | None = None) -> Path:
        """Write ``items`` to ``path`` (the store file by default).

        Returns:
            The path written.

        Raises:
            PersistenceFailure: If the file cannot be written.
        """
        target = Path(path).expanduser() if path is not None else self._path
        records = [item.to_dict() for item in items]
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
        except OSError as e:
            raise PersistenceFailure(
                f"Error saving to {target}: {e.strerror or e} (check permissions)"
            ) from e
        logger.info("Saved %d todos to %s", len(records), target)
        return target
