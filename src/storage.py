"""Key-value persistence backends for the todo list.

Both backends expose the small string-to-string surface the store needs
(get/set/remove an item by key), the same shape as a browser's
localStorage. Values are always stored as strings; callers encode JSON
themselves.

FileStorage keeps every key of one backend in a single JSON object file
and rewrites it in full on every write. There is no locking: one process
owns the file at a time.
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

logger = logging.getLogger(__name__)

TODOS_KEY = 'todos'
UNIQUE_ID_KEY = 'uniqueId'

DEFAULT_STORAGE_FILE = Path(__file__).parent.parent / 'data' / 'storage.json'


def default_storage_path() -> Path:
    """Storage file path: TODOS_STORAGE if set, else data/storage.json."""
    override = os.environ.get('TODOS_STORAGE')
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return DEFAULT_STORAGE_FILE


class MemoryStorage:
    """Dict-backed storage; nothing outlives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self._items[key] = str(value)

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: Union[str, int]) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def keys(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


class FileStorage(MemoryStorage):
    """JSON-file storage: every mutation rewrites the whole file.

    A missing file reads as an empty store. An unreadable file, or one that
    does not hold a JSON object, is logged and also read as empty; it is
    overwritten by the next write.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        super().__init__()
        self.path: Path = Path(path) if path is not None else default_storage_path()
        self._items = self._read()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Could not read storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold a JSON object; ignoring it", self.path)
            return {}
        return {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(self._items, f, indent=4)

    def set_item(self, key: str, value: Union[str, int]) -> None:
        super().set_item(key, value)
        self._write()

    def remove_item(self, key: str) -> None:
        super().remove_item(key)
        self._write()

    def clear(self) -> None:
        super().clear()
        self._write()
