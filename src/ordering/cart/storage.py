"""Cart persistence port and adapters.

The cart lives on the customer's machine. A storage adapter plays the part of
browser local storage: one JSON document holding the whole cart under a fixed
key, read once at start-up and overwritten after every change.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)

CART_KEY = "cart"


class CartStorage(ABC):
    """Abstract cart storage."""

    @abstractmethod
    def load(self) -> list[dict]:
        """Return the stored line items, or an empty list when nothing usable is stored."""
        ...

    @abstractmethod
    def save(self, items: list[dict]) -> None:
        """Overwrite the stored line items."""
        ...


class InMemoryCartStorage(CartStorage):
    """Keeps the serialized cart in a dict. Used by tests and throwaway sessions."""

    def __init__(self, items: list[dict] | None = None) -> None:
        self.data: dict[str, str] = {}
        self.saves = 0
        if items is not None:
            self.data[CART_KEY] = json.dumps(items)

    def load(self) -> list[dict]:
        raw = self.data.get(CART_KEY)
        return json.loads(raw) if raw else []

    def save(self, items: list[dict]) -> None:
        self.data[CART_KEY] = json.dumps(items)
        self.saves += 1


class JsonFileCartStorage(CartStorage):
    """Stores the cart in a JSON file shaped like a local storage area: ``{"cart": [...]}``.

    Other keys in the file are preserved.
    """

    def __init__(self, path) -> None:
        self.path = Path(path)

    def _read_document(self) -> dict:
        try:
            with self.path.open(encoding="utf-8") as fh:
                document = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("cart.storage_unreadable", path=str(self.path), error=str(exc))
            return {}
        return document if isinstance(document, dict) else {}

    def load(self) -> list[dict]:
        items = self._read_document().get(CART_KEY)
        return items if isinstance(items, list) else []

    def save(self, items: list[dict]) -> None:
        document = self._read_document()
        document[CART_KEY] = items
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(document, fh, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)
