"""Runtime settings for the storefront, read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_SNAPSHOT_DIR = Path(__file__).resolve().parents[2] / "data" / "mock-data"


@dataclass(frozen=True)
class Settings:
    catalogue_source: str = "snapshot"
    catalogue_snapshot_dir: Path = _DEFAULT_SNAPSHOT_DIR
    cart_file: Path = Path(".vitrine") / "storage.json"
    address_lookup_url: str = "https://viacep.com.br/ws"
    order_api_url: str = "http://localhost:8000"
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            catalogue_source=os.getenv("CATALOGUE_SOURCE", "snapshot").lower(),
            catalogue_snapshot_dir=Path(os.getenv("CATALOGUE_SNAPSHOT_DIR", str(_DEFAULT_SNAPSHOT_DIR))),
            cart_file=Path(os.getenv("CART_FILE", str(Path(".vitrine") / "storage.json"))),
            address_lookup_url=os.getenv("ADDRESS_LOOKUP_URL", "https://viacep.com.br/ws").rstrip("/"),
            order_api_url=os.getenv("ORDER_API_URL", "http://localhost:8000").rstrip("/"),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
        )
