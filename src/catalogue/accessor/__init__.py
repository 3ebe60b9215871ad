"""Catalogue accessor factory.

Provides get_catalogue() / set_catalogue() to swap sources:
- StaticSnapshotSource reading the JSON feed directory (default)
- HostedSource reading the catalogue tables, feeds for the rest
"""

from catalogue.accessor.hosted import HostedSource
from catalogue.accessor.port import CatalogueSource
from catalogue.accessor.snapshot import StaticSnapshotSource
from shared.settings import Settings

_current_source: CatalogueSource | None = None


def build_source(settings: Settings) -> CatalogueSource:
    snapshot = StaticSnapshotSource(settings.catalogue_snapshot_dir)
    if settings.catalogue_source == "hosted":
        return HostedSource(fallback=snapshot)
    if settings.catalogue_source == "snapshot":
        return snapshot
    raise ValueError(f"Unknown catalogue source: {settings.catalogue_source}")


def get_catalogue() -> CatalogueSource:
    """Return the current catalogue source, built from the environment on first use."""
    global _current_source
    if _current_source is None:
        _current_source = build_source(Settings.from_env())
    return _current_source


def set_catalogue(source: CatalogueSource) -> None:
    """Override the active catalogue source (useful for tests)."""
    global _current_source
    _current_source = source


def reset_catalogue() -> None:
    """Reset to the environment-configured source."""
    global _current_source
    _current_source = None
