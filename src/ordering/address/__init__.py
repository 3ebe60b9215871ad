"""Address lookup factory.

Provides get_address_lookup() / set_address_lookup():
- ViaCepAddressLookup against the public ViaCEP service (default)
- FakeAddressLookup for tests
"""

from ordering.address.port import AddressLookup
from ordering.address.viacep_adapter import ViaCepAddressLookup
from shared.settings import Settings

_current_lookup: AddressLookup | None = None


def get_address_lookup() -> AddressLookup:
    global _current_lookup
    if _current_lookup is None:
        settings = Settings.from_env()
        _current_lookup = ViaCepAddressLookup(settings.address_lookup_url, timeout=settings.http_timeout)
    return _current_lookup


def set_address_lookup(lookup: AddressLookup) -> None:
    """Override the active address lookup (useful for tests)."""
    global _current_lookup
    _current_lookup = lookup


def reset_address_lookup() -> None:
    global _current_lookup
    _current_lookup = None
