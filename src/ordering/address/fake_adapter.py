"""In-memory address lookup for development and tests."""

from ordering.address.port import AddressLookup, AddressResult
from shared.errors import FetchError, NotFoundError
from shared.masks import unmask


class FakeAddressLookup(AddressLookup):
    """Answers from a dict of known postal codes.

    ``configure(available=False)`` simulates the service being down.
    """

    def __init__(self, addresses: dict[str, AddressResult] | None = None) -> None:
        self.addresses = {unmask(k): v for k, v in (addresses or {}).items()}
        self.available = True
        self.calls: list[str] = []

    def configure(self, available: bool) -> None:
        self.available = available

    def add(self, address: AddressResult) -> None:
        self.addresses[unmask(address.postal_code)] = address

    def lookup(self, postal_code: str) -> AddressResult:
        cep = unmask(postal_code)
        self.calls.append(cep)

        if not self.available:
            raise FetchError("Address lookup is unavailable", postal_code=cep)
        if cep not in self.addresses:
            raise NotFoundError(f"CEP {cep} not found", postal_code=cep)
        return self.addresses[cep]
