"""Address lookup port: resolves a Brazilian postal code (CEP) to an address."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AddressResult:
    postal_code: str
    street: str
    neighborhood: str
    city: str
    state: str
    complement: str = ""


class AddressLookup(ABC):
    """Abstract address lookup.

    Raises `NotFoundError` when the service answers that the code does not
    exist and `FetchError` when it cannot be reached.
    """

    @abstractmethod
    def lookup(self, postal_code: str) -> AddressResult: ...
