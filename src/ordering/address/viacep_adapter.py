"""ViaCEP address lookup adapter."""

import requests
import structlog

from ordering.address.port import AddressLookup, AddressResult
from shared.errors import FetchError, NotFoundError
from shared.masks import POSTAL_CODE_LENGTH, unmask

logger = structlog.get_logger(__name__)


class ViaCepAddressLookup(AddressLookup):
    """Queries ``{base_url}/{cep}/json/``.

    ViaCEP answers an unknown but well-formed code with HTTP 200 and
    ``{"erro": true}``; a malformed code gets HTTP 400.
    """

    def __init__(self, base_url: str = "https://viacep.com.br/ws", timeout: float = 10.0, session=None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def lookup(self, postal_code: str) -> AddressResult:
        cep = unmask(postal_code)
        if len(cep) != POSTAL_CODE_LENGTH:
            raise NotFoundError(f"CEP {postal_code} is incomplete", postal_code=postal_code)

        try:
            response = self.session.get(f"{self.base_url}/{cep}/json/", timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("address.lookup_failed", postal_code=cep, error=str(exc))
            raise FetchError("Address lookup is unavailable", postal_code=cep) from exc

        if response.status_code == 400:
            raise NotFoundError(f"CEP {cep} not found", postal_code=cep)
        if not response.ok:
            logger.warning("address.lookup_failed", postal_code=cep, status=response.status_code)
            raise FetchError(f"Address lookup failed with HTTP {response.status_code}", postal_code=cep)

        try:
            data = response.json()
        except ValueError as exc:
            raise FetchError("Address lookup returned an unreadable response", postal_code=cep) from exc

        if data.get("erro"):
            raise NotFoundError(f"CEP {cep} not found", postal_code=cep)

        return AddressResult(
            postal_code=data.get("cep") or cep,
            street=data.get("logradouro") or "",
            neighborhood=data.get("bairro") or "",
            city=data.get("localidade") or "",
            state=data.get("uf") or "",
            complement=data.get("complemento") or "",
        )
