import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


# ---------------------------------------------------------------------------
# Catalogue products
# ---------------------------------------------------------------------------
@pytest.fixture()
def tshirt(snapshot):
    """Camiseta: 79.90, discounted to 49.90, size and colour axes."""
    return snapshot.get_product("1")


@pytest.fixture()
def sneakers(snapshot):
    """Tênis: 299.90, size axis."""
    return snapshot.get_product("2")


@pytest.fixture()
def socks(snapshot):
    """Meia: 39.90, discounted to 29.90, no variations."""
    return snapshot.get_product("3")


@pytest.fixture()
def cap(snapshot):
    """Boné: 59.90, colour axis."""
    return snapshot.get_product("4")


# ---------------------------------------------------------------------------
# Cart and collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def storage():
    from ordering.cart.storage import InMemoryCartStorage

    return InMemoryCartStorage()


@pytest.fixture()
def store(storage):
    from ordering.cart.store import CartStore

    return CartStore(storage)


@pytest.fixture()
def paulista():
    from ordering.address.port import AddressResult

    return AddressResult(
        postal_code="01310-100",
        street="Avenida Paulista",
        neighborhood="Bela Vista",
        city="São Paulo",
        state="SP",
    )


@pytest.fixture()
def address_lookup(paulista):
    from ordering.address.fake_adapter import FakeAddressLookup

    return FakeAddressLookup({"01310100": paulista})


@pytest.fixture()
def gateway():
    from ordering.submission.fake_adapter import FakeOrderGateway

    return FakeOrderGateway()


@pytest.fixture()
def start_checkout(store, snapshot, address_lookup, gateway):
    """Begin a checkout over ``store``; keyword arguments override the checkout config."""
    from catalogue.accessor.port import CheckoutConfig
    from ordering.checkout.orchestrator import CheckoutOrchestrator

    def _start(**config):
        settings = {"mode": "steps", "order_bumps_enabled": True, "order_bumps_position": "step1"}
        settings.update(config)
        return CheckoutOrchestrator.begin(store, snapshot, address_lookup, gateway, CheckoutConfig(**settings))

    return _start


@pytest.fixture()
def fill_customer():
    def _fill(checkout, name="Maria Silva", email="maria@example.com", phone="11987654321", cpf="12345678909"):
        checkout.update_field("name", name)
        checkout.update_field("email", email)
        checkout.update_field("phone", phone)
        checkout.update_field("cpf", cpf)

    return _fill


@pytest.fixture()
def fill_address():
    def _fill(checkout, postal_code="01310100", number="1000"):
        ticket = checkout.update_field("postal_code", postal_code)
        if ticket is not None:
            checkout.settle_address_lookup(ticket)
        checkout.update_field("number", number)

    return _fill


# ---------------------------------------------------------------------------
# HTTP stand-ins for the requests-based adapters
# ---------------------------------------------------------------------------
class StubResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class StubSession:
    """Records every request and replays one canned response (or raises)."""

    def __init__(self, response=None, raises=None):
        self.response = response or StubResponse()
        self.raises = raises
        self.requests = []

    def _answer(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.raises is not None:
            raise self.raises
        return self.response

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, **kwargs)


@pytest.fixture()
def stub_session():
    """Factory: ``stub_session(status, payload)`` or ``stub_session(raises=exc)``."""

    def _make(status_code=200, payload=None, text="", raises=None):
        return StubSession(StubResponse(status_code, payload, text), raises=raises)

    return _make
