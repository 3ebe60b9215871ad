"""Order gateway factory.

Provides get_order_gateway() / set_order_gateway() to swap implementations:
- HttpOrderGateway against the order endpoint (default)
- FakeOrderGateway for development and testing
"""

from ordering.submission.http_adapter import HttpOrderGateway
from ordering.submission.port import OrderGateway
from shared.settings import Settings

_current_gateway: OrderGateway | None = None


def get_order_gateway() -> OrderGateway:
    """Return the current order gateway, built from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        settings = Settings.from_env()
        _current_gateway = HttpOrderGateway(settings.order_api_url, timeout=settings.http_timeout)
    return _current_gateway


def set_order_gateway(gateway: OrderGateway) -> None:
    """Override the active order gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_order_gateway() -> None:
    global _current_gateway
    _current_gateway = None
