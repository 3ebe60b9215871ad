"""Vitrine storefront command-line client.

Browses the catalogue, keeps a cart in the local cart file and runs a
checkout against the configured address lookup and order services.

Usage:
    python src/cli.py products --search camiseta
    python src/cli.py cart add 1 --qty 2 --option size=M --option color=Preto
    python src/cli.py cart list
    python src/cli.py shipping 01310-100
    python src/cli.py checkout --name "Maria Silva" --email maria@example.com \\
        --phone 11987654321 --cpf 12345678909 --cep 01310100 --number 1000
"""

import argparse
import sys

from protean.exceptions import ValidationError

from shared.errors import StorefrontError


def _parse_options(pairs):
    selection = {}
    for pair in pairs or []:
        axis, sep, option = pair.partition("=")
        if not sep:
            raise ValidationError({"option": [f"Expected axis=option, got '{pair}'"]})
        selection[axis.strip()] = option.strip()
    return selection


def _money(value):
    return f"R$ {value:.2f}"


def _open_store(settings):
    from ordering.cart.storage import JsonFileCartStorage
    from ordering.cart.store import CartStore

    return CartStore(JsonFileCartStorage(settings.cart_file))


def _print_cart(store):
    if store.is_empty:
        print("Cart is empty.")
        return
    for item in store.items:
        selection = ", ".join(f"{k}={v}" for k, v in item.selected_variations.items())
        suffix = f" [{selection}]" if selection else ""
        print(f"{item.product.product_id:>4}  {item.product.name}{suffix}  x{item.quantity}  {_money(item.subtotal)}")
    print(f"Items: {store.get_item_count()}  Total: {_money(store.get_total())}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
def cmd_products(args, settings, catalogue):
    products = catalogue.search_products(args.search) if args.search else catalogue.get_products()
    for product in products:
        price = _money(product.effective_price)
        if product.discount_price:
            price += f" (was {_money(product.price)})"
        print(f"{product.id:>4}  {product.name}  {price}  stock={product.stock}")


def cmd_product(args, settings, catalogue):
    product = catalogue.get_product(args.product_id)
    print(f"{product.name} ({product.slug})")
    print(f"  price: {_money(product.effective_price)}  stock: {product.stock}")
    for axis in product.variations:
        print(f"  {axis.name} [{axis.type}]: {', '.join(axis.options)}")
    for review in catalogue.get_reviews(product.id):
        print(f"  ★{review.rating} {review.user_name}: {review.comment}")


def cmd_cart(args, settings, catalogue):
    from ordering.cart.store import clamp_quantity

    store = _open_store(settings)
    selection = _parse_options(getattr(args, "option", None))

    if args.cart_command == "add":
        product = catalogue.get_product(args.product_id)
        if not selection:
            selection = product.default_selection()
        store.add_item(product, clamp_quantity(args.qty, product.stock), selection)
    elif args.cart_command == "update":
        store.update_quantity(args.product_id, selection, args.qty)
    elif args.cart_command == "remove":
        store.remove_item(args.product_id, selection)
    elif args.cart_command == "clear":
        store.clear_cart()

    _print_cart(store)


def cmd_shipping(args, settings, catalogue):
    store = _open_store(settings)
    for option in catalogue.calculate_shipping(args.cep, store.get_total()):
        print(f"{option.id:>8}  {option.name}  {option.delivery_time}  {_money(option.price)}")


def cmd_checkout(args, settings, catalogue):
    from ordering.address import get_address_lookup
    from ordering.checkout.orchestrator import CheckoutOrchestrator
    from ordering.submission import get_order_gateway
    from ordering.submission.fake_adapter import FakeOrderGateway

    store = _open_store(settings)
    gateway = FakeOrderGateway() if args.offline else get_order_gateway()
    checkout = CheckoutOrchestrator.begin(store, catalogue, get_address_lookup(), gateway)

    for field in ("name", "email", "phone", "cpf"):
        checkout.update_field(field, getattr(args, field))

    ticket = checkout.update_field("postal_code", args.cep)
    if ticket is not None:
        checkout.settle_address_lookup(ticket)
    for field in ("street", "number", "complement", "neighborhood", "city", "state"):
        value = getattr(args, field)
        if value:
            checkout.update_field(field, value)

    if checkout.notice:
        print(checkout.notice)

    if checkout.mode.value == "steps":
        checkout.advance()
    if args.shipping:
        checkout.select_shipping_option(args.shipping)

    option = checkout.selected_shipping_option
    print(f"Subtotal: {_money(checkout.subtotal)}")
    print(f"Shipping: {option.name if option else '-'} {_money(checkout.shipping_price)}")
    print(f"Total:    {_money(checkout.total_with_shipping)}")

    payment = checkout.submit()
    print(f"Order {payment.order_id}: pay {_money(payment.amount)} before {payment.expires_at}")
    print(f"PIX code: {payment.payment_code}")
    print(f"QR code:  {payment.payment_qr_image}")
    checkout.complete()


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------
def build_parser():
    parser = argparse.ArgumentParser(description="Vitrine storefront client")
    subparsers = parser.add_subparsers(dest="command", required=True)

    products = subparsers.add_parser("products", help="List or search products")
    products.add_argument("--search", help="Match name, category, subcategory or description")
    products.set_defaults(handler=cmd_products)

    product = subparsers.add_parser("product", help="Show one product")
    product.add_argument("product_id")
    product.set_defaults(handler=cmd_product)

    cart = subparsers.add_parser("cart", help="Manage the local cart")
    cart.set_defaults(handler=cmd_cart)
    cart_commands = cart.add_subparsers(dest="cart_command", required=True)
    cart_commands.add_parser("list", help="Show the cart")
    cart_commands.add_parser("clear", help="Empty the cart")
    for name, help_text in (("add", "Add a product"), ("update", "Set a line quantity"), ("remove", "Remove a line")):
        sub = cart_commands.add_parser(name, help=help_text)
        sub.add_argument("product_id")
        if name != "remove":
            sub.add_argument("--qty", type=int, default=1)
        sub.add_argument("--option", action="append", metavar="AXIS=OPTION")

    shipping = subparsers.add_parser("shipping", help="Quote shipping for the cart")
    shipping.add_argument("cep")
    shipping.set_defaults(handler=cmd_shipping)

    checkout = subparsers.add_parser("checkout", help="Place an order for the cart")
    checkout.set_defaults(handler=cmd_checkout)
    for field in ("name", "email", "phone", "cpf", "cep", "number"):
        checkout.add_argument(f"--{field}", required=True)
    for field in ("street", "complement", "neighborhood", "city", "state", "shipping"):
        checkout.add_argument(f"--{field}")
    checkout.add_argument("--offline", action="store_true", help="Use the built-in order service stand-in")

    return parser


def main(argv=None):
    from catalogue.accessor import get_catalogue
    from catalogue.domain import catalogue as catalogue_domain
    from ordering.domain import ordering
    from shared.settings import Settings

    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    catalogue_domain.init()
    ordering.init()

    try:
        with ordering.domain_context():
            args.handler(args, settings, get_catalogue())
    except ValidationError as exc:
        for field, messages in exc.messages.items():
            print(f"{field}: {'; '.join(messages)}", file=sys.stderr)
        return 2
    except StorefrontError as exc:
        print(exc.message, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
