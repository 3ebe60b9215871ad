"""Vitrine database management CLI.

Creates and drops the relational schema behind the catalogue (products,
banners, site configuration) and ordering (placed orders) domains.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db --domain ordering      # Drop one domain's tables
"""

import argparse
import sys

DOMAIN_NAMES = ["catalogue", "ordering"]


def _domains():
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    return {"catalogue": catalogue, "ordering": ordering}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    all_domains = _domains()
    for name in domains or DOMAIN_NAMES:
        domain = all_domains[name]
        domain.init()
        providers = setup_db(domain)
        print(f"{name}: schema ready ({', '.join(providers) or 'no relational provider configured'})")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    all_domains = _domains()
    for name in domains or DOMAIN_NAMES:
        domain = all_domains[name]
        domain.init()
        providers = drop_db(domain)
        print(f"{name}: schema dropped ({', '.join(providers) or 'no relational provider configured'})")


def build_parser():
    parser = argparse.ArgumentParser(description="Vitrine database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (("setup-db", "Create database tables"), ("drop-db", "Drop database tables")):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to act on (default: all)",
        )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases(args.domain)
    elif args.command == "drop-db":
        drop_databases(args.domain)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
