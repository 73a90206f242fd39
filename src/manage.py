"""Storefront database management CLI.

Creates and drops the relational schema for the storefront domain. The
config overlay comes from PROTEAN_ENV, so run it with the same environment
the app will use.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys

from storefront.domain import storefront
from storefront.utils.db import drop_db, setup_db


def setup_databases(domain=storefront):
    """Create the database schema for an initialized domain."""
    print(f"Creating {domain.name} database schema...")
    setup_db(domain)
    print(f"  {domain.name} schema ready.")
    print("Done.")


def drop_databases(domain=storefront):
    """Drop the database schema for an initialized domain."""
    print(f"Dropping {domain.name} database schema...")
    drop_db(domain)
    print(f"  {domain.name} schema dropped.")
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    print(f"Initializing {storefront.name} domain...")
    storefront.init()

    if args.command == "setup-db":
        setup_databases(storefront)
    elif args.command == "drop-db":
        drop_databases(storefront)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
