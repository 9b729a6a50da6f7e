"""Review intake database management CLI.

Creates or drops the relational schema used by the ``production`` overlay
(PostgreSQL). The in-memory provider needs no schema.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop tables
"""

import argparse
import sys


def setup_database():
    """Create the review tables."""
    from reviews.domain import reviews
    from reviews.utils.db import setup_db

    print("Initializing reviews domain...")
    reviews.init()
    print("Creating reviews database schema...")
    setup_db(reviews)
    print("Done.")


def drop_database():
    """Drop the review tables."""
    from reviews.domain import reviews
    from reviews.utils.db import drop_db

    print("Initializing reviews domain...")
    reviews.init()
    print("Dropping reviews database schema...")
    drop_db(reviews)
    print("Done.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Review intake database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create the review tables")
    subparsers.add_parser("drop-db", help="Drop the review tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
