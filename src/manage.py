"""Storefront database management CLI.

Usage:
    python src/manage.py setup-db       # Create all tables
    python src/manage.py drop-db        # Drop all tables
    python src/manage.py seed           # Demo accounts and catalogue
    python src/manage.py create-admin --name "Ada" --email ada@example.com --password s3cret!
"""

import argparse
import sys

from shared.exceptions import StorefrontError


def setup_database():
    from shared.utils.db import setup_db

    print("Creating database schema...")
    setup_db()
    print("Done.")


def drop_database():
    from shared.utils.db import drop_db

    print("Dropping database schema...")
    drop_db()
    print("Done.")


def seed():
    from app import seed_demo_data
    from shared.utils.db import setup_db

    setup_db()
    seed_demo_data()
    print("Demo data ready.")


def create_admin(name, email, password):
    from identity.user.registration import bootstrap_admin
    from shared.utils.db import setup_db, unit_of_work

    setup_db()
    with unit_of_work() as session:
        user = bootstrap_admin(session, name, email, password)
        print(f"Administrator {user.email} created (id={user.id}).")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Create demo accounts and the demo catalogue")

    admin_parser = subparsers.add_parser("create-admin", help="Create an administrator account")
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--password", required=True)

    args = parser.parse_args(argv)

    try:
        if args.command == "setup-db":
            setup_database()
        elif args.command == "drop-db":
            drop_database()
        elif args.command == "seed":
            seed()
        elif args.command == "create-admin":
            create_admin(args.name, args.email, args.password)
    except StorefrontError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
