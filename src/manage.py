"""Shopfront database management CLI.

Usage:
    python src/manage.py setup-db                      # Create tables for every domain
    python src/manage.py drop-db --domain ordering     # Drop one domain's tables
"""

import argparse

DOMAIN_NAMES = ["catalogue", "ordering"]


def _domains(names=None):
    from catalogue.domain import catalogue
    from ordering.domain import ordering

    all_domains = {"catalogue": catalogue, "ordering": ordering}
    return {name: all_domains[name] for name in names or DOMAIN_NAMES}


def setup_databases(domains=None):
    """Create database schemas for the specified (or all) domains."""
    from shared.db import setup_db

    for name, domain in _domains(domains).items():
        domain.init()
        setup_db(domain)
        print(f"  {name} schema ready.")


def drop_databases(domains=None):
    """Drop database schemas for the specified (or all) domains."""
    from shared.db import drop_db

    for name, domain in _domains(domains).items():
        domain.init()
        drop_db(domain)
        print(f"  {name} schema dropped.")


COMMANDS = {
    "setup-db": (setup_databases, "Create all database tables"),
    "drop-db": (drop_databases, "Drop all database tables"),
}


def main():
    parser = argparse.ArgumentParser(description="Shopfront database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, (_, help_text) in COMMANDS.items():
        subparser = subparsers.add_parser(command, help=help_text)
        subparser.add_argument(
            "--domain",
            choices=DOMAIN_NAMES,
            nargs="*",
            help="Specific domain(s) to act on (default: all)",
        )

    args = parser.parse_args()
    action, _ = COMMANDS[args.command]
    action(args.domain)


if __name__ == "__main__":
    main()
