#!/usr/bin/env python3
"""Initialize contact storage for the configured backend.

Creates the SQLite table and indexes, or the MongoDB indexes. With --reset,
deletes every existing contact first; with --seed, adds three sample contacts
(skipping any whose email is already stored). Run from repo root with .env
(CONTACTS_BACKEND, SQLITE_PATH, MONGODB_URI, MONGODB_DB). Idempotent without --reset.
"""
import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from contactbook.application import ContactCreated, ContactService  # noqa: E402
from contactbook.config import Settings, load_env  # noqa: E402
from contactbook.infrastructure import open_backend  # noqa: E402

SAMPLE_CONTACTS = [
    ("John Doe", "john.doe@example.com"),
    ("Jane Smith", "jane.smith@example.com"),
    ("Bob Johnson", "bob.johnson@example.com"),
]


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--reset", action="store_true", help="delete all contacts first")
    parser.add_argument("--seed", action="store_true", help="insert sample contacts")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    load_env()
    settings = Settings.from_env()
    backend = open_backend(settings)
    try:
        service = ContactService(backend.repository)
        if args.reset:
            removed = 0
            for contact in service.get_all():
                removed += service.delete(contact.id)
            print(f"Removed {removed} existing contact(s).")
        if args.seed:
            added = 0
            for name, email in SAMPLE_CONTACTS:
                if isinstance(service.create(name, email), ContactCreated):
                    added += 1
            print(f"Inserted {added} sample contact(s).")
        print(f"Storage ready ({backend.name}): {service.count()} contact(s).")
        return 0
    finally:
        backend.close()


if __name__ == "__main__":
    sys.exit(main())
