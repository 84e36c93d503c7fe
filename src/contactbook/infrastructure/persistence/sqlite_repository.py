"""SQLite implementation of ContactRepository.

Table: contacts(id INTEGER PRIMARY KEY AUTOINCREMENT, name, email UNIQUE, created_at).
created_at is stored as an ISO-8601 UTC string with microseconds, so text
ordering matches time ordering.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

from contactbook.application.errors import DuplicateKeyError, StorageError
from contactbook.domain import Contact
from contactbook.domain.entities import utcnow

logger = logging.getLogger(__name__)

_PRAGMAS = (
    "PRAGMA foreign_keys = ON",
    "PRAGMA journal_mode = WAL",
    "PRAGMA synchronous = NORMAL",
    "PRAGMA temp_store = MEMORY",
)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS contacts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL CHECK(length(name) > 0 AND length(name) <= 50),
        email TEXT NOT NULL UNIQUE,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_contacts_email ON contacts(email)",
    "CREATE INDEX IF NOT EXISTS idx_contacts_name ON contacts(name)",
    "CREATE INDEX IF NOT EXISTS idx_contacts_created_at ON contacts(created_at DESC)",
)

_COLUMNS = "id, name, email, created_at"
_ORDER = "ORDER BY created_at DESC, id DESC"


def connect_sqlite(path: str | Path) -> sqlite3.Connection:
    """Open the database file (created if missing) and make sure the schema exists.

    The caller owns the connection and must close it. Autocommit mode: every
    statement is its own transaction.
    """
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False, isolation_level=None)
    conn.row_factory = sqlite3.Row
    for pragma in _PRAGMAS:
        conn.execute(pragma)
    ensure_sqlite_schema(conn)
    logger.info("Connected to SQLite database at %s", path)
    return conn


def ensure_sqlite_schema(conn: sqlite3.Connection) -> None:
    for statement in _SCHEMA:
        conn.execute(statement)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _parse_id(contact_id: str) -> int | None:
    # Plain ASCII digits only, so "+1", " 1" or "0_1" never alias contact 1.
    if not isinstance(contact_id, str) or not (contact_id.isascii() and contact_id.isdigit()):
        return None
    return int(contact_id)


@contextmanager
def _storage_errors(action: str):
    try:
        yield
    except sqlite3.Error as exc:
        logger.exception("SQLite error while %s", action)
        raise StorageError(f"Failed {action}") from exc


class SqliteContactRepository:
    """Stores contacts in the SQLite contacts table. Integer keys are surfaced as strings."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def _fetch_one(self, sql: str, params: tuple, action: str) -> Contact | None:
        with _storage_errors(action):
            row = self._conn.execute(sql, params).fetchone()
        return _row_to_contact(row) if row else None

    def _fetch_all(self, sql: str, params: tuple, action: str) -> list[Contact]:
        with _storage_errors(action):
            rows = self._conn.execute(sql, params).fetchall()
        return [_row_to_contact(row) for row in rows]

    def list_all(self) -> list[Contact]:
        return self._fetch_all(
            f"SELECT {_COLUMNS} FROM contacts {_ORDER}", (), "listing contacts"
        )

    def find_by_email(self, email: str) -> Contact | None:
        return self._fetch_one(
            f"SELECT {_COLUMNS} FROM contacts WHERE email = ?",
            (email,),
            "getting contact by email",
        )

    def find_by_id(self, contact_id: str) -> Contact | None:
        key = _parse_id(contact_id)
        if key is None:
            return None
        try:
            return self._fetch_one(
                f"SELECT {_COLUMNS} FROM contacts WHERE id = ?",
                (key,),
                "getting contact by id",
            )
        except OverflowError:
            # Larger than SQLite's 64-bit integer range; cannot exist.
            return None

    def insert(self, name: str, email: str) -> Contact:
        created_at = utcnow()
        try:
            # RETURNING reads the id from this statement; lastrowid is per connection
            # and may already belong to another thread's insert.
            rows = self._conn.execute(
                "INSERT INTO contacts (name, email, created_at) VALUES (?, ?, ?) RETURNING id",
                (name, email, _datetime_to_iso(created_at)),
            ).fetchall()
        except sqlite3.IntegrityError as exc:
            if exc.sqlite_errorcode == sqlite3.SQLITE_CONSTRAINT_UNIQUE:
                raise DuplicateKeyError(email) from exc
            logger.exception("SQLite constraint error while adding contact")
            raise StorageError("Failed adding contact") from exc
        except sqlite3.Error as exc:
            logger.exception("SQLite error while adding contact")
            raise StorageError("Failed adding contact") from exc
        return Contact(
            id=str(rows[0]["id"]),
            name=name,
            email=email,
            created_at=created_at,
        )

    def delete_by_id(self, contact_id: str) -> bool:
        key = _parse_id(contact_id)
        if key is None:
            return False
        try:
            with _storage_errors("deleting contact"):
                cursor = self._conn.execute("DELETE FROM contacts WHERE id = ?", (key,))
        except OverflowError:
            return False
        return cursor.rowcount > 0

    def search(self, query: str) -> list[Contact]:
        # LIKE folds case for ASCII only; non-ASCII letters match case-sensitively.
        term = f"%{_escape_like(query)}%"
        return self._fetch_all(
            f"""
            SELECT {_COLUMNS} FROM contacts
            WHERE name LIKE ? ESCAPE '\\' OR email LIKE ? ESCAPE '\\'
            {_ORDER}
            """,
            (term, term),
            "searching contacts",
        )

    def count(self) -> int:
        with _storage_errors("counting contacts"):
            row = self._conn.execute("SELECT COUNT(*) AS count FROM contacts").fetchone()
        return row["count"]


def _datetime_to_iso(dt: datetime) -> str:
    return dt.isoformat(timespec="microseconds")


def _iso_to_datetime(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _row_to_contact(row: sqlite3.Row) -> Contact:
    return Contact(
        id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        created_at=_iso_to_datetime(row["created_at"]),
    )
