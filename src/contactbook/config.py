"""Runtime settings from environment variables (optionally loaded from .env)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

BACKENDS = ("sqlite", "mongodb", "memory")

# Repo root when running from a checkout (src/contactbook/config.py).
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent


def load_env() -> None:
    """Load .env from repo root or the current directory, first one found."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


def _env(name: str, default: str) -> str:
    return (os.environ.get(name) or default).strip()


@dataclass(frozen=True)
class Settings:
    backend: str = "sqlite"
    sqlite_path: str = "data/contacts.db"
    mongodb_uri: str = "mongodb://127.0.0.1:27017"
    mongodb_db: str = "Contacts"
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown CONTACTS_BACKEND {self.backend!r}; expected one of {', '.join(BACKENDS)}."
            )

    @classmethod
    def from_env(cls) -> "Settings":
        origins = tuple(
            o.strip() for o in _env("CORS_ORIGINS", "*").split(",") if o.strip()
        )
        return cls(
            backend=_env("CONTACTS_BACKEND", "sqlite").lower(),
            sqlite_path=_env("SQLITE_PATH", "data/contacts.db"),
            mongodb_uri=_env("MONGODB_URI", "mongodb://127.0.0.1:27017"),
            mongodb_db=_env("MONGODB_DB", "Contacts"),
            cors_origins=origins or ("*",),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
