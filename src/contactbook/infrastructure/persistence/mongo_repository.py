"""MongoDB implementation of ContactRepository.

Collection: contacts, documents {_id: ObjectId, name, email, createdAt}.
A unique index on email is the duplicate guard (server error code 11000).
"""

import logging
import re
from contextlib import contextmanager
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from contactbook.application.errors import DuplicateKeyError, StorageError
from contactbook.domain import Contact
from contactbook.domain.entities import utcnow

logger = logging.getLogger(__name__)

COLLECTION_NAME = "contacts"

_SORT = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def connect_mongo(uri: str) -> MongoClient:
    """Create a client for uri. The caller owns it and must close it."""
    client = MongoClient(uri, tz_aware=True)
    logger.info("Connected to MongoDB at %s", uri)
    return client


def ensure_mongo_indexes(collection: Collection) -> None:
    """Unique email, plus name and createdAt for lookups and ordering. Idempotent."""
    collection.create_index([("email", ASCENDING)], unique=True)
    collection.create_index([("name", ASCENDING)])
    collection.create_index([("createdAt", DESCENDING)])


def _to_millis(dt: datetime) -> datetime:
    """BSON datetimes keep milliseconds only."""
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def _parse_id(contact_id: str) -> ObjectId | None:
    if not isinstance(contact_id, str) or not ObjectId.is_valid(contact_id):
        return None
    return ObjectId(contact_id)


@contextmanager
def _storage_errors(action: str):
    try:
        yield
    except PyMongoError as exc:
        logger.exception("MongoDB error while %s", action)
        raise StorageError(f"Failed {action}") from exc


class MongoContactRepository:
    """Stores contacts in a MongoDB collection. ObjectIds are surfaced as hex strings."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    def list_all(self) -> list[Contact]:
        with _storage_errors("listing contacts"):
            docs = list(self._collection.find({}).sort(_SORT))
        return [_doc_to_contact(doc) for doc in docs]

    def find_by_email(self, email: str) -> Contact | None:
        with _storage_errors("getting contact by email"):
            doc = self._collection.find_one({"email": email})
        return _doc_to_contact(doc) if doc else None

    def find_by_id(self, contact_id: str) -> Contact | None:
        oid = _parse_id(contact_id)
        if oid is None:
            return None
        with _storage_errors("getting contact by id"):
            doc = self._collection.find_one({"_id": oid})
        return _doc_to_contact(doc) if doc else None

    def insert(self, name: str, email: str) -> Contact:
        doc = {"name": name, "email": email, "createdAt": _to_millis(utcnow())}
        try:
            result = self._collection.insert_one(doc)
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(email) from exc
        except PyMongoError as exc:
            logger.exception("MongoDB error while adding contact")
            raise StorageError("Failed adding contact") from exc
        return Contact(
            id=str(result.inserted_id),
            name=name,
            email=email,
            created_at=doc["createdAt"],
        )

    def delete_by_id(self, contact_id: str) -> bool:
        oid = _parse_id(contact_id)
        if oid is None:
            return False
        with _storage_errors("deleting contact"):
            result = self._collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    def search(self, query: str) -> list[Contact]:
        pattern = {"$regex": re.escape(query), "$options": "i"}
        with _storage_errors("searching contacts"):
            docs = list(
                self._collection.find(
                    {"$or": [{"name": pattern}, {"email": pattern}]}
                ).sort(_SORT)
            )
        return [_doc_to_contact(doc) for doc in docs]

    def count(self) -> int:
        with _storage_errors("counting contacts"):
            return self._collection.count_documents({})


def _doc_to_contact(doc: dict) -> Contact:
    created_at = doc["createdAt"]
    # Clients opened without tz_aware=True hand back naive UTC datetimes.
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Contact(
        id=str(doc["_id"]),
        name=doc["name"],
        email=doc["email"],
        created_at=created_at,
    )
