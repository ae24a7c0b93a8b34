import logging
from threading import Lock
from typing import Any

from bson import ObjectId
from pymongo import MongoClient, ReturnDocument
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from catalog_api.core.config import Settings
from catalog_api.core.errors import StoreError


logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "fullstack_game"
USERS_COLLECTION = "usuarios"
PRODUCTS_COLLECTION = "productos"

_client_lock = Lock()
_client: MongoClient | None = None


def connect(settings: Settings) -> bool:
    """Open the process-wide client and ping the server.

    Failures are logged and swallowed so the API still starts; requests then fail
    at the store operation instead.
    """
    global _client

    with _client_lock:
        if _client is None:
            try:
                _client = MongoClient(
                    settings.mongo_url,
                    serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
                )
            except (PyMongoError, ValueError):
                # Malformed URIs raise either ConfigurationError or ValueError.
                logger.exception('Could not create MongoDB client. Check MONGO_URL.')
                return False

        try:
            _client.admin.command('ping')
        except PyMongoError:
            logger.exception('MongoDB connection failed. Check MONGO_URL and that the server is running.')
            return False

    logger.info('Connected to MongoDB')
    return True


def close() -> None:
    global _client

    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None


def get_database() -> Database:
    if _client is None:
        raise StoreError('MongoDB client is not initialized')
    return _client.get_default_database(default=DEFAULT_DATABASE)


def parse_object_id(value: Any) -> ObjectId | None:
    # ObjectId(None) generates a new id instead of failing.
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def serialize_document(document: dict[str, Any]) -> dict[str, Any]:
    serialized = dict(document)
    if isinstance(serialized.get('_id'), ObjectId):
        serialized['_id'] = str(serialized['_id'])
    return serialized


class DocumentCollection:
    """One named collection exposed as insert / list / replace / delete.

    Every pymongo failure surfaces as ``StoreError``. ``None`` from the by-id
    operations means the id is unknown or not a valid ObjectId.
    """

    def __init__(self, name: str, collection: Collection | None = None) -> None:
        self.name = name
        self._collection = collection

    def _get(self) -> Collection:
        if self._collection is not None:
            return self._collection
        return get_database()[self.name]

    def insert(self, record: dict[str, Any]) -> dict[str, Any]:
        document = dict(record)
        try:
            result = self._get().insert_one(document)
        except PyMongoError as exc:
            raise StoreError(f'insert into {self.name} failed') from exc
        document['_id'] = result.inserted_id
        return serialize_document(document)

    def list_all(self) -> list[dict[str, Any]]:
        try:
            return [serialize_document(document) for document in self._get().find()]
        except PyMongoError as exc:
            raise StoreError(f'listing {self.name} failed') from exc

    def find_one_by(self, **filters: Any) -> dict[str, Any] | None:
        try:
            document = self._get().find_one(filters)
        except PyMongoError as exc:
            raise StoreError(f'lookup in {self.name} failed') from exc
        return serialize_document(document) if document is not None else None

    def replace_by_id(self, record_id: str, fields: dict[str, Any]) -> dict[str, Any] | None:
        object_id = parse_object_id(record_id)
        if object_id is None:
            return None

        try:
            if fields:
                document = self._get().find_one_and_update(
                    {'_id': object_id},
                    {'$set': fields},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                # $set rejects an empty document; nothing to change.
                document = self._get().find_one({'_id': object_id})
        except PyMongoError as exc:
            raise StoreError(f'update in {self.name} failed') from exc
        return serialize_document(document) if document is not None else None

    def delete_by_id(self, record_id: str) -> dict[str, Any] | None:
        object_id = parse_object_id(record_id)
        if object_id is None:
            return None

        try:
            document = self._get().find_one_and_delete({'_id': object_id})
        except PyMongoError as exc:
            raise StoreError(f'delete from {self.name} failed') from exc
        return serialize_document(document) if document is not None else None


def get_products() -> DocumentCollection:
    return DocumentCollection(PRODUCTS_COLLECTION)


def get_users() -> DocumentCollection:
    return DocumentCollection(USERS_COLLECTION)
