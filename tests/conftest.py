import copy
from threading import Lock
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from catalog_api.core.config import Settings
from catalog_api.database import PRODUCTS_COLLECTION, USERS_COLLECTION, DocumentCollection


class FakeCollection:
    """In-memory stand-in for the pymongo collection methods the gateway uses."""

    def __init__(self, *, fail: bool = False):
        self.documents: list[dict] = []
        self.fail = fail
        self._lock = Lock()

    def _check(self) -> None:
        if self.fail:
            raise PyMongoError('connection refused')

    def _matches(self, document: dict, query: dict) -> bool:
        return all(document.get(key) == value for key, value in query.items())

    def insert_one(self, document: dict):
        self._check()
        with self._lock:
            document.setdefault('_id', ObjectId())
            self.documents.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document['_id'])

    def find(self, query: dict | None = None):
        self._check()
        return iter([copy.deepcopy(document) for document in self.documents if self._matches(document, query or {})])

    def find_one(self, query: dict):
        self._check()
        for document in self.documents:
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    def find_one_and_update(self, query: dict, update: dict, return_document=ReturnDocument.BEFORE):
        self._check()
        for document in self.documents:
            if self._matches(document, query):
                before = copy.deepcopy(document)
                document.update(update['$set'])
                return copy.deepcopy(document) if return_document == ReturnDocument.AFTER else before
        return None

    def find_one_and_delete(self, query: dict):
        self._check()
        for index, document in enumerate(self.documents):
            if self._matches(document, query):
                return self.documents.pop(index)
        return None


@pytest.fixture
def settings() -> Settings:
    return Settings(jwt_secret_key='test-secret')


@pytest.fixture
def product_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def user_collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def products(product_collection: FakeCollection) -> DocumentCollection:
    return DocumentCollection(PRODUCTS_COLLECTION, product_collection)


@pytest.fixture
def users(user_collection: FakeCollection) -> DocumentCollection:
    return DocumentCollection(USERS_COLLECTION, user_collection)


@pytest.fixture
def broken_products() -> DocumentCollection:
    return DocumentCollection(PRODUCTS_COLLECTION, FakeCollection(fail=True))


@pytest.fixture
def broken_users() -> DocumentCollection:
    return DocumentCollection(USERS_COLLECTION, FakeCollection(fail=True))
