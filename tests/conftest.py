"""Shared fixtures: a fresh store per test and a client bound to it."""

import pytest
from fastapi.testclient import TestClient

from itemdb.main import create_app
from itemdb.storage import ItemStore


@pytest.fixture
def store() -> ItemStore:
    return ItemStore()


@pytest.fixture
def client(store: ItemStore) -> TestClient:
    return TestClient(create_app(store))
