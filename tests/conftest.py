import os
import sys

import pytest

# Ensure the repository root is on sys.path so imports like `import app` work
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from fastapi.testclient import TestClient
from app.main import create_app
from tests.fakes import InMemoryStore

@pytest.fixture
def store():
    return InMemoryStore()

@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c
