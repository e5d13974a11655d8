"""Integration test fixtures - in-process API client over the built-in knowledge base"""

import pytest
from fastapi.testclient import TestClient

from modassist.main import app


@pytest.fixture(scope="module")
def client():
    # No context manager: lifespan (file logging setup) is not needed here
    return TestClient(app)
