import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# Point the module-level repository at a throwaway SQLite file before the app
# (and its config) is imported.
_DB_DIR = tempfile.mkdtemp(prefix="thirdspace-tests-")
os.environ.setdefault("THIRDSPACE_DB_URI", f"sqlite:///{os.path.join(_DB_DIR, 'session.db')}")

from thirdspace.adapters.sql_repo import SqlSavedModelRepository  # noqa: E402
from thirdspace.api.http import app, get_model_repo  # noqa: E402


@pytest.fixture(scope="session")
def client():
    return TestClient(app)


@pytest.fixture
def repo(tmp_path):
    return SqlSavedModelRepository(f"sqlite:///{tmp_path / 'models.db'}")


@pytest.fixture
def repo_client(repo):
    """Client wired to a fresh, empty repository for this test only."""
    app.dependency_overrides[get_model_repo] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_model_repo, None)
