from pathlib import Path
import os
import pytest

# Point the app at a throwaway SQLite file before `skilltrack` is imported.
TEST_DB = Path(__file__).resolve().parents[1] / "test_skilltrack.db"
if TEST_DB.exists():
    TEST_DB.unlink()
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ["ADMIN_USERNAMES"] = "admin"
os.environ.pop("REMOTE_TABLE_URL", None)
os.environ.pop("REMOTE_TABLE_KEY", None)


class StaticSource:
    """Table source returning fixed rows and counting calls."""

    def __init__(self, rows):
        self.rows = rows
        self.calls = []

    async def select(self, query):
        self.calls.append(query)
        return list(self.rows)


class FailingSource:
    def __init__(self, exc=None):
        self.exc = exc
        self.calls = 0

    async def select(self, query):
        from skilltrack.utils.table_source import RemoteFetchFailure
        self.calls += 1
        raise self.exc or RemoteFetchFailure("services: HTTP 503")


@pytest.fixture
def static_source():
    return StaticSource


@pytest.fixture
def failing_source():
    return FailingSource


@pytest.fixture(scope="session", autouse=True)
def cleanup_db():
    """Remove the test database once the session finishes."""
    yield
    try:
        TEST_DB.unlink()
    except OSError:
        pass
