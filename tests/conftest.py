"""
Pytest configuration and shared fixtures.
"""

import itertools
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from retailtransform.database import get_session, init_database
from retailtransform.logger import StructuredLogger, reset_logger
from retailtransform.models import RoleFilter
from retailtransform.sample_data import seed_database

SAMPLE_DATA_PATH = Path(__file__).parent.parent / "scripts" / "sample_data.json"


@pytest.fixture(autouse=True)
def fresh_global_logger():
    """Every test starts and ends without a global logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def quiet_logger(tmp_path) -> StructuredLogger:
    """Logger with no handlers attached to stderr or files."""
    return StructuredLogger(name="test", level="DEBUG", log_dir=tmp_path, enable_console=False)


@pytest.fixture
def english_roles() -> RoleFilter:
    """Role filter using English labels."""
    return RoleFilter(include="author", exclude="author(original)")


@pytest.fixture
def make_store(tmp_path) -> Callable[[Dict[str, Any]], Path]:
    """Factory building a seeded SQLite store and returning its path."""
    counter = itertools.count()

    def _make(data: Dict[str, Any]) -> Path:
        db_path = tmp_path / f"store_{next(counter)}.db"
        init_database(db_path)
        session = get_session(db_path)
        try:
            seed_database(session, data)
        finally:
            session.close()
        return db_path

    return _make


@pytest.fixture
def open_session():
    """Open sessions on store files; all are closed at teardown."""
    sessions = []

    def _open(db_path: Path):
        session = get_session(db_path)
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()


@pytest.fixture
def book_catalog() -> Dict[str, Any]:
    """Three books covering: no author, plain author, original-language author only."""
    return {
        "products": [
            {"id": 1, "product_guid": "g1", "name": "Book A", "short_description": None},
            {"id": 2, "product_guid": "g2", "name": "Book B", "short_description": "desc"},
            {"id": 3, "product_guid": "g3", "name": "Book C", "short_description": "translated"},
        ],
        "characters": [
            {"id": 10, "name": "Jane Doe"},
            {"id": 11, "name": "Juana Doe"},
        ],
        "character_products": [
            {"product_id": 2, "character_id": 10, "charter_type": "author"},
            {"product_id": 3, "character_id": 11, "charter_type": "author(original)"},
        ],
    }


@pytest.fixture
def sample_data_path() -> Path:
    """Fixture file shipped with the seeding script."""
    return SAMPLE_DATA_PATH
