"""Root conftest.py for pytest configuration.

This file configures pytest for the entire project, ensuring:
- Proper Python path setup for imports
- Local-only Logfire configuration
- Shared fixtures across all tests
"""

import sys
from pathlib import Path

import logfire
import pytest


# ============================================================================
# Python Path Configuration
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom settings and ensure project root is in sys.path."""

    project_root = Path(__file__).parent.resolve()
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))

    # Register custom markers
    config.addinivalue_line(
        "markers",
        "integration: marks tests that exercise the FastAPI application lifecycle"
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests (fast, no external dependencies)"
    )

    # Tests never ship spans to the Logfire backend
    logfire.configure(
        service_name="blog-backend-tests",
        environment="test",
        send_to_logfire=False,
        console=False,
    )


# ============================================================================
# Shared Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def project_root():
    """Return the absolute path to the project root directory."""
    return Path(__file__).parent.resolve()


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Fixture to mock environment variables for testing.

    Usage:
        def test_something(mock_env_vars):
            mock_env_vars({"DB_HOST": "db.internal", "DEBUG": "true"})
    """
    def _set_env_vars(env_dict: dict):
        for key, value in env_dict.items():
            monkeypatch.setenv(key, value)

    return _set_env_vars


@pytest.fixture
def sqlite_url(tmp_path):
    """SQLAlchemy URL of a fresh SQLite file database."""
    return f"sqlite:///{tmp_path / 'blog.db'}"


@pytest.fixture
def db_manager():
    """A fresh DatabaseManager, closed after the test."""
    from database.manager import DatabaseManager

    manager = DatabaseManager()
    yield manager
    manager.close()
