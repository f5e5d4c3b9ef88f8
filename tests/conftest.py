import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """configure_logging binds the current sys.stderr; drop it after each test."""
    yield
    structlog.reset_defaults()
