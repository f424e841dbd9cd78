"""
Pytest configuration and shared fixtures for Serval tests.
"""

import tempfile
from pathlib import Path
from typing import Generator, List

import pytest

from serval.adapter import HttpAdapter
from serval.logging_config import setup_logging
from serval.payload import ResponsePayload
from serval.transport.mock import MockTransport


API_HOST = "https://surveys.test/api/v1"
NAMESPACE = "/admin"


def create_test_config_content(host: str = API_HOST, namespace: str = NAMESPACE) -> str:
    """
    Create test configuration content.

    Args:
        host: Adapter host.
        namespace: Adapter namespace.

    Returns:
        YAML configuration content as string.
    """
    return f"""
adapter:
  host: {host}
  namespace: {namespace}
  headers:
    authorization: Bearer test-token
  timeout_s: 5

logging:
  level: DEBUG
  format: console
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_path(temp_dir: Path) -> Path:
    """Write a complete test configuration file and return its path."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text(create_test_config_content())
    return config_path


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def errors() -> List[ResponsePayload]:
    """Collects every payload handed to the adapter's error callback."""
    return []


@pytest.fixture
def adapter(transport: MockTransport, errors: List[ResponsePayload]) -> HttpAdapter:
    return HttpAdapter(
        host=API_HOST,
        namespace=NAMESPACE,
        on_error_callback=errors.append,
        transport=transport,
    )


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging():
    """Route structlog through stdlib logging so nothing prints to stdout."""
    setup_logging(level="DEBUG", json_format=False)
