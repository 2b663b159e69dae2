"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Tests driving the loader end to end
"""

import sys
from pathlib import Path

import pytest

# Add the repository root to the path for imports
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from rdfloader import GraphLoader, LoaderConfig

RESOURCE_PACKAGE = "tests.resources"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Tests driving the loader end to end")


@pytest.fixture
def resources_dir():
    """Directory holding the sample documents."""
    return Path(__file__).resolve().parent / "resources"


@pytest.fixture
def loader():
    """Loader anchored at the test resources package."""
    return GraphLoader(LoaderConfig(resource_package=RESOURCE_PACKAGE))


@pytest.fixture
def apple_ttl(resources_dir):
    """Turtle bytes of the apple sample."""
    return (resources_dir / "apple.ttl").read_bytes()
