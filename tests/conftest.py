"""
Pytest configuration for the selectorkit test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- A call-counting symbol locator
- Qualified names for the sample test classes
"""

import os
import sys
from pathlib import Path

import pytest

# Make sample_cases importable by qualified name
TESTS_DIR = Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from selectorkit.logging_config import reset_logging, setup_logging
from selectorkit.resolution import SymbolLocator


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet operation."""
    os.environ.setdefault("SELECTORKIT_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True)


# ============================================================================
# LOCATOR FIXTURES
# ============================================================================

class CountingLocator(SymbolLocator):
    """SymbolLocator that records every locate call."""

    def __init__(self, delay: float = 0.0):
        super().__init__()
        self.container_calls = 0
        self.member_calls = 0
        self.delay = delay

    @property
    def calls(self) -> int:
        return self.container_calls + self.member_calls

    def locate_container(self, name):
        self.container_calls += 1
        if self.delay:
            import time
            time.sleep(self.delay)
        return super().locate_container(name)

    def locate_member(self, container, member_name, parameter_types=None):
        self.member_calls += 1
        if self.delay:
            import time
            time.sleep(self.delay)
        return super().locate_member(container, member_name, parameter_types)


@pytest.fixture
def counting_locator():
    return CountingLocator()


@pytest.fixture
def factory(counting_locator):
    from selectorkit.discovery import SelectorFactory
    return SelectorFactory(counting_locator)


# ============================================================================
# SAMPLE CLASS FIXTURES
# ============================================================================

@pytest.fixture
def sample_module() -> str:
    """Module name under which sample_cases was imported."""
    import sample_cases
    return sample_cases.__name__


@pytest.fixture
def local_case_name(sample_module) -> str:
    return f"{sample_module}.LocalTestCase"


@pytest.fixture
def resources_dir() -> Path:
    return TESTS_DIR / "resources"
