"""
Pytest configuration and shared fixtures

Fun fact: The name "conftest" comes from pytest's configuration testing
framework. Files named conftest.py are automatically discovered and their
fixtures are available to all tests in the same directory and subdirectories!
"""

import pytest

from tuid.kernel.entropy import ENTROPY_MASK, SequenceEntropySource
from tuid.kernel.policy import IdPolicy
from tuid.kernel.time import Instant, TestTimeProvider

from tests.helpers import EXAMPLE_ENTROPY, EXAMPLE_TIMESTAMP


@pytest.fixture
def example_instant() -> Instant:
    """The creation instant embedded in EXAMPLE_ID"""
    return Instant.parse(EXAMPLE_TIMESTAMP)


@pytest.fixture
def test_time(example_instant: Instant) -> TestTimeProvider:
    """
    Provide a controllable time provider for deterministic tests

    Starts at the instant embedded in EXAMPLE_ID.
    """
    return TestTimeProvider(example_instant)


@pytest.fixture
def fixed_entropy() -> SequenceEntropySource:
    """Entropy source cycling through a few edge values"""
    return SequenceEntropySource([EXAMPLE_ENTROPY, 0, 1, ENTROPY_MASK])


@pytest.fixture
def policy() -> IdPolicy:
    """Provide the default policy (2000-01-01..2100-01-01 UTC)"""
    return IdPolicy()
