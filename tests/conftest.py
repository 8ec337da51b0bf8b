"""
Fixtures used in the tests
"""
import pytest

from netparams.params import Network, get_registry


@pytest.fixture(autouse=True)
def clean_registry():
    """
    Every test starts Unselected and leaves the unittest profile as it found it
    """
    registry = get_registry()
    registry.select(Network.UNITTEST)
    saved = registry.modifiable_params().current()
    registry.reset()

    yield registry

    registry.select(Network.UNITTEST)
    registry.modifiable_params().apply(saved)
    registry.reset()
