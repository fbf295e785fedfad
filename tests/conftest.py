"""Shared test fixtures."""

from typing import Callable

import pytest

from vizsteps.schemas import VizState
from .factories import create_network_state, create_state


@pytest.fixture
def state_factory() -> Callable[..., VizState]:
    """Fixture that returns the tree map state factory function."""
    return create_state


@pytest.fixture
def state() -> VizState:
    """Return a tree map state with fresh data and all flags raised."""
    return create_state()


@pytest.fixture
def network_state() -> VizState:
    """Return a network state whose type has no setup routine."""
    return create_network_state(with_setup=False)

