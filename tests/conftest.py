"""Shared fixtures for the tissuesim test suite."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator

import numpy as np
import pytest
from numpy.random import Generator

from tissuesim.infection.engine import InfectionEngine
from tissuesim.simulation.config import SimulationConfig
from tissuesim.simulation.simulation import Simulation
from tissuesim.tissue.population import PopulationTracker
from tissuesim.tissue.tissue import Tissue


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def tissue() -> Tissue:
    """An empty tissue."""
    return Tissue(name="T1")


@pytest.fixture
def population(tissue: Tissue) -> PopulationTracker:
    """Default-strength counters subscribed to ``tissue``."""
    return PopulationTracker.attach(tissue)


@pytest.fixture
def engine(tissue: Tissue, population: PopulationTracker) -> InfectionEngine:
    """An infection engine over ``tissue`` with auto-creation off."""
    return InfectionEngine(tissue, population)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def simulation(default_config: SimulationConfig) -> Simulation:
    """A simulation writing statistics into an in-memory buffer."""
    return Simulation(config=default_config, out=io.StringIO())


@pytest.fixture(autouse=True)
def _reset_tissuesim_logger() -> Iterator[None]:
    """Drop handlers installed by ``setup_logging`` between tests."""
    yield
    logger = logging.getLogger("tissuesim")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
