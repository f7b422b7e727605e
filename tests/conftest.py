"""
Pytest configuration and common fixtures for gaevo testing.

This file contains shared fixtures and configuration that can be used
across all test modules.
"""

import pytest
import logging
import random
import tempfile
import shutil
from pathlib import Path

# Add the project root to Python path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from gaevo.core import set_config
from gaevo.genetic import City, TspCandidate


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def square_cities():
    """Unit square; the optimal tour has length 4.0 and fitness 250.0."""
    return (City(0, 0), City(0, 1), City(1, 1), City(1, 0))


@pytest.fixture
def ring_cities():
    """Twelve cities on a circle, listed in tour order."""
    import math
    return tuple(
        City(10 * math.cos(2 * math.pi * i / 12), 10 * math.sin(2 * math.pi * i / 12))
        for i in range(12)
    )


@pytest.fixture
def make_population():
    """Factory for random TSP populations."""
    def _make(cities, size, rng):
        return [TspCandidate.random(cities, rng) for _ in range(size)]
    return _make


@pytest.fixture
def sample_config_data():
    """Sample configuration data for testing."""
    return {
        "problem": {
            "num_cities": 8,
            "width": 50.0,
            "height": 20.0
        },
        "evolution": {
            "population_size": 20,
            "mutation_rate": 0.05,
            "selection_fraction": 0.6,
            "elitism_fraction": 0.1,
            "selection_method": "roulette",
            "max_generations": 15,
            "seed": 99
        },
        "logging": {
            "level": "DEBUG",
            "enable_file": False
        }
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Create a temporary config file for testing."""
    import json
    config_path = temp_dir / "test_config.json"
    with open(config_path, 'w') as f:
        json.dump(sample_config_data, f, indent=2)
    return config_path


@pytest.fixture
def empty_env_file(temp_dir):
    """An existing but empty .env file so no stray project .env is loaded."""
    env_path = temp_dir / "empty.env"
    env_path.write_text("")
    return env_path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers and filters installed by setup_logging during a test."""
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    filters = list(root.filters)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for filter_obj in list(root.filters):
        if filter_obj not in filters:
            root.removeFilter(filter_obj)
    root.setLevel(level)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep GAEVO_* variables and the global config from leaking between tests."""
    for name in ("GAEVO_SEED", "GAEVO_POPULATION_SIZE", "GAEVO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


# Test markers for organizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "core: mark test as testing core functionality"
    )
    config.addinivalue_line(
        "markers", "config: mark test as testing configuration"
    )
    config.addinivalue_line(
        "markers", "logging: mark test as testing logging"
    )
    config.addinivalue_line(
        "markers", "genetic: mark test as testing the genetic algorithm"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as testing the command line interface"
    )
    config.addinivalue_line(
        "markers", "utils: mark test as testing utilities"
    )
