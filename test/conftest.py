"""Test configuration and shared fixtures."""

import pytest

from gridturb import BendoverSpectrum, GridProperties


def pytest_addoption(parser):
    """Add command line options to pytest."""
    parser.addoption("--runslow", action="store_true", default=False, help="run slow tests")

    parser.addoption(
        "--group",
        action="store",
        default=None,
        choices=["unit", "integration"],
        help="run specific test group",
    )


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")

    # Group markers
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
    config.addinivalue_line("markers", "turbulent_field: turbulent field synthesis tests")


def pytest_collection_modifyitems(config, items):
    """Modify pytest collection based on options."""
    group = config.getoption("--group")
    if group:
        items[:] = [item for item in items if group in item.keywords]

    if not config.getoption("--runslow"):
        skip_slow = pytest.mark.skip(reason="need --runslow option to run")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


@pytest.fixture
def spectrum():
    """Kolmogorov spectrum with bend-over, resolvable on a 32^3 grid of unit spacing."""
    return BendoverSpectrum(brms=1.0, lmin=2.0, lmax=32.0, lbendover=8.0)


@pytest.fixture
def grid_properties():
    """Cubic grid of 32^3 cells with unit spacing."""
    return GridProperties(n=32, spacing=1.0)
