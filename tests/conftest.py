import logging

import pytest

from mandelgrid.config import RenderConfig
from mandelgrid.geometry import PlaneRegion
from mandelgrid.numeric.complex_number import ComplexNumber


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("mandelgrid")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def full_region():
    return PlaneRegion(ComplexNumber(-2.0, 2.0), ComplexNumber(2.0, -2.0))


@pytest.fixture
def small_config(full_region):
    return RenderConfig(region=full_region, width=12, height=9, max_iterations=30)
