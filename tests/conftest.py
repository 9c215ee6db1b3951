import logging

import matplotlib

matplotlib.use("Agg")

import pytest

from nonmyopic.payoffs import (BATTLE_OF_THE_SEXES, COORDINATION, EXTENDED_COORDINATION,
                               MATCHING_PENNIES, PRISONERS_DILEMMA, PayoffMatrix2x2,
                               PayoffMatrix3x3)


@pytest.fixture
def prisoners_dilemma():
    return PayoffMatrix2x2.from_cells(PRISONERS_DILEMMA)


@pytest.fixture
def matching_pennies():
    return PayoffMatrix2x2.from_cells(MATCHING_PENNIES)


@pytest.fixture
def coordination():
    return PayoffMatrix2x2.from_cells(COORDINATION)


@pytest.fixture
def battle_of_the_sexes():
    return PayoffMatrix2x2.from_cells(BATTLE_OF_THE_SEXES)


@pytest.fixture
def extended_coordination():
    return PayoffMatrix3x3.from_cells(EXTENDED_COORDINATION)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("nonmyopic")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
