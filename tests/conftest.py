"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from railbird.game.cards import parse_cards


@pytest.fixture
def rng():
    """Seeded generator so Monte Carlo tests are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def cards():
    """Shorthand parser: cards("Ah Kd 2c")."""
    return parse_cards


@pytest.fixture
def board_flop():
    return parse_cards("Ks 7d 2c")


@pytest.fixture
def board_river():
    return parse_cards("Ks 7d 2c 9h 3s")
