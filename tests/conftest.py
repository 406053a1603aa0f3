import numpy as np
import pytest

from monty_hall.types import GameLayout, Label

P, D = Label.PRIZE, Label.DECOY


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def all_layouts():
    """The three valid layouts, prize behind D1, D2, D3."""
    return [
        GameLayout((P, D, D)),
        GameLayout((D, P, D)),
        GameLayout((D, D, P)),
    ]
