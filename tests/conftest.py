"""
Shared pytest fixtures for the Gymnarium Application test suite.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from gymnarium_app.availables import (  # noqa: E402
    AgentVariant,
    EnvironmentVariant,
    ExitConditionVariant,
    VisualiserVariant,
)
from gymnarium_app.compatibility import Combination  # noqa: E402
from gymnarium_app.session import SessionBuilder  # noqa: E402


@pytest.fixture(autouse=True)
def close_figures():
    """Make sure no matplotlib figure outlives a test."""
    yield
    plt.close("all")


@pytest.fixture
def builder():
    """A session builder with the built-in variant implementations."""
    return SessionBuilder()


@pytest.fixture
def headless_combination():
    """GymMountainCar driven randomly without a window for a fixed number of episodes."""
    return Combination(
        EnvironmentVariant.GYM_MOUNTAIN_CAR,
        AgentVariant.RANDOM,
        VisualiserVariant.NONE,
        ExitConditionVariant.EPISODES_SIMULATED,
    )


@pytest.fixture
def windowed_input_combination():
    """Keyboard driven car in a 2D window that runs until the window is closed."""
    return Combination(
        EnvironmentVariant.CODE_BULLET_AI_LEARNS_TO_DRIVE,
        AgentVariant.INPUT,
        VisualiserVariant.PISTON_IN_2D,
        ExitConditionVariant.VISUALISER_CLOSED,
    )
