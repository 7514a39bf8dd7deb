"""
Pytest configuration for spring_lab tests.

Ensures the project root is in sys.path and provides shared fixtures.
"""

import os
import sys

import pytest

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from spring_lab.core.vector import Vector2D  # noqa: E402
from spring_lab.model.config import MassConfig, SimulationConfig, SpringConfig  # noqa: E402
from spring_lab.model.spring_lab_model import SpringLabModel  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication shared by all Qt tests."""
    from PySide6.QtCore import QCoreApplication
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def small_config():
    """
    One spring anchored at (0.5, 1.2) with natural length 0.3 (bottom at 0.9),
    a second spring far to the right, and two free masses. No damping.
    """
    return SimulationConfig(
        friction=0.0,
        ceiling_y=1.2,
        springs=[SpringConfig(0.5, natural_resting_length=0.3), SpringConfig(1.0, natural_resting_length=0.3)],
        masses=[
            MassConfig(0.1, Vector2D(0.2, 0.5), name="m1"),
            MassConfig(0.25, Vector2D(0.3, 0.5), name="m2"),
        ],
    )


@pytest.fixture
def model(small_config):
    return SpringLabModel(small_config)
