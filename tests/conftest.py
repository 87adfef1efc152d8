import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest
from matplotlib.figure import Figure

from procanim.workflows.viewer import prepare_axes


@pytest.fixture
def screen_axes():
    """Axes set up like the viewer canvas (1280x800, y down)."""
    fig = Figure(figsize=(12.8, 8.0), dpi=100)
    ax = fig.add_axes([0, 0, 1, 1])
    prepare_axes(ax, 1280, 800, (40, 44, 52))
    return ax


@pytest.fixture
def center():
    return np.array([640.0, 400.0])
