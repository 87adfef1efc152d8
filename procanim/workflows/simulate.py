"""
Headless simulation: drive a scene along a scripted pointer path.
"""

import logging
from typing import Dict, Any, Optional
import numpy as np

from procanim.scene.state import SceneState

logger = logging.getLogger(__name__)

POINTER_PATHS = ('circle', 'figure8', 'line', 'still')


def make_pointer_path(kind: str, n_frames: int, width: float, height: float,
                      loops: float = 1.0) -> np.ndarray:
    """
    Generate a pointer trajectory inside the canvas.

    Args:
        kind: 'circle', 'figure8', 'line' or 'still'
        n_frames: Number of positions
        width, height: Canvas size
        loops: How many times a closed path is traversed

    Returns:
        Array of shape (n_frames, 2)
    """
    if n_frames < 1:
        raise ValueError(f"n_frames must be positive, got {n_frames}")

    cx, cy = width / 2, height / 2
    rx, ry = width * 0.35, height * 0.35
    t = np.linspace(0, 2 * np.pi * loops, n_frames, endpoint=False)

    if kind == 'circle':
        return np.column_stack([cx + rx * np.cos(t), cy + ry * np.sin(t)])
    if kind == 'figure8':
        return np.column_stack([cx + rx * np.sin(t), cy + ry * np.sin(t) * np.cos(t)])
    if kind == 'line':
        x = np.linspace(width * 0.1, width * 0.9, n_frames)
        return np.column_stack([x, np.full(n_frames, cy)])
    if kind == 'still':
        return np.tile([cx + rx, cy], (n_frames, 1)).astype(np.float64)

    raise ValueError(f"Unknown pointer path: {kind} (choose from {', '.join(POINTER_PATHS)})")


def run_simulation(scene: SceneState, path: np.ndarray, report_every: int = 0) -> Dict[str, Any]:
    """
    Tick the scene once per pointer position.

    Args:
        scene: Scene to drive
        path: Pointer positions, shape (N, 2)
        report_every: Print progress every this many frames (0 = quiet)

    Returns:
        Scene statistics after the run
    """
    path = np.asarray(path, dtype=np.float64)
    if path.ndim != 2 or path.shape[1] != 2:
        raise ValueError(f"Pointer path must be (N, 2), got {path.shape}")

    for i, pointer in enumerate(path):
        scene.tick(pointer)

        if report_every and (i + 1) % report_every == 0:
            print(f"  Simulated {i + 1}/{len(path)} frames")

    stats = scene.get_stats()
    logger.debug("Simulation finished: %s", stats)
    return stats


def render_snapshot(scene: SceneState, output_path: str, debug: bool = False,
                    pointer: Optional[np.ndarray] = None, dpi: int = 100):
    """
    Draw the current creature to an image file.

    Args:
        scene: Scene to draw
        output_path: Image path (format from the extension)
        debug: Also draw the chains
        pointer: Optional pointer position to mark
        dpi: Output resolution
    """
    from matplotlib.figure import Figure
    from matplotlib.backends.backend_agg import FigureCanvasAgg
    from procanim.workflows.viewer import prepare_axes

    config = scene.config
    fig = Figure(figsize=(scene.width / dpi, scene.height / dpi), dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0, 0, 1, 1])

    prepare_axes(ax, scene.width, scene.height, config.background)
    scene.current.render(ax, outline_color=config.outline_color, debug=debug)

    if pointer is not None:
        ax.plot(pointer[0], pointer[1], 'w+', markersize=14)

    fig.savefig(output_path, dpi=dpi, facecolor=ax.get_facecolor())
    logger.info("Snapshot saved to %s", output_path)
