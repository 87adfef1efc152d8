"""
Interactive viewer: the current creature follows the mouse.
"""

import logging
from typing import Optional
import numpy as np
from matplotlib import pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.widgets import Button, RadioButtons

from procanim.config import AppConfig, to_mpl_color
from procanim.scene.state import SceneState

logger = logging.getLogger(__name__)


def prepare_axes(ax, width: float, height: float, background):
    """Clear axes and set up screen coordinates (origin top-left, y down)."""
    ax.clear()
    ax.set_facecolor(to_mpl_color(background))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])


class CreatureViewer:
    """
    Matplotlib window running the animation loop.

    Controls:
    - Move the mouse over the canvas: the creature follows it
    - Click the canvas: switch to the next creature
    - Radio buttons: pick a creature
    - 'Skeleton' button: toggle the debug view of the chains
    """

    def __init__(self, scene: SceneState, config: Optional[AppConfig] = None, debug: bool = False):
        """
        Initialize viewer.

        Args:
            scene: Scene to animate
            config: Application config (defaults to the scene's)
            debug: Start with the skeleton view on
        """
        self.scene = scene
        self.config = config if config is not None else scene.config
        self.debug = debug
        self.pointer: Optional[np.ndarray] = None

        # UI components
        self.fig = None
        self.ax_main = None
        self.radio = None
        self.btn_debug = None
        self.animation = None

    def run_interactive(self):
        """Launch the window and block until it is closed."""
        self._setup_ui()
        plt.show()

    def _setup_ui(self):
        """Setup matplotlib UI."""
        self.fig = plt.figure(figsize=(14, 9))
        self.fig.patch.set_facecolor(to_mpl_color(self.config.background))
        self.ax_main = self.fig.add_axes([0.16, 0.02, 0.82, 0.96])

        # Connect mouse events
        self.fig.canvas.mpl_connect('motion_notify_event', self._on_motion)
        self.fig.canvas.mpl_connect('button_press_event', self._on_press)

        # Creature selection, like a sidebar
        ax_radio = self.fig.add_axes([0.02, 0.6, 0.12, 0.2])
        labels = [name.capitalize() for name in self.scene.names]
        self.radio = RadioButtons(ax_radio, labels, active=self.scene.current_index)
        self.radio.on_clicked(self._on_select)

        self.btn_debug = Button(self.fig.add_axes([0.02, 0.5, 0.12, 0.05]), 'Skeleton', color='lightgray')
        self.btn_debug.on_clicked(self._toggle_debug)

        self._draw()

        self.animation = FuncAnimation(self.fig, self._update, interval=1000 / self.config.fps,
                                       cache_frame_data=False)

    def _on_motion(self, event):
        if event.inaxes != self.ax_main or event.xdata is None:
            return
        self.pointer = np.array([event.xdata, event.ydata], dtype=np.float64)

    def _on_press(self, event):
        if event.inaxes != self.ax_main:
            return
        self.scene.cycle()
        # Keep the radio buttons in sync; its callback selects the same creature
        self.radio.set_active(self.scene.current_index)

    def _on_select(self, label):
        self.scene.select(label.lower())

    def _toggle_debug(self, event):
        self.debug = not self.debug
        logger.debug("Skeleton view %s", "on" if self.debug else "off")

    def _update(self, frame):
        self.scene.tick(self.pointer)
        self._draw()

    def _draw(self):
        """Redraw the current creature."""
        prepare_axes(self.ax_main, self.scene.width, self.scene.height, self.config.background)
        self.scene.current.render(self.ax_main, outline_color=self.config.outline_color,
                                  debug=self.debug)


def run_viewer(config: AppConfig, creature: Optional[str] = None, debug: bool = False) -> SceneState:
    """
    Open the interactive viewer.

    Args:
        config: Application config
        creature: Creature to show first (default: fish)
        debug: Start with the skeleton view on

    Returns:
        The scene after the window is closed
    """
    scene = SceneState(config.width, config.height, config)
    if creature is not None:
        scene.select(creature)

    viewer = CreatureViewer(scene, config, debug=debug)
    viewer.run_interactive()
    return scene
