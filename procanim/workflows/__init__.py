"""Workflows package: interactive viewer and headless simulation."""

from procanim.workflows.simulate import make_pointer_path, run_simulation, render_snapshot, POINTER_PATHS
from procanim.workflows.viewer import CreatureViewer, run_viewer

__all__ = ['make_pointer_path', 'run_simulation', 'render_snapshot', 'POINTER_PATHS',
           'CreatureViewer', 'run_viewer']
