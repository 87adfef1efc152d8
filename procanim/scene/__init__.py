"""Scene package for creature switching and recording."""

from procanim.scene.state import SceneState

__all__ = ['SceneState']
