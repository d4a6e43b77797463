"""Player commands emitted by the key engine."""

from .player import Action, ViewMode, PanelFocus

__all__ = ["Action", "ViewMode", "PanelFocus"]
