"""Process-level services shared by every tapedeck component."""

from . import telemetry

__all__ = ["telemetry"]
