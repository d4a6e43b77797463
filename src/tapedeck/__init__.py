"""Key-driven terminal music player client."""

from . import actions, adapters, config, keymaps, runtime

__all__ = [
    "actions",
    "adapters",
    "config",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
