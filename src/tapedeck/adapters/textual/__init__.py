"""Textual host for the key engine."""

from .controller import KeyController, PlayerUIHooks, ViewState, chord_from_textual_key

__all__ = ["KeyController", "PlayerUIHooks", "ViewState", "chord_from_textual_key"]
