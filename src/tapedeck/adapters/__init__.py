"""UI hosts that feed key events into tapedeck."""
