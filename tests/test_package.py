from __future__ import annotations

import tapedeck


def test_exported_submodules_are_loaded() -> None:
    for name in tapedeck.__all__:
        assert hasattr(tapedeck, name), name


def test_version_is_exposed() -> None:
    assert tapedeck.__version__ == "0.1.0"
