from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from tapedeck.runtime import telemetry


@pytest.fixture(autouse=True, scope="session")
def log_file(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    path = tmp_path_factory.mktemp("logs") / "tapedeck.log"
    with pytest.MonkeyPatch.context() as patch:
        patch.setenv(telemetry.LOG_FILE_ENV, str(path))
        telemetry.configure()
        yield path
