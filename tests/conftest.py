from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture  # type: ignore[misc]
def write_source(tmp_path: Path) -> Callable[[str], Path]:
    def _write(text: str, name: str = "BUILD.bazel") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
