from __future__ import annotations

import os
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

pytest.importorskip("PyQt5.QtWidgets", exc_type=ImportError)

from cwnt.app import build_configuration  # noqa: E402


def test_build_configuration_defaults() -> None:
    config = build_configuration([])

    assert config.developer_diagnostics is False
    assert config.enable_console_logging is True
    assert config.log_directory is None
    assert config.target_image == ""


def test_build_configuration_from_arguments(tmp_path: Path) -> None:
    config = build_configuration(
        ["--diagnostics", "--log-dir", str(tmp_path), "--target-image", "stack.tif", "--no-console"]
    )

    assert config.developer_diagnostics is True
    assert config.log_directory == tmp_path
    assert config.target_image == "stack.tif"
    assert config.enable_console_logging is False
