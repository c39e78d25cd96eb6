"""Runtime configuration for the parameter panel application."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class PanelConfiguration:
    """Configuration for the panel bootstrap."""

    organization: str = "Fiji"
    application: str = "CWNT"
    window_title: str = "Crown-Wearing Nuclei Tracker"
    target_image: str = ""
    log_directory: Optional[Path] = None
    developer_diagnostics: bool = False
    enable_console_logging: bool = True
    max_log_bytes: int = 1024 * 1024
    log_backup_count: int = 3


__all__ = ["PanelConfiguration"]
