"""Logging setup for the CWNT parameter panel.

The panel is usually embedded in a host application that owns the root
logger, so handlers are attached to the ``cwnt`` logger namespace only and
records stop propagating to the host while the panel's handlers are active.
"""
from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

from .config import PanelConfiguration

PANEL_LOGGER_NAME = "cwnt"
DEFAULT_LOG_FILENAME = "cwnt_panel.log"
DEFAULT_LOG_DIRNAME = "logs"

PANEL_FORMAT = "%(asctime)s | %(levelname)s | %(component)s | %(message)s"
DIAGNOSTICS_FORMAT = PANEL_FORMAT + " [%(filename)s:%(lineno)d]"


class PanelLogFormatter(logging.Formatter):
    """Tags each line with the emitting component, or the logger name."""

    def __init__(self, diagnostics: bool = False) -> None:
        super().__init__(DIAGNOSTICS_FORMAT if diagnostics else PANEL_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "component"):
            record.component = record.name
        return super().format(record)


class LoggingConfigurator:
    """Installs the panel's rotating log file and optional console output."""

    def __init__(
        self,
        configuration: Optional[PanelConfiguration] = None,
        *,
        logger_name: str = PANEL_LOGGER_NAME,
    ) -> None:
        self.configuration = configuration or PanelConfiguration()
        self.logger = logging.getLogger(logger_name)
        self._handlers: List[logging.Handler] = []

    @property
    def level(self) -> int:
        return logging.DEBUG if self.configuration.developer_diagnostics else logging.INFO

    @property
    def log_path(self) -> Path:
        directory = self.configuration.log_directory
        base_dir = Path(directory) if directory is not None else Path.home() / DEFAULT_LOG_DIRNAME
        return base_dir / DEFAULT_LOG_FILENAME

    @property
    def handlers(self) -> List[logging.Handler]:
        return list(self._handlers)

    def configure(self) -> Path:
        """Attach the panel handlers and return the log file path.

        A second call replaces the handlers installed by the first one.
        """

        self.shutdown()
        log_path = self.log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)

        self._install(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=self.configuration.max_log_bytes,
                backupCount=self.configuration.log_backup_count,
                encoding="utf-8",
            )
        )
        if self.configuration.enable_console_logging:
            self._install(logging.StreamHandler())

        self.logger.setLevel(self.level)
        self.logger.propagate = False
        self.logger.debug("Logging to %s", log_path, extra={"component": "LoggingConfigurator"})
        return log_path

    def shutdown(self) -> None:
        """Detach and close the handlers this configurator installed."""

        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self.logger.propagate = True

    def _install(self, handler: logging.Handler) -> None:
        handler.setFormatter(PanelLogFormatter(self.configuration.developer_diagnostics))
        handler.setLevel(self.level)
        self.logger.addHandler(handler)
        self._handlers.append(handler)


__all__ = [
    "DEFAULT_LOG_FILENAME",
    "LoggingConfigurator",
    "PANEL_LOGGER_NAME",
    "PanelLogFormatter",
]
