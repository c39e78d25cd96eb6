"""Application launcher for the CWNT parameter panel."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Sequence

from PyQt5 import QtCore, QtWidgets

from cwnt.core.config import PanelConfiguration
from cwnt.core.events import StageEvent
from cwnt.core.logging_config import LoggingConfigurator
from cwnt.ui.parameter_panel import ParameterPanel

LOGGER = logging.getLogger(__name__)


def build_configuration(argv: Sequence[str] | None = None) -> PanelConfiguration:
    """Translate command line arguments into a :class:`PanelConfiguration`."""

    parser = argparse.ArgumentParser(prog="cwnt", description="Tune the CWNT masking parameters.")
    parser.add_argument("--diagnostics", action="store_true", help="enable debug logging")
    parser.add_argument("--log-dir", type=Path, default=None, help="directory for the log file")
    parser.add_argument("--target-image", default="", help="title of the image being segmented")
    parser.add_argument("--no-console", action="store_true", help="only log to the log file")
    args = parser.parse_args(argv)
    return PanelConfiguration(
        target_image=args.target_image,
        log_directory=args.log_dir,
        developer_diagnostics=args.diagnostics,
        enable_console_logging=not args.no_console,
    )


def _log_event(panel: ParameterPanel) -> Callable[[StageEvent], None]:
    def _listener(event: StageEvent) -> None:
        LOGGER.info(
            "%s %s",
            event.command,
            panel.get_parameters().tolist(),
            extra={"component": "ParameterPanel"},
        )

    return _listener


def launch(
    configuration: PanelConfiguration,
    *,
    application_factory: Callable[[], QtWidgets.QApplication] | None = None,
) -> int:
    """Show the panel and run the Qt event loop until it is closed."""

    LoggingConfigurator(configuration).configure()

    if application_factory is None:
        QtWidgets.QApplication.setAttribute(QtCore.Qt.AA_UseHighDpiPixmaps, True)
        app = QtWidgets.QApplication(sys.argv)
    else:
        app = application_factory()
    app.setOrganizationName(configuration.organization)
    app.setApplicationName(configuration.application)

    panel = ParameterPanel(target_image=configuration.target_image)
    panel.setWindowTitle(configuration.window_title)
    panel.add_listener(_log_event(panel))
    panel.show()
    LOGGER.info("Panel shown", extra={"component": "Launcher"})
    return app.exec_()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``python -m cwnt``."""

    return launch(build_configuration(argv))


__all__ = ["build_configuration", "launch", "main"]


if __name__ == "__main__":
    raise SystemExit(main())
