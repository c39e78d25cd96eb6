"""User interface layer.

:class:`~cwnt.ui.parameter_panel.ParameterPanel` is the Qt front end of
:class:`~cwnt.core.panel_model.ParameterPanelModel`.
"""

from .parameter_panel import ParameterPanel

__all__ = ["ParameterPanel"]
