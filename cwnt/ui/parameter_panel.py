"""Qt configuration panel for the CWNT masking parameters."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import numpy as np
from PyQt5 import QtCore, QtGui, QtWidgets  # type: ignore

from cwnt.core.events import Listener, StageEvent
from cwnt.core.panel_model import (
    PARAMETER_SET_1_TAB_INDEX,
    PARAMETER_SET_2_TAB_INDEX,
    ParameterPanelModel,
)
from cwnt.core.parameters import ParameterSlot, slots_for_stage

LOGGER = logging.getLogger(__name__)

STAGE_TITLES: Dict[StageEvent, str] = {
    StageEvent.FILTERING: "1. Filtering",
    StageEvent.DIFFUSION: "2. Anisotropic diffusion",
    StageEvent.DERIVATIVES: "3. Derivatives calculation",
    StageEvent.MASKING: "4. Masking",
}

INFO_TEXT = (
    "<html>Crown-Wearing Nuclei Tracker segments bright nuclei in 3D stacks. "
    "The image is first smoothed with a gaussian filter, then with anisotropic "
    "diffusion. Gaussian derivatives are then combined into a mask whose "
    "shape is tuned in the second parameter set.</html>"
)

MASK_EQUATION = "<html>M = ½ ( 1 + <i>tanh</i> ( γ - ( α G + β L + ε H ) / δ ) )</html>"


class ParameterPanel(QtWidgets.QWidget):
    """Tabbed panel pairing a slider and a text field for each parameter.

    Widget signals are forwarded to a :class:`ParameterPanelModel`; the
    widgets are then refreshed from the model's control state.  Every
    notification that reaches the model listeners is also re-emitted as
    :attr:`parameterEvent`.
    """

    parameterEvent = QtCore.pyqtSignal(object)

    def __init__(
        self,
        model: Optional[ParameterPanelModel] = None,
        *,
        target_image: str = "",
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._model = model or ParameterPanelModel()
        self._sliders: Dict[str, QtWidgets.QSlider] = {}
        self._fields: Dict[str, QtWidgets.QLineEdit] = {}
        self._updating_controls = False

        self._build_ui(target_image)
        self._refresh_all()
        self._connect_signals()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def model(self) -> ParameterPanelModel:
        return self._model

    def add_listener(self, listener: Listener) -> None:
        self._model.add_listener(listener)

    def remove_listener(self, listener: Listener) -> bool:
        return self._model.remove_listener(listener)

    def get_listeners(self) -> List[Listener]:
        return self._model.get_listeners()

    def get_parameters(self) -> np.ndarray:
        return self._model.get_parameters()

    def get_settings(self) -> Dict[str, Any]:
        return self._model.get_settings()

    def set_settings(self, settings: Mapping[str, Any]) -> None:
        self._model.set_settings(settings)
        self._refresh_all()

    def set_duration_estimate(self, minutes: float) -> None:
        self._model.set_duration_estimate(minutes)
        self._duration_label.setText(self._model.duration_text)

    def selected_index(self) -> int:
        return self._tabs.currentIndex()

    def set_target_image(self, title: str) -> None:
        self._target_label.setText(title)

    def slider(self, name: str) -> QtWidgets.QSlider:
        return self._sliders[name]

    def text_field(self, name: str) -> QtWidgets.QLineEdit:
        return self._fields[name]

    @property
    def go_button(self) -> QtWidgets.QPushButton:
        return self._go_button

    @property
    def tabs(self) -> QtWidgets.QTabWidget:
        return self._tabs

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self, target_image: str) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._tabs = QtWidgets.QTabWidget(self)
        layout.addWidget(self._tabs)

        self._tabs.addTab(self._build_intro_page(target_image), self.tr("Intro"))

        page_1, _ = self._build_parameter_page(
            self.tr("Parameter set 1"),
            (StageEvent.FILTERING, StageEvent.DIFFUSION, StageEvent.DERIVATIVES),
        )
        self._tabs.insertTab(PARAMETER_SET_1_TAB_INDEX, page_1, self.tr("Param set 1"))

        page_2, page_2_layout = self._build_parameter_page(self.tr("Parameter set 2"), (StageEvent.MASKING,))
        equation = QtWidgets.QLabel(MASK_EQUATION, page_2)
        page_2_layout.addWidget(equation)
        self._duration_label = QtWidgets.QLabel(self._model.duration_text, page_2)
        page_2_layout.addWidget(self._duration_label)
        self._go_button = QtWidgets.QPushButton(self.tr("Go!"), page_2)
        self._go_button.setToolTip(self.tr("Launch the segmentation with the current parameters"))
        page_2_layout.addWidget(self._go_button, 0, QtCore.Qt.AlignHCenter)
        page_2_layout.addStretch(1)
        self._tabs.insertTab(PARAMETER_SET_2_TAB_INDEX, page_2, self.tr("Param set 2"))

    def _build_intro_page(self, target_image: str) -> QtWidgets.QWidget:
        page = QtWidgets.QWidget(self._tabs)
        layout = QtWidgets.QVBoxLayout(page)
        title = QtWidgets.QLabel(self.tr("Crown-Wearing Nuclei Tracker"), page)
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setFont(_scaled_font(title.font(), 20))
        layout.addWidget(title)
        layout.addWidget(QtWidgets.QLabel(self.tr("Target image:"), page))
        self._target_label = QtWidgets.QLabel(target_image, page)
        self._target_label.setAlignment(QtCore.Qt.AlignCenter)
        layout.addWidget(self._target_label)
        info = QtWidgets.QLabel(INFO_TEXT, page)
        info.setWordWrap(True)
        layout.addWidget(info)
        layout.addStretch(1)
        return page

    def _build_parameter_page(
        self, heading: str, stages: tuple[StageEvent, ...]
    ) -> tuple[QtWidgets.QWidget, QtWidgets.QVBoxLayout]:
        page = QtWidgets.QWidget(self._tabs)
        layout = QtWidgets.QVBoxLayout(page)
        layout.setSpacing(10)
        title = QtWidgets.QLabel(heading, page)
        title.setAlignment(QtCore.Qt.AlignCenter)
        title.setFont(_scaled_font(title.font(), 20))
        layout.addWidget(title)

        for stage in stages:
            group = QtWidgets.QGroupBox(self.tr(STAGE_TITLES[stage]), page)
            form = QtWidgets.QFormLayout(group)
            form.setFieldGrowthPolicy(QtWidgets.QFormLayout.AllNonFixedFieldsGrow)
            for slot in slots_for_stage(stage):
                form.addRow(self.tr(slot.label), self._build_slot_row(slot, group))
            layout.addWidget(group)

        if len(stages) > 1:
            layout.addStretch(1)
        return page, layout

    def _build_slot_row(self, slot: ParameterSlot, parent: QtWidgets.QWidget) -> QtWidgets.QWidget:
        row = QtWidgets.QWidget(parent)
        row_layout = QtWidgets.QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)

        slider = QtWidgets.QSlider(QtCore.Qt.Horizontal, row)
        slider.setRange(slot.minimum, slot.maximum)
        slider.setSingleStep(1)
        slider.setPageStep(slot.scale)
        field = QtWidgets.QLineEdit(row)
        field.setMaximumWidth(80)
        tooltip = slot.tooltip_text()
        slider.setToolTip(tooltip)
        field.setToolTip(tooltip)

        row_layout.addWidget(slider, 1)
        row_layout.addWidget(field)
        self._sliders[slot.name] = slider
        self._fields[slot.name] = field
        return row

    def _connect_signals(self) -> None:
        for name, slider in self._sliders.items():
            slider.valueChanged.connect(lambda position, name=name: self._on_slider_moved(name, position))
        for name, field in self._fields.items():
            field.textEdited.connect(lambda text, name=name: self._on_text_edited(name, text))
        self._tabs.currentChanged.connect(self._on_tab_changed)
        self._go_button.clicked.connect(self._on_go_clicked)

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------
    def _on_slider_moved(self, name: str, position: int) -> None:
        if self._updating_controls:
            return
        fired = self._model.move_slider(name, position)
        self._refresh_control(name)
        if fired:
            self.parameterEvent.emit(self._model.slot(name).stage)

    def _on_text_edited(self, name: str, text: str) -> None:
        if self._updating_controls:
            return
        fired = self._model.edit_text(name, text)
        self._refresh_control(name)
        if fired:
            self.parameterEvent.emit(self._model.slot(name).stage)

    @QtCore.pyqtSlot(int)
    def _on_tab_changed(self, index: int) -> None:
        if self._updating_controls:
            return
        self._model.select_tab(index)
        self.parameterEvent.emit(StageEvent.SELECTION_CHANGED)

    @QtCore.pyqtSlot()
    def _on_go_clicked(self) -> None:
        LOGGER.info(
            "Segmentation requested with %s",
            self._model.get_parameters().tolist(),
            extra={"component": "ParameterPanel"},
        )
        self._model.press_go()
        self.parameterEvent.emit(StageEvent.GO_PRESSED)

    # ------------------------------------------------------------------
    # Widget refresh
    # ------------------------------------------------------------------
    def _refresh_all(self) -> None:
        for name in self._sliders:
            self._refresh_control(name)

    def _refresh_control(self, name: str) -> None:
        control = self._model.control(name)
        slider = self._sliders[name]
        field = self._fields[name]
        self._updating_controls = True
        try:
            if slider.value() != control.position:
                slider.blockSignals(True)
                slider.setValue(control.position)
                slider.blockSignals(False)
            if field.text() != control.text:
                cursor = field.cursorPosition()
                field.setText(control.text)
                field.setCursorPosition(min(cursor, len(control.text)))
        finally:
            self._updating_controls = False


def _scaled_font(font: QtGui.QFont, point_size: int) -> QtGui.QFont:
    scaled = QtGui.QFont(font)
    scaled.setPointSize(point_size)
    return scaled


__all__ = ["INFO_TEXT", "MASK_EQUATION", "ParameterPanel", "STAGE_TITLES"]
