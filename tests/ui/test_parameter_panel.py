from __future__ import annotations

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

QtCore = pytest.importorskip("PyQt5.QtCore", exc_type=ImportError)
QtWidgets = pytest.importorskip("PyQt5.QtWidgets", exc_type=ImportError)
pytest.importorskip("pytestqt")

from cwnt.core.events import StageEvent  # noqa: E402
from cwnt.core.panel_model import PARAMETER_SET_1_TAB_INDEX  # noqa: E402
from cwnt.ui.parameter_panel import ParameterPanel  # noqa: E402


@pytest.fixture()
def panel(qtbot) -> ParameterPanel:
    widget = ParameterPanel(target_image="embryo.tif")
    qtbot.addWidget(widget)
    widget.show()
    return widget


def _type(qtbot, field: QtWidgets.QLineEdit, text: str) -> None:
    field.selectAll()
    qtbot.keyClicks(field, text)


def test_widgets_start_from_default_parameters(panel: ParameterPanel) -> None:
    assert panel.tabs.count() == 3
    assert panel.slider("sigma_filter").value() == 20
    assert panel.text_field("sigma_filter").text() == "2"
    assert panel.slider("gamma").minimum() == -50
    assert panel.text_field("kappa_diffusion").text() == "50"


def test_moving_slider_updates_text_and_notifies(qtbot, panel: ParameterPanel) -> None:
    calls: list[StageEvent] = []
    panel.add_listener(calls.append)

    with qtbot.waitSignal(panel.parameterEvent, timeout=500) as blocker:
        panel.slider("sigma_gradient").setValue(35)

    assert blocker.args == [StageEvent.DERIVATIVES]
    assert calls == [StageEvent.DERIVATIVES]
    assert panel.text_field("sigma_gradient").text() == "3.5"
    assert panel.get_parameters()[3] == pytest.approx(3.5)


def test_typing_valid_text_moves_slider(qtbot, panel: ParameterPanel) -> None:
    calls: list[StageEvent] = []
    panel.add_listener(calls.append)

    _type(qtbot, panel.text_field("sigma_filter"), "2.5")

    assert panel.slider("sigma_filter").value() == 25
    assert panel.get_parameters().tolist() == [2.5, 3, 50, 2, 0, 5, 2, 2, 1]
    assert calls[-1] is StageEvent.FILTERING
    assert calls.count(StageEvent.FILTERING) == len(calls)


def test_typing_garbage_changes_nothing(qtbot, panel: ParameterPanel) -> None:
    calls: list[StageEvent] = []
    panel.add_listener(calls.append)

    _type(qtbot, panel.text_field("n_iter_diffusion"), "xyz")

    assert calls == []
    assert panel.text_field("n_iter_diffusion").text() == "xyz"
    assert panel.slider("n_iter_diffusion").value() == 3
    assert panel.get_parameters().tolist() == [2, 3, 50, 2, 0, 5, 2, 2, 1]


def test_tab_change_and_go_button(qtbot, panel: ParameterPanel) -> None:
    calls: list[StageEvent] = []
    panel.add_listener(calls.append)

    panel.tabs.setCurrentIndex(PARAMETER_SET_1_TAB_INDEX)
    panel.go_button.click()

    assert calls == [StageEvent.SELECTION_CHANGED, StageEvent.GO_PRESSED]
    assert panel.selected_index() == PARAMETER_SET_1_TAB_INDEX
    assert panel.model.selected_index == PARAMETER_SET_1_TAB_INDEX


def test_set_settings_refreshes_widgets_silently(panel: ParameterPanel) -> None:
    calls: list[StageEvent] = []
    panel.add_listener(calls.append)
    settings = panel.get_settings()
    settings["ALPHA"] = 12.5

    panel.set_settings(settings)

    assert calls == []
    assert panel.slider("alpha").value() == 125
    assert panel.text_field("alpha").text() == "12.5"
    assert panel.get_parameters()[5] == 12.5


def test_target_image_title_is_shown_on_intro_tab(panel: ParameterPanel) -> None:
    labels = [label.text() for label in panel.findChildren(QtWidgets.QLabel)]
    assert "embryo.tif" in labels

    panel.set_target_image("stack_t042.tif")

    labels = [label.text() for label in panel.findChildren(QtWidgets.QLabel)]
    assert "stack_t042.tif" in labels
    assert "embryo.tif" not in labels


def test_duration_estimate_label(panel: ParameterPanel) -> None:
    panel.set_duration_estimate(3.2)

    assert panel.model.duration_text == "Processing duration estimate: 3 min."
