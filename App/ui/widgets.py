"""Small builders for the spin boxes, combos and sliders both tools use."""

from typing import Any, Iterable, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QSlider,
    QSpinBox,
    QWidget,
)


class WidgetFactory:
    """Builders for commonly repeated control patterns."""

    @staticmethod
    def create_int_spinbox(
        range_min: int,
        range_max: int,
        value: int,
        suffix: str = "",
        step: int = 1,
        tooltip: str = "",
    ) -> QSpinBox:
        """Integer spin box with range, unit suffix and step."""
        spinbox = QSpinBox()
        spinbox.setRange(range_min, range_max)
        spinbox.setValue(value)
        spinbox.setSuffix(suffix)
        spinbox.setSingleStep(step)
        if tooltip:
            spinbox.setToolTip(tooltip)
        return spinbox

    @staticmethod
    def create_combo(
        items: Iterable[Tuple[str, Any]],
        current_data: Any = None,
        tooltip: str = "",
    ) -> QComboBox:
        """Combo box filled from (label, data) pairs.

        The item whose data equals current_data is selected; unknown data
        leaves the first item selected.
        """
        combo = QComboBox()
        for label, data in items:
            combo.addItem(label, data)
        if current_data is not None:
            index = combo.findData(current_data)
            if index >= 0:
                combo.setCurrentIndex(index)
        if tooltip:
            combo.setToolTip(tooltip)
        return combo

    @staticmethod
    def create_slider_with_label(
        range_min: int,
        range_max: int,
        value: int,
        label_width: int = 40,
        tick_interval: Optional[int] = None,
        tooltip: str = "",
    ) -> Tuple[QSlider, QLabel]:
        """Horizontal slider paired with a label that tracks its value."""
        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(range_min, range_max)
        slider.setValue(value)
        if tooltip:
            slider.setToolTip(tooltip)
        if tick_interval:
            slider.setTickPosition(QSlider.TickPosition.TicksBelow)
            slider.setTickInterval(tick_interval)

        label = QLabel(str(value))
        label.setMinimumWidth(label_width)
        slider.valueChanged.connect(lambda v: label.setText(str(v)))

        return slider, label

    @staticmethod
    def create_labeled_row(label_text: str, widget: QWidget) -> QHBoxLayout:
        layout = QHBoxLayout()
        layout.addWidget(QLabel(label_text))
        layout.addWidget(widget)
        return layout
