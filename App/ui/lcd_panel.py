"""LCD dot-matrix tool panel: image/text import, conversion and export."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from PIL import Image
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import (
    QCheckBox,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from dot_matrix import DotMatrixConverter, InvalidSourceError
from dot_matrix.converter import export_binary, export_document
from dot_matrix.encoders import default_filename, describe
from dot_matrix.preview import render_preview
from dot_matrix.raster import load_image
from error_log import ErrorLog
from models import (
    SUPPORTED_BIT_DEPTHS,
    AppSettings,
    BitOrder,
    EncodingConfig,
    ImageSource,
    OutputFormat,
    PipelineState,
    SourceMode,
    TextSource,
)
from ui.styles import FONTS, SIZES, panel_stylesheet
from ui.widgets import WidgetFactory

ERROR_SOURCE = "LCD Tool"
DEFAULT_TEXT = "Hello"


def pil_to_pixmap(image: Image.Image) -> QPixmap:
    """Convert a Pillow image to a QPixmap (copying the pixel data)."""
    rgba = image.convert("RGBA")
    data = rgba.tobytes("raw", "RGBA")
    qimage = QImage(
        data, rgba.width, rgba.height, rgba.width * 4, QImage.Format.Format_RGBA8888
    )
    # AIDEV-NOTE: copy() detaches the QImage from the Python bytes buffer
    return QPixmap.fromImage(qimage.copy())


class LcdPanel(QGroupBox):
    """Panel for converting images or text into LCD dot-matrix data."""

    # Signals for communication with main window
    generated = pyqtSignal(object)  # PipelineState
    cleared = pyqtSignal()
    status_message = pyqtSignal(str)

    def __init__(
        self,
        settings: AppSettings,
        error_log: ErrorLog,
        parent: QWidget | None = None,
    ):
        super().__init__("LCD Dot Matrix", parent)
        self.settings = settings
        self.error_log = error_log
        self.converter = DotMatrixConverter()
        self.source_mode = SourceMode.IMAGE
        self.loaded_image: Image.Image | None = None
        self.current_image_path: str | None = None
        self.state = PipelineState.empty()

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self):
        """Initialize the UI components."""
        layout = QHBoxLayout()

        left = QVBoxLayout()
        self._create_source_tabs(left)
        self._create_conversion_controls(left)
        self._create_action_buttons(left)
        left.addStretch()
        layout.addLayout(left, stretch=1)

        right = QVBoxLayout()
        self._create_preview_area(right)
        self._create_output_area(right)
        layout.addLayout(right, stretch=2)

        self.setLayout(layout)

    def _create_source_tabs(self, parent_layout: QVBoxLayout):
        """Create the Image / Text source tabs."""
        self.source_tabs = QTabWidget()

        # --- Image tab ---
        image_tab = QWidget()
        image_layout = QVBoxLayout()

        file_layout = QHBoxLayout()
        self.file_path_label = QLabel("No image selected")
        self.file_path_label.setWordWrap(True)
        file_layout.addWidget(self.file_path_label, stretch=1)

        self.browse_btn = QPushButton("Browse...")
        self.browse_btn.setToolTip("Select an image file (PNG, JPG, etc.)")
        file_layout.addWidget(self.browse_btn)
        image_layout.addLayout(file_layout)

        self.source_preview_label = QLabel()
        width, height = SIZES.SOURCE_PREVIEW_SIZE
        self.source_preview_label.setMaximumSize(width, height)
        self.source_preview_label.setMinimumSize(width // 2, height // 2)
        self.source_preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.source_preview_label.setStyleSheet(panel_stylesheet())
        self.source_preview_label.setText("Image preview will appear here")
        image_layout.addWidget(self.source_preview_label)

        image_tab.setLayout(image_layout)
        self.source_tabs.addTab(image_tab, "Image")

        # --- Text tab ---
        text_tab = QWidget()
        text_layout = QVBoxLayout()

        self.text_input = QLineEdit(DEFAULT_TEXT)
        self.text_input.setPlaceholderText("Text to render")
        text_layout.addLayout(WidgetFactory.create_labeled_row("Text:", self.text_input))

        self.font_family_input = QLineEdit(self.settings.font_family)
        self.font_family_input.setToolTip(
            "TrueType font file or family name (falls back to the default font)"
        )
        text_layout.addLayout(
            WidgetFactory.create_labeled_row("Font:", self.font_family_input)
        )

        self.font_weight_combo = WidgetFactory.create_combo(
            [("Normal", "normal"), ("Bold", "bold")]
        )
        text_layout.addLayout(
            WidgetFactory.create_labeled_row("Weight:", self.font_weight_combo)
        )

        self.font_size_spin = WidgetFactory.create_int_spinbox(
            4, 512, self.settings.font_size, suffix=" px"
        )
        text_layout.addLayout(
            WidgetFactory.create_labeled_row("Size:", self.font_size_spin)
        )

        text_layout.addStretch()
        text_tab.setLayout(text_layout)
        self.source_tabs.addTab(text_tab, "Text")

        parent_layout.addWidget(self.source_tabs)

    def _create_conversion_controls(self, parent_layout: QVBoxLayout):
        """Create size, quantization and encoding controls."""
        group = QGroupBox("Conversion Settings")
        layout = QVBoxLayout()

        size_layout = QHBoxLayout()
        self.width_spin = WidgetFactory.create_int_spinbox(
            1, 4096, self.settings.lcd_width, suffix=" px", tooltip="Target width"
        )
        self.height_spin = WidgetFactory.create_int_spinbox(
            1, 4096, self.settings.lcd_height, suffix=" px", tooltip="Target height"
        )
        size_layout.addWidget(QLabel("Width:"))
        size_layout.addWidget(self.width_spin)
        size_layout.addWidget(QLabel("Height:"))
        size_layout.addWidget(self.height_spin)
        layout.addLayout(size_layout)

        threshold_layout = QHBoxLayout()
        threshold_layout.addWidget(QLabel("Threshold:"))
        self.threshold_slider, self.threshold_label = (
            WidgetFactory.create_slider_with_label(
                0,
                255,
                self.settings.threshold,
                label_width=SIZES.LABEL_MIN_WIDTH,
                tick_interval=32,
                tooltip="Brightness cut-off for 1-bit output",
            )
        )
        threshold_layout.addWidget(self.threshold_slider)
        threshold_layout.addWidget(self.threshold_label)
        layout.addLayout(threshold_layout)

        self.invert_check = QCheckBox("Invert")
        self.invert_check.setToolTip("Swap on and off pixels")
        layout.addWidget(self.invert_check)

        self.bit_depth_combo = WidgetFactory.create_combo(
            [(f"{depth}-bit", depth) for depth in SUPPORTED_BIT_DEPTHS],
            current_data=self.settings.bit_depth,
        )
        layout.addLayout(
            WidgetFactory.create_labeled_row("Bit Depth:", self.bit_depth_combo)
        )

        self.bit_order_combo = WidgetFactory.create_combo(
            [("MSB first", BitOrder.MSB_FIRST.value), ("LSB first", BitOrder.LSB_FIRST.value)],
            current_data=self.settings.bit_order,
            tooltip="Bit position of the first pixel in each byte (1-bit only)",
        )
        layout.addLayout(
            WidgetFactory.create_labeled_row("Byte Order:", self.bit_order_combo)
        )

        self.format_combo = WidgetFactory.create_combo(
            [(describe(fmt), fmt.value) for fmt in OutputFormat],
            current_data=self.settings.output_format,
        )
        layout.addLayout(
            WidgetFactory.create_labeled_row("Output Format:", self.format_combo)
        )

        group.setLayout(layout)
        parent_layout.addWidget(group)

    def _create_action_buttons(self, parent_layout: QVBoxLayout):
        """Create main action buttons."""
        btn_layout = QHBoxLayout()

        self.generate_btn = QPushButton("Generate")
        self.generate_btn.setToolTip("Convert the current source with these settings")
        btn_layout.addWidget(self.generate_btn)

        self.export_btn = QPushButton("Export...")
        self.export_btn.setEnabled(False)
        self.export_btn.setToolTip("Save the generated text document")
        btn_layout.addWidget(self.export_btn)

        self.export_binary_btn = QPushButton("Export Binary...")
        self.export_binary_btn.setEnabled(False)
        self.export_binary_btn.setToolTip("Save the raw packed bytes")
        btn_layout.addWidget(self.export_binary_btn)

        self.clear_btn = QPushButton("Clear")
        btn_layout.addWidget(self.clear_btn)

        parent_layout.addLayout(btn_layout)

        self.status_label = QLabel("")
        self.status_label.setWordWrap(True)
        parent_layout.addWidget(self.status_label)

    def _create_preview_area(self, parent_layout: QVBoxLayout):
        """Create the dot-matrix preview and statistics labels."""
        self.dot_preview_label = QLabel()
        self.dot_preview_label.setMinimumSize(*SIZES.DOT_PREVIEW_MIN_SIZE)
        self.dot_preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.dot_preview_label.setStyleSheet(panel_stylesheet())
        self.dot_preview_label.setText("Dot matrix preview will appear here")
        parent_layout.addWidget(self.dot_preview_label)

        stats_layout = QHBoxLayout()
        self.data_size_label = QLabel("Data size: 0 bytes")
        self.pixel_count_label = QLabel("Pixel count: 0")
        stats_layout.addWidget(self.data_size_label)
        stats_layout.addWidget(self.pixel_count_label)
        stats_layout.addStretch()
        parent_layout.addLayout(stats_layout)

    def _create_output_area(self, parent_layout: QVBoxLayout):
        """Create the read-only output document view."""
        self.output_text = QPlainTextEdit()
        self.output_text.setReadOnly(True)
        self.output_text.setFont(FONTS.OUTPUT)
        self.output_text.setPlaceholderText("Generated data will appear here")
        parent_layout.addWidget(self.output_text, stretch=1)

    def _connect_signals(self):
        """Connect internal signals to handlers."""
        self.browse_btn.clicked.connect(self._on_browse_clicked)
        self.source_tabs.currentChanged.connect(self._on_source_tab_changed)
        self.generate_btn.clicked.connect(self.generate)
        self.export_btn.clicked.connect(self._on_export_clicked)
        self.export_binary_btn.clicked.connect(self._on_export_binary_clicked)
        self.clear_btn.clicked.connect(self.clear)

    # === Event Handlers ===

    def _on_browse_clicked(self):
        """Handle browse button click."""
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Image",
            "",
            "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff);;All Files (*)",
        )
        if file_path:
            self._load_image(file_path)

    def _load_image(self, file_path: str):
        """Load the source image and display a scaled preview."""
        try:
            self.loaded_image = load_image(file_path)
        except InvalidSourceError as e:
            self.loaded_image = None
            self.error_log.log(str(e), ERROR_SOURCE)
            self.status_label.setText(f"Error: {e}")
            return

        self.current_image_path = file_path
        self.file_path_label.setText(f"Selected: {Path(file_path).name}")

        width, height = SIZES.SOURCE_PREVIEW_SIZE
        pixmap = pil_to_pixmap(self.loaded_image).scaled(
            width,
            height,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.source_preview_label.setPixmap(pixmap)
        self.status_label.setText('Image loaded. Click "Generate" to convert.')

    def _on_source_tab_changed(self, index: int):
        """Switch between image and text sources (clears previous results)."""
        self.source_mode = SourceMode.IMAGE if index == 0 else SourceMode.TEXT
        self.clear()

    # === Conversion ===

    def current_config(self) -> EncodingConfig:
        """Build an EncodingConfig from the current control values."""
        return EncodingConfig(
            width=self.width_spin.value(),
            height=self.height_spin.value(),
            threshold=self.threshold_slider.value(),
            invert=self.invert_check.isChecked(),
            bit_depth=self.bit_depth_combo.currentData(),
            source_mode=self.source_mode,
            bit_order=BitOrder(self.bit_order_combo.currentData()),
            output_format=OutputFormat(self.format_combo.currentData()),
        )

    def current_source(self) -> ImageSource | TextSource:
        if self.source_mode == SourceMode.TEXT:
            return TextSource(
                text=self.text_input.text(),
                font_family=self.font_family_input.text().strip() or self.settings.font_family,
                font_size=self.font_size_spin.value(),
                font_weight=self.font_weight_combo.currentData(),
            )
        return ImageSource(
            image=self.loaded_image,
            name=Path(self.current_image_path).name if self.current_image_path else "",
        )

    def generate(self):
        """Run the conversion pipeline and show the results."""
        try:
            state = self.converter.generate(self.current_source(), self.current_config())
        except InvalidSourceError as e:
            self.error_log.log(str(e), ERROR_SOURCE)
            self.status_label.setText(f"Error: {e}")
            return

        self._show_state(state)
        self.status_label.setText(
            f"Generated {state.grid.width}x{state.grid.height} "
            f"{state.grid.bit_depth}-bit data as {describe(state.document.format)}"
        )
        self.generated.emit(state)

    def _show_state(self, state: PipelineState):
        """Render a PipelineState into the preview, output and stats widgets."""
        self.state = state

        preview = render_preview(state.grid)
        pixmap = pil_to_pixmap(preview)
        min_width, min_height = SIZES.DOT_PREVIEW_MIN_SIZE
        if pixmap.width() < min_width and pixmap.height() < min_height:
            # Enlarge small grids without smoothing so pixels stay crisp
            pixmap = pixmap.scaled(
                min_width,
                min_height,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.FastTransformation,
            )
        self.dot_preview_label.setPixmap(pixmap)

        self.output_text.setPlainText(state.document.text)
        self.data_size_label.setText(f"Data size: {state.stats.byte_size} bytes")
        self.pixel_count_label.setText(f"Pixel count: {state.stats.pixel_count}")

        has_document = not state.document.is_empty
        self.export_btn.setEnabled(has_document)
        self.export_binary_btn.setEnabled(state.has_result)

    def clear(self):
        """Discard the loaded image and all generated results."""
        self.state = PipelineState.empty()
        self.loaded_image = None
        self.current_image_path = None

        self.file_path_label.setText("No image selected")
        self.source_preview_label.clear()
        self.source_preview_label.setText("Image preview will appear here")
        self.dot_preview_label.clear()
        self.dot_preview_label.setText("Dot matrix preview will appear here")
        self.output_text.clear()
        self.text_input.setText(DEFAULT_TEXT)
        self.data_size_label.setText("Data size: 0 bytes")
        self.pixel_count_label.setText("Pixel count: 0")
        self.export_btn.setEnabled(False)
        self.export_binary_btn.setEnabled(False)
        self.status_label.setText("")
        self.cleared.emit()

    # === Export ===

    def _on_export_clicked(self):
        """Save the generated document with the format's extension."""
        if self.state.document.is_empty:
            self.error_log.log("Generate dot matrix data first", ERROR_SOURCE)
            return

        grid = self.state.grid
        suggested = default_filename(
            grid.width, grid.height, grid.bit_depth, self.state.document.format
        )
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export Dot Matrix Data", suggested, "All Files (*)"
        )
        if not file_path:
            return

        try:
            path = export_document(self.state, file_path)
        except OSError as e:
            self.error_log.log(f"Export failed: {e}", ERROR_SOURCE)
            return
        self.status_label.setText(f"Saved {path.name}")
        self.status_message.emit(f"💾 Exported {path}")

    def _on_export_binary_clicked(self):
        """Save the raw packed bytes."""
        if not self.state.has_result:
            self.error_log.log("Generate dot matrix data first", ERROR_SOURCE)
            return

        grid = self.state.grid
        suggested = f"lcd_{grid.width}x{grid.height}_{grid.bit_depth}bit.raw"
        file_path, _ = QFileDialog.getSaveFileName(
            self, "Export Raw Bytes", suggested, "All Files (*)"
        )
        if not file_path:
            return

        try:
            path = export_binary(self.state, file_path)
        except OSError as e:
            self.error_log.log(f"Export failed: {e}", ERROR_SOURCE)
            return
        self.status_label.setText(f"Saved {path.name} ({len(self.state.buffer)} bytes)")
        self.status_message.emit(f"💾 Exported {path}")

    # === Public Methods ===

    def update_settings(self, settings: AppSettings):
        """Apply new defaults from the settings dialog."""
        self.settings = settings

    def apply_to_settings(self, settings: AppSettings) -> AppSettings:
        """Settings updated with the panel's current control values."""
        config = self.current_config()
        return replace(
            settings,
            lcd_width=config.width,
            lcd_height=config.height,
            threshold=config.threshold,
            bit_depth=config.bit_depth,
            bit_order=config.bit_order.value,
            output_format=config.output_format.value,
            font_family=self.font_family_input.text().strip() or settings.font_family,
            font_size=self.font_size_spin.value(),
        )
