"""Shared colours, fonts and sizes for the EmbeddedTools UI."""

from PyQt6.QtGui import QFont

from models import ConnectionState


class StatusColors:
    """Serial status indicator colours."""

    CONNECTED = "green"
    CONNECTING = "orange"
    ERROR = "red"
    DISCONNECTED = "gray"


class ThemeColors:
    """Preview panel colours."""

    BACKGROUND_PANEL = "#2a2a2a"
    BORDER_DEFAULT = "gray"


class Fonts:
    CONSOLE = QFont("Courier", 9)
    OUTPUT = QFont("Courier", 10)  # generated data listing
    STATUS_INDICATOR = QFont("Arial", 16)


class Sizes:
    """Minimum and fixed widget sizes."""

    CONSOLE_MIN_HEIGHT = 100

    # LCD tool
    SOURCE_PREVIEW_SIZE = (400, 300)
    DOT_PREVIEW_MIN_SIZE = (256, 128)
    LABEL_MIN_WIDTH = 40

    # Serial tool
    PORT_COMBO_MIN_WIDTH = 250
    RECEIVE_MIN_HEIGHT = 200
    SEND_MAX_HEIGHT = 80
    BUTTON_MIN_WIDTH = 100


FONTS = Fonts
SIZES = Sizes

_CONNECTION_COLORS = {
    ConnectionState.CONNECTED: StatusColors.CONNECTED,
    ConnectionState.CONNECTING: StatusColors.CONNECTING,
    ConnectionState.ERROR: StatusColors.ERROR,
    ConnectionState.DISCONNECTED: StatusColors.DISCONNECTED,
}


def connection_stylesheet(state: ConnectionState) -> str:
    """Stylesheet colouring the "●" indicator for a connection state."""
    return f"color: {_CONNECTION_COLORS[state]};"


def panel_stylesheet() -> str:
    """Bordered dark background used behind image previews."""
    return (
        f"border: 1px solid {ThemeColors.BORDER_DEFAULT}; "
        f"background-color: {ThemeColors.BACKGROUND_PANEL};"
    )
