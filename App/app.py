"""EmbeddedTools - Main entry point."""

import sys

from PyQt6.QtWidgets import QApplication

from ui.main_window import EmbeddedToolsWindow


def main():
    """Launch the EmbeddedTools application."""
    app = QApplication(sys.argv)

    app.setApplicationDisplayName("EmbeddedTools")
    app.setApplicationName("EmbeddedTools")

    window = EmbeddedToolsWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
