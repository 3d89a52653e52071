"""Entry point for Tilesmith application."""

import sys
from pathlib import Path


def setup_logging():
    """Setup application logging."""
    from tilesmith.utils.logger import setup_logging as init_logging

    logger = init_logging()

    # Setup exception hook to log crashes
    def exception_hook(exc_type, exc_value, exc_tb):
        logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_tb))
        sys.__excepthook__(exc_type, exc_value, exc_tb)

    sys.excepthook = exception_hook
    logger.info("Exception hook installed")
    return logger


# Initialize logging early
_logger = setup_logging()

try:
    from PySide6.QtWidgets import QApplication
    from PySide6.QtGui import QIcon

    from tilesmith.core.image_loader import is_supported_image
    from tilesmith.utils.i18n import tr
    from tilesmith.views.main_window import MainWindow

    _logger.debug("All imports completed successfully")
except Exception as e:
    _logger.critical(f"Failed to import modules: {e}", exc_info=True)
    raise


def main():
    _logger.info("main() started")

    app = QApplication(sys.argv)
    app_name = tr("app_name")
    app.setApplicationName(app_name)
    app.setApplicationDisplayName(app_name)
    app.setOrganizationName("Tilesmith")

    if getattr(sys, "frozen", False):
        # PyInstaller frozen app
        icon_path = Path(sys._MEIPASS) / "assets" / "icon.png"  # type: ignore
    else:
        icon_path = Path(__file__).parent.parent.parent / "assets" / "icon.png"

    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))
    else:
        _logger.debug(f"Icon not found: {icon_path}")

    window = MainWindow()
    window.show()

    # Tile sheet passed on the command line
    if len(sys.argv) > 1:
        arg_path = Path(sys.argv[1]).resolve()
        _logger.info(f"Command line argument: {arg_path}")
        if arg_path.is_file() and is_supported_image(arg_path):
            window.open_tile_sheets([arg_path])
        else:
            _logger.warning(f"Not a supported image file: {arg_path}")

    _logger.info("Starting Qt event loop")
    result = app.exec()
    _logger.info(f"Qt event loop ended with result: {result}")
    sys.exit(result)


if __name__ == "__main__":
    main()
