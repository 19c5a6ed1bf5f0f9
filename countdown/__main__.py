"""Allow running Countdown as a module: python -m countdown."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import CountdownApp


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Countdown")
    app.setOrganizationName("Countdown")

    window = CountdownApp()
    window.show()
    logging.getLogger(__name__).info("Countdown ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
