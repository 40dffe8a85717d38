import sys
import os
import logging
from PyQt5.QtWidgets import QApplication
from controller import MainController
# Make sure a catalog file exists before launching the GUI
from database import db
import inserting


def prepare_catalog_if_needed(store=None):
    store = store or db
    if inserting.catalog_needs_seed(store):
        logging.getLogger(__name__).info("No catalog found at %s - seeding initial products...", store.catalog_path)
        inserting.seed(store)


def load_stylesheet(app):
    # Resolve relative to this script first, then cwd
    qss_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "assets", "themes", "store.qss")
    if not os.path.exists(qss_path):
        qss_path = os.path.join(os.getcwd(), "assets", "themes", "store.qss")
    try:
        with open(qss_path, 'r', encoding='utf-8') as fh:
            app.setStyleSheet(fh.read())
    except OSError:
        logging.getLogger(__name__).info("No stylesheet at %s, using default style", qss_path)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    app = QApplication(sys.argv)
    load_stylesheet(app)

    prepare_catalog_if_needed()

    window = MainController()
    window.show()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
