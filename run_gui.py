#!/usr/bin/env python

import logging
import sys
from pathlib import Path

import flet as ft
from name_trends.data_analyzer import DATA_FILE, load_catalog
from name_trends.gui import main as gui_main
from name_trends.logging_config import setup_logging

if __name__ == "__main__":
    """
    This script is the entry point for running the Flet-based Graphical User Interface (GUI).
    The data file is read before the window opens; any error in it is fatal.
    """
    setup_logging()
    data_file = Path(sys.argv[1]) if len(sys.argv) > 1 else DATA_FILE
    try:
        catalog = load_catalog(data_file)
    except (OSError, ValueError):
        logging.getLogger("name_trends").exception("Could not load %s", data_file)
        sys.exit(1)
    ft.app(target=lambda page: gui_main(page, catalog))
