#!/usr/bin/env python

import logging
import sys
from pathlib import Path

from name_trends.data_analyzer import DATA_FILE, load_catalog
from name_trends.logging_config import setup_logging
from name_trends.tui import NameTrendsApp

if __name__ == "__main__":
    """
    This script is the entry point for running the Textual User Interface (TUI).
    Logs go to name_trends.log because the terminal belongs to the app.
    """
    setup_logging(log_file="name_trends.log", console=False)
    data_file = Path(sys.argv[1]) if len(sys.argv) > 1 else DATA_FILE
    try:
        catalog = load_catalog(data_file)
    except (OSError, ValueError):
        logging.getLogger("name_trends").exception("Could not load %s", data_file)
        print(f"Could not load {data_file}, see name_trends.log", file=sys.stderr)
        sys.exit(1)
    app = NameTrendsApp(catalog)
    app.run()
