# src/focuslist/cli/main.py

"""
`focuslist` console script.

Sets up logging under the data dir, loads the task snapshot, runs the REPL and
always attempts a final save on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, shutdown
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(log_dir=settings.data_dir, console_level=level_from_name(settings.log_level))
    logger.info("Starting %s (snapshot=%s, log=%s)", settings.app_name, settings.snapshot_path, log_file)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        shutdown(state)
        logger.info("Exited with %d tasks.", state.store.count())


if __name__ == "__main__":
    main()
