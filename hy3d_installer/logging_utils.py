from __future__ import annotations

import logging
import sys
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "hy3d-installer.log"

FILE_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)
CONSOLE_FORMAT = logging.Formatter(fmt="[%(levelname)s] %(message)s")


def _open_log_file(log_path: str) -> tuple[logging.FileHandler, str]:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    also_console: bool = True,
) -> str:
    """Send installer logs to a file and to stdout.

    The file always receives DEBUG records, which include the captured output
    of every external command. The console shows INFO and up, or DEBUG with
    ``verbose``. An unwritable ``log_path`` falls back to
    ``./hy3d-installer.log``.

    Returns the actual file path being used.
    """

    root = logging.getLogger()
    if getattr(root, "_hy3d_log_path", None):
        return root._hy3d_log_path  # type: ignore[attr-defined]

    root.setLevel(logging.DEBUG)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(FILE_FORMAT)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.DEBUG if verbose else logging.INFO)
        console.setFormatter(CONSOLE_FORMAT)
        root.addHandler(console)

    root._hy3d_log_path = chosen_path  # type: ignore[attr-defined]

    log = logging.getLogger(__name__)
    if chosen_path != log_path:
        log.warning("Cannot write %s; logging to %s instead", log_path, chosen_path)
    else:
        log.debug("Logging to %s", chosen_path)
    return chosen_path
