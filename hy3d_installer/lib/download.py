from __future__ import annotations

import logging
import os
from pathlib import Path

from .command import MissingToolError, run_cmd, which

logger = logging.getLogger(__name__)


def _download_argv(url: str, out: Path) -> list[str]:
    if which("wget"):
        return ["wget", "--trust-server-names", "-L", url, "-O", str(out)]
    if which("curl"):
        return ["curl", "-fL", url, "-o", str(out)]
    raise MissingToolError("wget", "Install wget or curl to download model files.")


def download_file(url: str, dest: str, *, env: dict[str, str] | None = None, dry_run: bool = False) -> None:
    """Download ``url`` to ``dest``.

    The transfer lands in ``<dest>.part`` and is renamed into place only after
    the downloader succeeds, so ``dest`` exists only for complete transfers.
    No checksum is verified.
    """

    d = Path(dest)
    part = d.with_name(d.name + ".part")
    argv = _download_argv(url, part)

    if dry_run:
        run_cmd(argv, dry_run=True)
        return

    d.parent.mkdir(parents=True, exist_ok=True)
    try:
        run_cmd(argv, env=env, stream=True)
    except Exception:
        if part.exists():
            part.unlink()
        raise
    os.replace(part, d)
    logger.info("Downloaded %s -> %s", url, d)
