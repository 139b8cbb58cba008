from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from .command import require_tool, run_cmd

logger = logging.getLogger(__name__)


def clone_repo(
    repo: str,
    dest: str,
    *,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> None:
    """Clone ``repo`` into ``dest``, creating parent directories first."""

    require_tool("git")
    d = Path(dest)
    if not dry_run:
        d.parent.mkdir(parents=True, exist_ok=True)
    run_cmd(["git", "clone", repo, str(d)], env=env, stream=True, dry_run=dry_run)
