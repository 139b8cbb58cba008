from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.git import clone_repo
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class FetchRepoStep:
    step_id = "20_fetch_repo"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        project_dir = ctx.cfg.project_dir

        if Path(project_dir).is_dir():
            logger.info("Project directory %s already exists. Skipping clone.", project_dir)
            return "skipped"

        logger.info("Project directory not found. Cloning %s", ctx.cfg.project_repo)
        clone_repo(ctx.cfg.project_repo, project_dir, env=ctx.child_env, dry_run=ctx.dry_run)
        logger.info("Repository cloned to %s", project_dir)
        return "created"
