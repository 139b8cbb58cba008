from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.command import run_cmd
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class LaunchAppStep:
    step_id = "60_launch_app"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        cfg = ctx.cfg
        logger.info("Starting the application (%s)", cfg.app_entry)

        # Blocks until the app exits; its status becomes ours.
        r = run_cmd(
            ctx.in_env(["python", cfg.app_entry, *cfg.app_args]),
            check=False,
            env=ctx.child_env,
            cwd=cfg.project_dir,
            stream=True,
            dry_run=ctx.dry_run,
        )
        state.setdefault("execution", {})["app_exit_code"] = r.returncode
        logger.info("Application exited with status %s", r.returncode)
        return "ran"
