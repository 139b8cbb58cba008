from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.pip import setup_py_install
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class BuildNativeModulesStep:
    step_id = "50_build_native_modules"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        project_dir = Path(ctx.cfg.project_dir)
        built: list[str] = []

        # Modules build one after another; a missing directory stops the run
        # even if an earlier module already built.
        for rel in ctx.cfg.native_modules:
            module_dir = project_dir / rel
            if not module_dir.is_dir():
                if ctx.dry_run and not project_dir.exists():
                    # The clone was only planned, so there is nothing to inspect yet.
                    logger.info("Would install %s from %s", Path(rel).name, module_dir)
                    continue
                raise RuntimeError(f"{Path(rel).name} directory not found at {rel}")

            logger.info("Installing %s", Path(rel).name)
            setup_py_install(ctx.cfg.env_name, str(module_dir), env=ctx.child_env, dry_run=ctx.dry_run)
            built.append(rel)

        state.setdefault("execution", {}).setdefault("decisions", {})["native_modules"] = built
        return "ran"
