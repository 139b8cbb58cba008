from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.pip import pip_install, pip_install_requirements
from ..pipeline import InstallCtx
from ..state_store import add_warning

logger = logging.getLogger(__name__)


class InstallDepsStep:
    step_id = "40_install_deps"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        cfg = ctx.cfg

        logger.info("Installing %s from %s", ", ".join(cfg.torch_packages), cfg.torch_index_url)
        pip_install(
            cfg.env_name,
            cfg.torch_packages,
            index_url=cfg.torch_index_url,
            env=ctx.child_env,
            dry_run=ctx.dry_run,
        )

        requirements = cfg.requirements_path
        if Path(requirements).is_file():
            logger.info("Installing dependencies from %s", requirements)
            pip_install_requirements(
                cfg.env_name,
                requirements,
                cwd=cfg.project_dir,
                env=ctx.child_env,
                dry_run=ctx.dry_run,
            )
        else:
            logger.warning("%s not found. Skipping dependency installation.", requirements)
            add_warning(state, {"step": self.step_id, "missing_manifest": requirements})

        return "ran"
