from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.conda import create_env, env_exists, require_conda
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class ProvisionEnvStep:
    step_id = "10_provision_env"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        name = ctx.cfg.env_name
        python_version = ctx.cfg.python_version

        conda_path = require_conda()
        state.setdefault("execution", {}).setdefault("decisions", {})["conda"] = conda_path

        logger.info("Checking for conda environment %r", name)
        if env_exists(name, dry_run=ctx.dry_run):
            logger.info("Conda environment %r already exists", name)
            outcome = "skipped"
        else:
            logger.info("Creating conda environment %r with Python %s", name, python_version)
            create_env(name, python_version, env=ctx.child_env, dry_run=ctx.dry_run)
            outcome = "created"

        # Later steps reach the environment through `conda run -n <name>`.
        state["execution"]["decisions"]["environment"] = {"name": name, "python_version": python_version}
        return outcome
