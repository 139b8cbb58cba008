from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..lib.download import download_file
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class FetchAssetStep:
    step_id = "30_fetch_asset"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        model_path = ctx.cfg.model_path

        if Path(model_path).is_file():
            logger.info("Model file %s already exists. Skipping download.", model_path)
            return "skipped"

        logger.info("Model file %s does not exist. Downloading %s", model_path, ctx.cfg.model_url)
        download_file(ctx.cfg.model_url, model_path, env=ctx.child_env, dry_run=ctx.dry_run)
        return "created"
