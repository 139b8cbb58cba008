from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .config import ConfigError, load_install_config
from .lib.env import PATHS
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import InstallCtx, StepFailed, run_pipeline
from .state_store import ensure_defaults, load_state, save_state
from .steps import (
    BuildNativeModulesStep,
    FetchAssetStep,
    FetchRepoStep,
    InstallDepsStep,
    LaunchAppStep,
    ProvisionEnvStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = PATHS.state_default


def build_steps():
    return [
        ProvisionEnvStep(),
        FetchRepoStep(),
        FetchAssetStep(),
        InstallDepsStep(),
        BuildNativeModulesStep(),
        LaunchAppStep(),
    ]


def run(
    *,
    config_path: Optional[str] = None,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Run the provisioning pipeline, persisting a record of the run."""

    actual_log_path = configure_logging(log_path=log_path, verbose=verbose)

    cfg = load_install_config(config_path)
    ctx = InstallCtx.from_config(cfg, dry_run=dry_run)

    logger.info("--- Installer start ---")
    logger.info("Project directory: %s", cfg.project_dir)
    logger.info("Conda environment: %s (Python %s)", cfg.env_name, cfg.python_version)
    logger.info("Using HF endpoint: %s", cfg.hf_endpoint)

    state = ensure_defaults(load_state(state_path))
    state["execution"].setdefault("paths", {})["log_path_requested"] = log_path
    state["execution"]["paths"]["log_path_actual"] = actual_log_path
    state["execution"]["dry_run"] = dry_run

    steps = build_steps()

    try:
        result = run_pipeline(
            ctx=ctx,
            state=state,
            steps=steps,
            start_at=start_at,
            stop_after=stop_after,
        )
        state = result.state
        state["execution"].setdefault("summary", {})["ran_steps"] = result.ran_steps
        state["execution"]["summary"]["skipped_steps"] = result.skipped_steps
        logger.info("--- Installer end ---")
        return state
    except StepFailed as e:
        logger.exception("Installer failed")
        state["execution"]["errors"].append({"step": e.step_id, "error": str(e.cause)})
        raise
    finally:
        save_state(state_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="hy3d-installer")
    p.add_argument("--config", default=None, help="YAML file overriding the built-in defaults")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to installer state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_install_deps)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 50_build_native_modules)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Show captured command output on the console")

    args = p.parse_args(argv)

    try:
        state = run(
            config_path=args.config,
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            verbose=bool(args.verbose),
        )
    except StepFailed as e:
        print(f"Error: {e}")
        return 1
    except (ConfigError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 2
    except KeyboardInterrupt:
        print("Interrupted")
        return 130

    return exit_status(state["execution"].get("app_exit_code"))


def exit_status(returncode: Optional[int]) -> int:
    """Map the app's return code to our exit status.

    A child killed by signal N reports -N; shells report that as 128+N.
    """

    code = int(returncode or 0)
    if code < 0:
        return 128 - code
    return code
