from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .config import InstallConfig
from .lib.conda import conda_run_argv
from .state_store import record_step

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallCtx:
    """Explicit context handed to every step.

    ``child_env`` holds the variables exported to every child process.
    Commands that belong inside the provisioned environment go through
    ``in_env``; nothing relies on a shell-level activation.
    """

    cfg: InstallConfig
    child_env: Dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    @classmethod
    def from_config(cls, cfg: InstallConfig, *, dry_run: bool = False) -> "InstallCtx":
        return cls(cfg=cfg, child_env={"HF_ENDPOINT": cfg.hf_endpoint}, dry_run=dry_run)

    def in_env(self, argv: Sequence[str]) -> List[str]:
        return conda_run_argv(self.cfg.env_name, argv)


class Step(Protocol):
    """A single idempotent step.

    ``run`` returns the outcome recorded in state: ``created`` or ``skipped``
    for guarded steps, ``ran`` for steps without an existence guard.
    """

    step_id: str

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> str:
        ...


class StepFailed(RuntimeError):
    """The pipeline stopped because ``step_id`` failed."""

    def __init__(self, step_id: str, cause: BaseException) -> None:
        self.step_id = step_id
        self.cause = cause
        super().__init__(f"Step {step_id} failed: {cause}")


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(
    *,
    ctx: InstallCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Run steps in order, stopping at the first failure."""

    ids = [s.step_id for s in steps]
    for wanted in (start_at, stop_after):
        if wanted is not None and wanted not in ids:
            raise ValueError(f"Unknown step_id {wanted!r} (expected one of: {', '.join(ids)})")

    ran: List[str] = []
    skipped: List[str] = []

    started = start_at is None

    for step in steps:
        if not started:
            if step.step_id == start_at:
                started = True
            else:
                continue

        state.setdefault("execution", {})["current_step"] = step.step_id
        logger.info("Running step %s", step.step_id)

        try:
            outcome = step.run(ctx, state)
        except Exception as e:
            raise StepFailed(step.step_id, e) from e

        record_step(state, step.step_id, outcome)
        if outcome == "skipped":
            skipped.append(step.step_id)
        else:
            ran.append(step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            logger.info("Stopping after %s", stop_after)
            break

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
