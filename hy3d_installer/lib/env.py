from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    state_default: str = "/workspace/.hy3d-installer/state.json"
    log_default: str = "/workspace/.hy3d-installer/hy3d-installer.log"


PATHS = Paths()
