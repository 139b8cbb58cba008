"""Hunyuan3D-2GP installer (Python-first, resumable).

Core design goals:
- Idempotent steps guarded by existence checks
- Fail-fast: the first failing step stops the run
- Explicit context instead of an activated shell environment
- Centralized logging
"""

__all__ = []
