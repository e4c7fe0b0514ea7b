"""Filesystem path confinement shared by local fetch and job staging."""

from __future__ import annotations

from pathlib import Path


def domain_resolve_confined_path(base_path: Path, candidate: str | Path) -> Path:
    """Resolve a candidate path and require it to stay under a base directory.

    Relative candidates are joined onto the base; absolute candidates are
    accepted only when they already point inside it. Symlinks and `..`
    segments are resolved before the check.

    Args:
        base_path: Already resolved directory the result must stay within.
        candidate: Relative or absolute path supplied by a caller.

    Returns:
        Path: Resolved path equal to or below base_path.

    Raises:
        ValueError: Raised when the resolved path escapes base_path.
    """

    resolved_path = (base_path / candidate).resolve()
    if resolved_path != base_path and base_path not in resolved_path.parents:
        raise ValueError(f"path resolves outside base directory: {candidate}")
    return resolved_path
