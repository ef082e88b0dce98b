"""Load and expose export column sets from YAML (with fallbacks)."""

from __future__ import annotations

from pathlib import Path

import yaml

from .config import (
    CONSULTANT_BREAKDOWN_COLUMNS,
    HOURS_DETAIL_COLUMNS,
    ISSUE_SUMMARY_COLUMNS,
    MODULE_BREAKDOWN_COLUMNS,
)

_CACHE: dict[str, list[str]] | None = None

_DEFAULTS: dict[str, tuple[str, ...]] = {
    "issue_summary": tuple(ISSUE_SUMMARY_COLUMNS),
    "module_breakdown": tuple(MODULE_BREAKDOWN_COLUMNS),
    "consultant_breakdown": tuple(CONSULTANT_BREAKDOWN_COLUMNS),
    "hours_detail": tuple(HOURS_DETAIL_COLUMNS),
}


def _defaults() -> dict[str, list[str]]:
    return {name: list(cols) for name, cols in _DEFAULTS.items()}


def load_column_sets(base_path: str | Path | None = None, *, reload: bool = False):
    """Column order per exported sheet.

    A ``columns.yaml`` next to the package may list a subset or a different
    order under ``sets``; unknown column names are ignored and sets missing
    from the file keep the built-in order.
    """
    global _CACHE
    if _CACHE is not None and not reload:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "columns.yaml"
    if not yaml_path.exists():
        _CACHE = _defaults()
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError:
        _CACHE = _defaults()
        return _CACHE
    sets = data.get("sets", {}) if isinstance(data, dict) else {}
    out = _defaults()
    for name, allowed in _DEFAULTS.items():
        configured = sets.get(name) if isinstance(sets, dict) else None
        if not configured:
            continue
        picked = [c for c in configured if c in allowed]
        if picked:
            out[name] = picked
    _CACHE = out
    return _CACHE


def get_columns(set_name: str) -> list[str]:
    sets = load_column_sets()
    return sets.get(set_name, [])
