"""
Central scan-policy switch for converter and solver.
Callers (or tests) may call set_policy(value) to change how unknown input
is handled; the engines only *read* the current value through
resolve_policy().

    strict  : unrecognised characters / operators raise
    lenient : unrecognised characters truncate the scan, unknown
              operators drop their operands
"""
from typing import List, Optional

_POLICIES: List[str] = ['strict', 'lenient']  # default first
_CURRENT = _POLICIES[0]


def get_policy() -> str:
    """Return the active scan policy."""
    return _CURRENT


def set_policy(value: str) -> None:
    """Set the global policy if value is one of the approved ones."""
    global _CURRENT
    if value not in _POLICIES:
        raise ValueError(f"policy {value!r} not allowed; choose one of {_POLICIES}")
    _CURRENT = value


def policies() -> List[str]:
    return _POLICIES.copy()


def resolve_policy(value: Optional[str] = None) -> str:
    """Per-call override wins over the global setting."""
    if value is None:
        return _CURRENT
    if value not in _POLICIES:
        raise ValueError(f"policy {value!r} not allowed; choose one of {_POLICIES}")
    return value
