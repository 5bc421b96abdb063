from __future__ import annotations
import os


_TRUTHY = ("1", "true", "yes", "on")

# Defaults
_DEFAULT_MAX_DEPTH = 100_000


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def disasm_enabled() -> bool:
    return flag_from_env('R6_DISASM')


def get_max_depth() -> int:
    # Maximum number of nested procedure calls the VM allows
    return int_from_env('R6_MAX_DEPTH', _DEFAULT_MAX_DEPTH)
