from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV   = "dev"
    TEST  = "test"
    PROD  = "prod"


# Map common aliases -> canonical
SYNONYMS: dict[str, Env] = {
    "development": Env.DEV,
    "dev": Env.DEV,
    "local": Env.LOCAL,
    "test": Env.TEST,
    "testing": Env.TEST,
    "preview": Env.TEST,
    "prod": Env.PROD,
    "production": Env.PROD,
}


def _normalize(raw: str | None) -> Env | None:
    if not raw:
        return None
    val = raw.strip().lower()
    if val in (e.value for e in Env):
        return Env(val)
    return SYNONYMS.get(val)


@cache
def get_env() -> Env:
    """
    Resolve the current environment once from ``APP_ENV``.

    Unknown values fall back to LOCAL with a one-time warning. Call
    ``get_env.cache_clear()`` after changing ``APP_ENV`` at runtime.
    """
    raw = os.getenv("APP_ENV")
    env = _normalize(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized environment '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        env = Env.LOCAL
    return env


def pick(*, prod, nonprod, dev=None, test=None, local=None):
    """
    Choose a value based on the active environment.

    Example:
        log_level = pick(prod="INFO", nonprod="DEBUG", dev="DEBUG")
    """
    e = get_env()
    if e is Env.PROD:
        return prod
    if e is Env.DEV and dev is not None:
        return dev
    if e is Env.TEST and test is not None:
        return test
    if e is Env.LOCAL and local is not None:
        return local
    return nonprod
