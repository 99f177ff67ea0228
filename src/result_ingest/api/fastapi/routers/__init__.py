from __future__ import annotations

import importlib
import logging
import pkgutil
from types import ModuleType
from typing import Optional, Set

from fastapi import FastAPI

from result_ingest.app.core.env import Env, get_env

logger = logging.getLogger(__name__)


def _should_skip_module(module_name: str, exclude_segments: Set[str]) -> bool:
    parts = module_name.split(".")
    if parts[-1].startswith("_"):
        return True
    return any(seg in exclude_segments for seg in parts)


def _exclusions_for(env: Env, exclude: dict[Env | str, set[str]]) -> Set[str]:
    segments: Set[str] = set()
    for key, names in exclude.items():
        if key == "all" or Env(key) == env:
            segments.update(names)
    return segments


def register_all_routers(
        app: FastAPI,
        *,
        base_package: Optional[str] = None,
        prefix: str = "",
        exclude: Optional[dict[Env | str, set[str]]] = None,
        env: Optional[Env | str] = None,
) -> None:
    """
    Discover and include every module-level ``router`` under a package.

    Args:
        app: FastAPI application instance.
        base_package: Import path of the routers package; defaults to this one.
        prefix: Prefix applied to every discovered router.
        exclude: Env (or "all") -> path segments to skip in that environment.
        env: Environment to resolve exclusions for (defaults to get_env()).

    Modules whose last segment starts with '_' are skipped. A module may set
    ROUTER_PREFIX, ROUTER_TAG and INCLUDE_ROUTER_IN_SCHEMA.
    """
    base_package = base_package or __name__
    try:
        package_module: ModuleType = importlib.import_module(base_package)
    except Exception as exc:
        raise RuntimeError(f"Could not import base_package '{base_package}': {exc}") from exc

    if not hasattr(package_module, "__path__"):
        raise RuntimeError(f"Provided base_package '{base_package}' is not a package (no __path__).")

    env = get_env() if env is None else Env(env)
    exclude_set = _exclusions_for(env, exclude or {})
    if exclude_set:
        logger.debug("Router discovery exclusions active for env '%s': %s", env, sorted(exclude_set))

    for _, module_name, _ in pkgutil.walk_packages(package_module.__path__, prefix=f"{base_package}."):
        if _should_skip_module(module_name, exclude_set):
            logger.debug("Skipping router module: %s", module_name)
            continue
        module = importlib.import_module(module_name)
        router = getattr(module, "router", None)
        if router is None:
            continue

        router_prefix = getattr(module, "ROUTER_PREFIX", None)
        router_tag = getattr(module, "ROUTER_TAG", None)
        include_kwargs: dict = {
            "prefix": prefix.rstrip("/") + router_prefix if router_prefix else prefix,
            "include_in_schema": getattr(module, "INCLUDE_ROUTER_IN_SCHEMA", True),
        }
        if router_tag:
            include_kwargs["tags"] = [router_tag]
        app.include_router(router, **include_kwargs)
        logger.debug("Included router from module: %s (prefix=%s)", module_name, include_kwargs["prefix"])
