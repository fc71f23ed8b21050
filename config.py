"""
Constants and configuration for the workspace dependency graph engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Optional

from pydantic_settings import BaseSettings


DUPLICATE_POLICY_ERROR = "error"
DUPLICATE_POLICY_LAST_WINS = "last_wins"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


WSGRAPH_INCLUDE_DEV_DEPENDENCIES: bool = _env_bool("WSGRAPH_INCLUDE_DEV_DEPENDENCIES", True)
WSGRAPH_DUPLICATE_POLICY: str = os.getenv("WSGRAPH_DUPLICATE_POLICY", DUPLICATE_POLICY_ERROR).lower()

# None means the impact traversal is not depth-bounded
WSGRAPH_BLAST_RADIUS_MAX_DEPTH: Optional[int] = _env_optional_int("WSGRAPH_BLAST_RADIUS_MAX_DEPTH")
WSGRAPH_TREE_MAX_DEPTH: int = int(os.getenv("WSGRAPH_TREE_MAX_DEPTH", "32"))
WSGRAPH_STATS_TOP_DEPENDENTS: int = int(os.getenv("WSGRAPH_STATS_TOP_DEPENDENTS", "5"))
WSGRAPH_MAX_PARALLEL_LOADS: int = int(os.getenv("WSGRAPH_MAX_PARALLEL_LOADS", "16"))

TREE_ROOT_LABEL = "Root Packages"


class Settings(BaseSettings):
    # graph construction
    include_dev_dependencies: bool = WSGRAPH_INCLUDE_DEV_DEPENDENCIES
    duplicate_policy: str = WSGRAPH_DUPLICATE_POLICY

    # reverse queries
    blast_radius_max_depth: Optional[int] = WSGRAPH_BLAST_RADIUS_MAX_DEPTH

    # insights
    tree_max_depth: int = WSGRAPH_TREE_MAX_DEPTH
    tree_root_label: str = TREE_ROOT_LABEL
    stats_top_dependents: int = WSGRAPH_STATS_TOP_DEPENDENTS
    stats_round_precision: int = 2

    # record collection
    max_parallel_loads: int = WSGRAPH_MAX_PARALLEL_LOADS

    model_config = {
        "env_prefix": "WSGRAPH_",
        "extra": "ignore",
        "env_ignore_empty": True,
    }


settings = Settings()
