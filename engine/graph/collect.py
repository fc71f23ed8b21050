"""
Concurrent collection of package records from asynchronous loaders. Failed loads are kept in place as exceptions so the graph builder can exclude them and report them as diagnostics.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Iterable, List, Optional

from config import settings
from engine.graph.builder import GraphBuilder
from engine.graph.model import DependencyGraph

log = logging.getLogger(__name__)


async def collect_records(
    loaders: Iterable[Awaitable[Any]],
    max_parallel: Optional[int] = None,
) -> List[Any]:
    if max_parallel is None:
        max_parallel = settings.max_parallel_loads
    sem = asyncio.Semaphore(max(1, int(max_parallel)))

    async def _load(loader: Awaitable[Any]) -> Any:
        async with sem:
            return await loader

    pending = list(loaders)
    if not pending:
        return []

    raw = await asyncio.gather(*[_load(loader) for loader in pending], return_exceptions=True)

    records: List[Any] = []
    failed = 0
    for result in raw:
        if isinstance(result, BaseException) and not isinstance(result, Exception):
            raise result
        if isinstance(result, Exception):
            failed += 1
            records.append(result)
        elif isinstance(result, (list, tuple)):
            # one loader may yield every package of a repository
            records.extend(result)
        else:
            records.append(result)

    if failed:
        log.warning("collect_records: %d of %d loads failed", failed, len(pending))
    log.debug("collect_records: loaders=%d records=%d", len(pending), len(records))
    return records


async def build_graph_async(
    loaders: Iterable[Awaitable[Any]],
    builder: Optional[GraphBuilder] = None,
    max_parallel: Optional[int] = None,
) -> DependencyGraph:
    records = await collect_records(loaders, max_parallel=max_parallel)
    return (builder or GraphBuilder()).build(records)
