#!/usr/bin/env python3
"""Run the status probe for many repositories on a bounded thread pool."""
from __future__ import annotations

import concurrent.futures as cf
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List

from repo_state import RepositoryStatus

log = logging.getLogger(__name__)

DEFAULT_WORKERS = 8


def dispatch(
    repos: Iterable[Path],
    probe: Callable[[Path], RepositoryStatus],
    workers: int = DEFAULT_WORKERS,
) -> List[RepositoryStatus]:
    """Probe every repository and return once all probes have finished.

    Results arrive in completion order. A probe that raises still yields an
    error status for its repository.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    results: List[RepositoryStatus] = []
    with cf.ThreadPoolExecutor(max_workers=workers) as ex:
        futures: Dict[cf.Future[RepositoryStatus], Path] = {ex.submit(probe, repo): repo for repo in repos}
        for fut in cf.as_completed(futures):
            repo = futures[fut]
            try:
                results.append(fut.result())
            except Exception as exc:
                log.debug("Probe crashed for %s", repo, exc_info=True)
                results.append(RepositoryStatus(path=repo, error=f"Probe failed: {exc}"))
    return results
