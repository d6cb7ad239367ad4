from __future__ import annotations

import time
from collections.abc import Sequence

from ..core.config import SearchConfig
from ..core.types import Record, SearchResult
from ..utils.logging_config import SearchLogger, get_logger
from .scorer import match_record, normalize_query


def search_records(
    query: str,
    candidates: Sequence[Record],
    cfg: SearchConfig,
    logger: SearchLogger | None = None,
) -> list[SearchResult]:
    """
    Rank candidate records against a free-text query.

    A blank query yields no results; callers treat that as "no text
    filtering" rather than "nothing matched". Results under the configured
    threshold are dropped, the rest are sorted by descending score and
    truncated to ``cfg.max_results``. The sort is stable, so records with equal
    scores keep their candidate order.

    Args:
        query: Raw query text
        candidates: Records to score, in store order
        cfg: Weights, thresholds and limits
        logger: Logger for start/complete events

    Returns:
        Ranked list of SearchResult
    """
    normalized = normalize_query(query)
    if not normalized:
        return []

    log = logger or get_logger()
    log.log_search_start(query=normalized, candidates=len(candidates))
    t0 = time.perf_counter()

    results: list[SearchResult] = []
    for record in candidates:
        result = match_record(normalized, record, cfg)
        if result.score >= cfg.score_threshold:
            results.append(result)

    results.sort(key=lambda r: r.score, reverse=True)
    results = results[: cfg.max_results]

    elapsed_ms = (time.perf_counter() - t0) * 1000.0
    log.log_search_complete(query=normalized, results_count=len(results), elapsed_ms=elapsed_ms)
    return results
