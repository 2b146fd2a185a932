from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from tqdm import tqdm

from .errors import InvariantError
from .metrics import DEFAULT_METRIC, Metric, get_metric
from .output_format import NeighborResult
from .store import AlignmentStore


@dataclass
class SearchParams:
    metric: str = DEFAULT_METRIC
    num_workers: int = 1
    progress: bool = False

    def __post_init__(self) -> None:
        if self.num_workers <= 0:
            raise ValueError("num_workers must be positive")
        get_metric(self.metric)


def nearest_neighbor(
    query: np.ndarray,
    query_id: str,
    candidates: np.ndarray,
    candidate_ids: np.ndarray,
    metric: Metric,
) -> tuple[int, float | int]:
    """Exhaustive scan: return (row in `candidates`, score) of the best candidate.

    Ties go to the last best-scoring row. With `metric.exclude_self`, rows whose ID equals
    `query_id` are never returned.
    """
    if candidates.ndim != 2 or candidates.shape[1] != query.shape[0]:
        raise InvariantError(
            f"Query {query_id} has length {query.shape[0]}, candidates have shape {candidates.shape}"
        )

    if metric.exclude_self:
        allowed = np.flatnonzero(candidate_ids != query_id)
    else:
        allowed = np.arange(candidates.shape[0])
    if allowed.size == 0:
        raise InvariantError(f"No candidates left to compare against query {query_id}")

    all_scores = metric.to_many(query, candidates)
    scores = all_scores[allowed]
    best = scores.max() if metric.higher_is_better else scores.min()
    pos = int(allowed[np.flatnonzero(scores == best)[-1]])
    return pos, all_scores[pos].item()


class NeighborSearch:
    """Runs one nearest-neighbor search per query, optionally on an executor.

    The executor is owned by the caller; without one the queries run inline.
    """

    def __init__(self, store: AlignmentStore, metric: Metric, pool: Executor | None = None) -> None:
        self.store = store
        self.metric = metric
        self.pool = pool

    def run(
        self,
        queries: Sequence[int] | np.ndarray,
        database: Sequence[int] | np.ndarray,
        progress: bool = False,
    ) -> list[NeighborResult]:
        q_idx = np.asarray(queries, dtype=np.intp)
        db_idx = np.asarray(database, dtype=np.intp)
        if db_idx.size == 0:
            raise InvariantError("Database view is empty")

        db_matrix = self._rows(db_idx)
        db_ids = np.asarray([self.store.ids[i] for i in db_idx.tolist()], dtype=object)

        with tqdm(total=int(q_idx.size), desc="Nearest neighbors", unit="query", disable=not progress) as pbar:
            if self.pool is None:
                results = []
                for qi in q_idx.tolist():
                    results.append(self._search_one(qi, db_matrix, db_ids))
                    pbar.update(1)
                return results

            futures = [self.pool.submit(self._search_one, qi, db_matrix, db_ids) for qi in q_idx.tolist()]
            for _ in as_completed(futures):
                pbar.update(1)
            # collect by submission index, not completion order
            return [f.result() for f in futures]

    def _rows(self, idx: np.ndarray) -> np.ndarray:
        # whole collection -> share the store matrix itself
        if idx.size == len(self.store) and np.array_equal(idx, np.arange(len(self.store))):
            return self.store.matrix
        rows = self.store.matrix[idx]
        rows.setflags(write=False)
        return rows

    def _search_one(self, query_index: int, db_matrix: np.ndarray, db_ids: np.ndarray) -> NeighborResult:
        query_id = self.store.ids[query_index]
        pos, score = nearest_neighbor(self.store.matrix[query_index], query_id, db_matrix, db_ids, self.metric)
        return NeighborResult(query_id=query_id, neighbor_id=str(db_ids[pos]), score=score)


def search_all(
    store: AlignmentStore,
    queries: Sequence[int] | np.ndarray,
    database: Sequence[int] | np.ndarray,
    params: SearchParams,
) -> list[NeighborResult]:
    """Search every query against the full database view with `params.num_workers` threads."""
    metric = get_metric(params.metric)
    if params.num_workers == 1:
        return NeighborSearch(store, metric).run(queries, database, progress=params.progress)

    with ThreadPoolExecutor(max_workers=params.num_workers, thread_name_prefix="aligned-nn") as pool:
        return NeighborSearch(store, metric, pool=pool).run(queries, database, progress=params.progress)
