from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .errors import AlignedInputError
from .output_format import NeighborResult, write_results
from .search import SearchParams, search_all
from .store import AlignmentStore


def compute_store_nearest_neighbors(
    store: AlignmentStore,
    out_path: str | Path,
    query_ids: Sequence[str] | None,
    db_ids: Sequence[str] | None,
    params: SearchParams,
    verbose: bool = False,
) -> list[NeighborResult]:
    """Filter queries/database, search all queries, then write the TSV.

    Nothing is written unless every query has a result.
    """
    queries = store.select(query_ids)
    database = store.select(db_ids)
    if verbose:
        print(f"[aligned_nn] Selected {queries.size} queries, {database.size} database records")
    if database.size == 0:
        raise AlignedInputError("No database records selected (check the database ID file)")

    results = search_all(store, queries, database, params)
    write_results(out_path, results, num_queries=int(queries.size))
    return results
