"""
Interactive keyword search over cities or a document collection.

- Builds the inverted index in memory from the chosen record source.
- Ranks the whole index once with BM25 after taking a snapshot.
- Answers AND-only keyword queries, best results first.

Usage (from repo root):
    python -m lexisearch.search_cli --cities data/cities.tsv
    python -m lexisearch.search_cli --docs data/developer --stem
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Iterable

from .cities import load_cities
from .index_builder import build_index, load_documents_from_directory
from .logging_config import setup_logging
from .posting import InvertedIndex
from .query import normalize_query, search
from .ranking import DEFAULT_B_PARAMETER, DEFAULT_K_PARAMETER, Bm25Ranking
from .records import KeyRecordSet

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10


def run_search_loop(
    index: InvertedIndex[str],
    records: KeyRecordSet,
    *,
    top_k: int = DEFAULT_TOP_K,
    stem: bool = False,
    read_query: Callable[[str], str] | None = None,
) -> None:
    """
    Interactive command-line search loop. Scores must already be stored in
    the index. Empty line, EOF or Ctrl+C ends the loop.
    """
    read_query = read_query or input
    print(f"Indexed {len(records)} records under {len(index)} keys.")
    print("Enter queries (AND semantics). Empty line or Ctrl+C to exit.")

    while True:
        try:
            raw_query = read_query("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query:
            break

        terms = normalize_query(raw_query, stem=stem)
        if not terms:
            print("No valid terms in query.")
            continue

        results = search(index, terms)
        if not results:
            print("No records matched all query terms.")
            continue

        print(f"Top {min(top_k, len(results))} of {len(results)} results:")
        for rank, posting in enumerate(results[:top_k], start=1):
            record = records.get_record_by_id(posting.record_id)
            label = getattr(record, "url", None) or str(record)
            print(f"{rank:2d}. score={posting.score:.4f}  {label}")


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Keyword search with BM25 ranking.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--cities",
        type=Path,
        help="Path to tab-separated cities file.",
    )
    source.add_argument(
        "--docs",
        type=Path,
        help="Directory of HTML/JSON documents to index.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_K,
        help="Number of top results to show.",
    )
    parser.add_argument(
        "--k",
        type=float,
        default=DEFAULT_K_PARAMETER,
        help="BM25 term frequency saturation parameter.",
    )
    parser.add_argument(
        "--b",
        type=float,
        default=DEFAULT_B_PARAMETER,
        help="BM25 length normalization parameter.",
    )
    parser.add_argument(
        "--stem",
        action="store_true",
        help="Porter-stem document tokens and query terms (documents only).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log index and ranking statistics.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.cities is not None and args.stem:
        parser.error("--stem only applies to --docs")

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.cities is not None:
        records = load_cities(args.cities)
    else:
        records = load_documents_from_directory(args.docs, stem=args.stem)

    if len(records) == 0:
        parser.exit(1, "No records found to index.\n")

    index = build_index(records)
    ranking: Bm25Ranking[str] = Bm25Ranking(k=args.k, b=args.b)
    ranking.take_snapshot(index, records)
    ranking.set_ranking_score_to_index()
    logger.info("Average record size: %.2f", ranking.average_record_size)

    run_search_loop(index, records, top_k=args.top, stem=args.stem)


if __name__ == "__main__":
    main()
