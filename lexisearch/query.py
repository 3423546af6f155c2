"""
Query processing: AND semantics over an inverted index.

Query terms are normalized and deduplicated, their inverted lists are
intersected, and every matching record comes back as one fresh Posting whose
term frequency and score are summed over the query terms.
"""

from __future__ import annotations

from typing import Hashable, Iterable, TypeVar

from .merge import intersect
from .posting import InvertedIndex, InvertedList, Posting
from .ranking import Bm25Ranking
from .tokenizer import stem_tokens, tokenize

K = TypeVar("K", bound=Hashable)


def normalize_query(raw_query: str, *, stem: bool = False) -> list[str]:
    """
    Tokenize (and optionally stem) the raw query the same way records are
    indexed. Duplicate terms are dropped, first occurrence wins.
    """
    terms = tokenize(raw_query)
    if stem:
        terms = stem_tokens(terms)
    return list(dict.fromkeys(terms))


def lookup_lists(index: InvertedIndex[K], terms: Iterable[K]) -> dict[K, InvertedList] | None:
    """
    Map each distinct term to its inverted list.
    Returns None as soon as one term is unknown to the index.
    """
    lists: dict[K, InvertedList] = {}
    for term in terms:
        if term in lists:
            continue
        records = index.get_records(term)
        if records is None:
            return None
        lists[term] = records
    return lists


def search(
    index: InvertedIndex[K],
    terms: Iterable[K],
    ranking: Bm25Ranking[K] | None = None,
) -> list[Posting]:
    """
    Return the postings of records containing every term, best first.

    With a ranking, scores are computed from its snapshot; without one the
    scores already stored in the index (see set_ranking_score_to_index) are
    summed. Ties keep ascending record id order. The returned postings are
    copies, changing them does not affect the index.
    """
    lists = lookup_lists(index, terms)
    if not lists:
        return []

    results: list[Posting] = []
    for record_id in intersect(list(lists.values())):
        result = Posting(record_id, term_frequency=0)
        for term, records in lists.items():
            posting = records.get_posting(record_id)
            result.term_frequency += posting.term_frequency
            if ranking is not None:
                result.score += ranking.get_ranking_score(term, posting)
            else:
                result.score += posting.score
        results.append(result)

    results.sort(key=lambda p: p.score, reverse=True)
    return results
