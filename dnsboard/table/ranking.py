"""Fuzzy ranking of cell text against a free-text query"""

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from rapidfuzz.distance import LCSseq


class Rank(IntEnum):
    """Match tiers, best first"""
    CASE_SENSITIVE_EQUAL = 7
    EQUAL = 6
    STARTS_WITH = 5
    WORD_STARTS_WITH = 4
    CONTAINS = 3
    ACRONYM = 2
    MATCHES = 1  # all query characters appear in order
    NO_MATCH = 0


# Minimum rank for a cell to pass the filter
PASS_THRESHOLD = Rank.MATCHES

_WORD_SPLIT = re.compile(r"[\s\-_./:]+")


@dataclass(frozen=True)
class RankedItem:
    rank: float
    passed: bool


def _acronym(value: str) -> str:
    return "".join(word[0] for word in _WORD_SPLIT.split(value) if word)


def _closeness(item: str, query: str) -> float:
    """MATCHES tier plus a fraction for how much of the item the query covers"""
    if LCSseq.similarity(query, item) < len(query):
        return float(Rank.NO_MATCH)
    return Rank.MATCHES + LCSseq.normalized_similarity(query, item) * 0.999


def rank_value(value: Any, query: str) -> float:
    """Rank a cell value against the query; higher is a better match"""
    item = "" if value is None else str(value)

    if len(query) > len(item):
        return float(Rank.NO_MATCH)
    if item == query:
        return float(Rank.CASE_SENSITIVE_EQUAL)

    item = item.lower()
    query = query.lower()

    if item == query:
        return float(Rank.EQUAL)
    if item.startswith(query):
        return float(Rank.STARTS_WITH)
    if f" {query}" in item:
        return float(Rank.WORD_STARTS_WITH)
    if query in item:
        return float(Rank.CONTAINS)
    if len(query) == 1:
        return float(Rank.NO_MATCH)
    if query in _acronym(item):
        return float(Rank.ACRONYM)

    return _closeness(item, query)


def rank_item(value: Any, query: str, threshold: float = PASS_THRESHOLD) -> RankedItem:
    rank = rank_value(value, query)
    return RankedItem(rank=rank, passed=rank >= threshold)
