"""
Fuzzy line filtering over tab output.

A query matches a line when it is a case-insensitive substring of it, or
failing that, when its characters appear in the line in order. Substring
hits rank ahead of subsequence hits; within each group the original line
order is kept.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

logger = logging.getLogger('PaneShell.FuzzyFilter')

SUBSTRING_MATCH = 0
SUBSEQUENCE_MATCH = 1


def split_lines(text: str) -> List[str]:
    """Split output into lines; a trailing line break leaves an empty last line."""
    return text.split("\n")


def match_rank(line: str, query: str) -> Optional[int]:
    """Return SUBSTRING_MATCH, SUBSEQUENCE_MATCH, or None when the line does not match."""
    if not query:
        return SUBSTRING_MATCH

    line_lower = line.lower()
    query_lower = query.lower()

    if query_lower in line_lower:
        return SUBSTRING_MATCH

    # Characters in order
    i = 0
    for char in line_lower:
        if char == query_lower[i]:
            i += 1
            if i == len(query_lower):
                return SUBSEQUENCE_MATCH
    return None


@dataclass(frozen=True)
class FilterCandidate:
    index: int
    line: str


class FuzzyFilter:
    """Narrows a fixed list of lines as the query changes."""

    def __init__(self, lines: Sequence[str]):
        self.lines = list(lines)
        self.query = ""
        self.matches: List[FilterCandidate] = self._narrow("")

    def _narrow(self, query: str) -> List[FilterCandidate]:
        ranked = []
        for index, line in enumerate(self.lines):
            rank = match_rank(line, query)
            if rank is not None:
                ranked.append((rank, index, line))
        ranked.sort(key=lambda item: (item[0], item[1]))
        return [FilterCandidate(index, line) for _, index, line in ranked]

    def set_query(self, query: str) -> List[FilterCandidate]:
        self.query = query
        self.matches = self._narrow(query)
        logger.debug(f"Filter {query!r}: {len(self.matches)}/{len(self.lines)} lines")
        return self.matches
