"""
Fuzzy Finder

Matches partial text against a candidate set. Candidates are strings or
objects with a ``name`` attribute. Ranking, case-insensitive:

    1. exact name match (wins outright)
    2. name starts with the text
    3. every character of the text appears in order in the name

Within a tier, candidates keep their input order.
"""

from typing import Any, Callable, Iterable, List, Optional, Union

EXACT = 1
PREFIX = 2
SUBSEQUENCE = 3


def get_name(candidate: Any) -> str:
    """Display name of a candidate."""
    if isinstance(candidate, str):
        return candidate
    name = getattr(candidate, "name", None)
    if name is None:
        return str(candidate)
    return str(name)


def get_names(candidates: Iterable[Any]) -> List[str]:
    return [get_name(c) for c in candidates]


def is_subsequence(text: str, name: str) -> bool:
    """True if the characters of ``text`` appear in order within ``name``."""
    remaining = iter(name)
    return all(char in remaining for char in text)


def match_tier(text: str, name: str) -> Optional[int]:
    """Tier of ``name`` for the lowercased ``text``, or None if it does not match."""
    name = name.lower()
    if name == text:
        return EXACT
    if name.startswith(text):
        return PREFIX
    if is_subsequence(text, name):
        return SUBSEQUENCE
    return None


class Matches(list):
    """Ranked matches. ``top`` holds the candidates of the best tier found."""

    def __init__(self, ranked: Iterable[Any] = (), top: Iterable[Any] = ()):
        super().__init__(ranked)
        self.top = list(top)

    @property
    def is_ambiguous(self) -> bool:
        return len(self.top) > 1


class FuzzyFinder:
    """
    Callable matcher over a fixed candidate set.

    Usage:
        find = make_fuzzy_finder(["Alice", "Alicia", "Bob"])
        find("ali")                     # ["Alice", "Alicia"]
        find("ali", return_first=True)  # "Alice"
    """

    def __init__(self, candidates: Iterable[Any], key: Callable[[Any], str] = get_name):
        self._candidates = list(candidates)
        self._key = key

    @property
    def candidates(self) -> List[Any]:
        return list(self._candidates)

    def rank(self, text: str) -> Matches:
        """All matches for ``text`` in rank order."""
        text = text.lower()
        tiers = {EXACT: [], PREFIX: [], SUBSEQUENCE: []}
        for candidate in self._candidates:
            tier = match_tier(text, self._key(candidate))
            if tier is not None:
                tiers[tier].append(candidate)

        if tiers[EXACT]:
            return Matches(tiers[EXACT], tiers[EXACT])

        ranked = tiers[PREFIX] + tiers[SUBSEQUENCE]
        top = tiers[PREFIX] or tiers[SUBSEQUENCE]
        return Matches(ranked, top)

    def __call__(self, text: str, return_first: bool = False) -> Union[Matches, Any, None]:
        matches = self.rank(text)
        if return_first:
            return matches[0] if matches else None
        return matches


def make_fuzzy_finder(
    candidates: Iterable[Any], key: Callable[[Any], str] = get_name
) -> FuzzyFinder:
    """Build a finder for ``candidates``."""
    return FuzzyFinder(candidates, key)
