"""
Type Adapters

Higher-order TypeDefinitions built from other types or fixed value sets.
"""

from typing import Any, Iterable, List, Optional

from .constants import LIST_SEPARATOR
from .errors import AmbiguousMatchError
from .fuzzy import Matches, get_names, make_fuzzy_finder
from .types import Candidates, TypeDefinition


def split_list(text: str, separator: str = LIST_SEPARATOR) -> List[str]:
    """Split a separated list, dropping blanks."""
    return [item.strip() for item in text.split(separator) if item.strip()]


def make_listable_type(
    definition: TypeDefinition,
    separator: str = LIST_SEPARATOR,
    name: Optional[str] = None,
) -> TypeDefinition:
    """
    Wrap a scalar type so its raw text is a separated list.

    Every element goes through the wrapped pipeline on its own. The
    transformed value is the list of per-element candidates; parse returns
    the list of per-element parsed values in input order.
    """

    async def transform(text: str, executor: Any):
        elements = [
            await definition.run_transform(item, executor)
            for item in split_list(text, separator)
        ]
        return (elements,)

    async def validate(elements: List[Candidates]):
        if not elements:
            return False, f"No {definition.name} values given."
        for element in elements:
            ok, message = await definition.run_validate(element)
            if not ok:
                return False, message
        return True, None

    async def validate_once(elements: List[Candidates]):
        for element in elements:
            ok, message = await definition.run_validate_once(element)
            if not ok:
                return False, message
        return True, None

    async def autocomplete(elements: List[Candidates]):
        if not elements:
            return []
        return await definition.run_autocomplete(elements[-1])

    async def parse(elements: List[Candidates]):
        return [await definition.run_parse(element) for element in elements]

    return TypeDefinition(
        name=name or f"{definition.name}s",
        parse=parse,
        transform=transform,
        validate=validate,
        validate_once=validate_once if definition.validate_once else None,
        autocomplete=autocomplete if definition.autocomplete else None,
        greedy=definition.greedy,
        listable=True,
        description=definition.description,
    )


def make_enum_type(name: str, values: Iterable[str]) -> TypeDefinition:
    """
    Build a type that accepts one of a fixed, ordered set of strings.

    Partial input is matched with the fuzzy finder; parse returns the
    canonical value. More than one equally good match is rejected.
    """
    find = make_fuzzy_finder(list(values))

    def transform(text: str, executor: Any):
        return text, find(text)

    def validate(text: str, matches: Matches):
        if not matches:
            return False, f'Value "{text}" is not a valid {name}.'
        if matches.is_ambiguous:
            raise AmbiguousMatchError(text, matches.top)
        return True, None

    def autocomplete(text: str, matches: Matches):
        return get_names(matches)

    def parse(text: str, matches: Matches):
        return matches.top[0]

    return TypeDefinition(
        name=name,
        parse=parse,
        transform=transform,
        validate=validate,
        autocomplete=autocomplete,
    )
