"""Listable and enum type tests."""

import pytest

from cmdcore import (
    AmbiguousMatchError,
    ArgSpec,
    CommandContext,
    ArgumentContext,
    TypeValidationError,
    make_enum_type,
    make_listable_type,
)
from cmdcore.adapters import split_list

from .conftest import INTEGER_TYPE, make_command

LETTERS = make_enum_type("letter", ["a", "b", "c"])
LETTER_LIST = make_listable_type(LETTERS)


def argument(type_def, raw, executor=None) -> ArgumentContext:
    context = CommandContext(make_command("test"), f"test {raw}", executor, [raw])
    return ArgumentContext(context, ArgSpec(type_def.name, "value"), type_def, raw)


class TestSplitList:
    def test_strips_and_drops_blanks(self):
        assert split_list(" a, b,,c ,") == ["a", "b", "c"]


class TestEnumType:
    @pytest.mark.asyncio
    async def test_exact_value(self):
        assert await argument(LETTERS, "b").resolve() == "b"

    @pytest.mark.asyncio
    async def test_partial_value_returns_canonical(self):
        colors = make_enum_type("color", ["Red", "Green"])
        assert await argument(colors, "gr").resolve() == "Green"

    @pytest.mark.asyncio
    async def test_invalid_value(self):
        with pytest.raises(TypeValidationError) as exc:
            await argument(LETTERS, "z").resolve()
        assert 'Value "z" is not a valid letter.' in exc.value.message

    @pytest.mark.asyncio
    async def test_ambiguous_value_is_rejected(self):
        colors = make_enum_type("color", ["blue", "black", "red"])
        ok, message = await argument(colors, "bl").validate()
        assert not ok
        assert "ambiguous" in message
        assert "blue" in message and "black" in message

    @pytest.mark.asyncio
    async def test_autocomplete(self):
        colors = make_enum_type("color", ["blue", "black", "red"])
        assert await argument(colors, "bl").get_autocomplete() == ["blue", "black"]

    def test_validate_raises_ambiguity(self):
        colors = make_enum_type("color", ["blue", "black"])
        text, matches = colors.transform("bl", None)
        with pytest.raises(AmbiguousMatchError):
            colors.validate(text, matches)


class TestListableType:
    def test_name_and_flags(self):
        assert LETTER_LIST.name == "letters"
        assert LETTER_LIST.listable
        assert LETTER_LIST.validate_once is None

    @pytest.mark.asyncio
    async def test_parses_each_element_in_order(self):
        assert await argument(LETTER_LIST, "a,b").resolve() == ["a", "b"]
        assert await argument(LETTER_LIST, "c,a,c").resolve() == ["c", "a", "c"]

    @pytest.mark.asyncio
    async def test_element_failure_is_reported(self):
        with pytest.raises(TypeValidationError) as exc:
            await argument(LETTER_LIST, "a,z").resolve()
        assert 'Value "z" is not a valid letter.' in exc.value.message

    @pytest.mark.asyncio
    async def test_first_failing_element_wins(self):
        integers = make_listable_type(INTEGER_TYPE)
        ok, message = await argument(integers, "1,x,y").validate()
        assert not ok
        assert message == "Only whole numbers are valid."

    @pytest.mark.asyncio
    async def test_empty_list_fails(self):
        ok, message = await argument(LETTER_LIST, ",,").validate()
        assert not ok
        assert message == "No letter values given."

    @pytest.mark.asyncio
    async def test_autocomplete_uses_last_element(self):
        colors = make_listable_type(make_enum_type("color", ["blue", "black", "red"]))
        assert await argument(colors, "red,bl").get_autocomplete() == ["blue", "black"]

    @pytest.mark.asyncio
    async def test_scalar_without_transform(self):
        integers = make_listable_type(INTEGER_TYPE)
        assert await argument(integers, "1, 2,3").resolve() == [1, 2, 3]
