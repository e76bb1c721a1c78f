"""Tokenizer and parser tests."""

from cmdcore import CommandParser, tokenize


class TestTokenize:
    def test_splits_on_whitespace(self):
        assert tokenize("kick  bob\tnow") == ["kick", "bob", "now"]

    def test_double_quotes_group_words(self):
        assert tokenize('announce "hello world" twice') == ["announce", "hello world", "twice"]

    def test_single_quotes_are_literal(self):
        assert tokenize("kick O'Brien") == ["kick", "O'Brien"]

    def test_unclosed_quote_runs_to_end(self):
        assert tokenize('say "hello there') == ["say", "hello there"]

    def test_empty_quotes_yield_nothing(self):
        assert tokenize('say ""') == ["say"]

    def test_empty_input(self):
        assert tokenize("   ") == []


class TestCommandParser:
    def test_first_token_is_command(self):
        parsed = CommandParser().parse("  Kick bob spam  ")
        assert parsed.command == "Kick"
        assert parsed.args == ["bob", "spam"]
        assert parsed.raw == "Kick bob spam"
        assert parsed.arg_string == "bob spam"

    def test_get_arg_default(self):
        parsed = CommandParser().parse("kick")
        assert parsed.get_arg(0) == ""
        assert parsed.get_arg(3, "x") == "x"

    def test_blank_input(self):
        parsed = CommandParser().parse("")
        assert parsed.command == ""
        assert parsed.args == []
