"""Unit tests for prompt sanitization."""

import pytest

from agiml_bridge.agiml.prompt import clean_prompt, encode_uri_component, sanitize_prompt

pytestmark = pytest.mark.unit


class TestSanitizePrompt:
    def test_hamster_example(self):
        assert sanitize_prompt("A hamster!\nRiding a bike.") == "A%20hamster!%20Riding%20a%20bike."

    def test_strips_surrounding_whitespace(self):
        assert sanitize_prompt("   a red fox  \n") == "a%20red%20fox"

    def test_removes_disallowed_characters(self):
        assert sanitize_prompt("cats & dogs: #1?") == "cats%20dogs%201"

    def test_collapses_space_runs(self):
        assert sanitize_prompt("a    b\n\n\nc") == "a%20b%20c"

    def test_tabs_are_removed_not_spaced(self):
        assert sanitize_prompt("a\tb") == "ab"

    def test_allowed_punctuation_is_encoded_like_uri_component(self):
        # . ! ( ) stay literal; , [ ] are escaped.
        assert sanitize_prompt("(a), [b]!") == "(a)%2C%20%5Bb%5D!"

    def test_non_ascii_letters_are_removed(self):
        assert sanitize_prompt("café crème") == "caf%20crme"

    def test_empty_content(self):
        assert sanitize_prompt("") == ""

    def test_leading_space_after_deletion_is_kept_as_empty_token(self):
        # Trimming runs before deletion, so "@ fox" leaves a leading space.
        assert sanitize_prompt("@ fox") == "%20fox"


class TestCleanPrompt:
    def test_returns_readable_form(self):
        assert clean_prompt("A hamster!\nRiding a bike.") == "A hamster! Riding a bike."


class TestEncodeUriComponent:
    @pytest.mark.parametrize(
        ("raw", "encoded"),
        [
            ("abc", "abc"),
            ("a b", "a%20b"),
            ("-_.!~*'()", "-_.!~*'()"),
            ("a/b", "a%2Fb"),
            ("é", "%C3%A9"),
            ("1024", "1024"),
        ],
    )
    def test_matches_ecmascript(self, raw, encoded):
        assert encode_uri_component(raw) == encoded
