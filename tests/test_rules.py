"""
Tests for freq_filter/rules.py, catalog.py and filter.py.
"""

import itertools
from dataclasses import dataclass
from typing import ClassVar

import pytest

from freqprep.common.config import FrequencyConfig
from freqprep.freq_acquire.tokenizer import Tokenizer, WordCandidate
from freqprep.freq_filter import (
    AlphabeticRule,
    CandidateFilter,
    LengthRule,
    MixedCaseRule,
    RepetitionRule,
    RomanNumeralRule,
    RuleCatalog,
    VowelRule,
    build_rule_catalog,
)


def word(text: str) -> WordCandidate:
    return WordCandidate.from_text(text)


@dataclass(frozen=True)
class BannedWordRule:
    name: ClassVar[str] = "banned"
    banned: str = "apples"

    def plausible(self, candidate: WordCandidate) -> bool:
        return candidate.normalized != self.banned


class TestRomanNumeralRule:
    """Tests for RomanNumeralRule."""

    @pytest.mark.parametrize("text", ["XIV", "MMXXIV", "xiv", "mix", "IX", "CD", "MCMXCIX"])
    def test_rejects_numerals(self, text: str) -> None:
        assert not RomanNumeralRule().plausible(word(text))

    @pytest.mark.parametrize("text", ["IIII", "VX", "IC", "MMMM", "civic", "did", "apples"])
    def test_accepts_non_numerals(self, text: str) -> None:
        assert RomanNumeralRule().plausible(word(text))

    def test_single_letters_left_to_length_rule(self) -> None:
        assert RomanNumeralRule().plausible(word("I"))
        assert RomanNumeralRule().plausible(word("V"))
        assert not RomanNumeralRule(min_length=1).plausible(word("V"))


class TestAlphabeticRule:
    """Tests for AlphabeticRule."""

    def test_rejects_digits(self) -> None:
        assert not AlphabeticRule().plausible(word("abc123"))
        assert not AlphabeticRule().plausible(word("42"))

    def test_accepts_connectors(self) -> None:
        assert AlphabeticRule().plausible(word("don't"))
        assert not AlphabeticRule(connectors="").plausible(word("don't"))

    def test_ascii_only(self) -> None:
        assert not AlphabeticRule().plausible(word("café"))
        assert AlphabeticRule(ascii_only=False).plausible(word("café"))


class TestLengthRule:
    """Tests for LengthRule."""

    def test_short_word_exceptions(self) -> None:
        rule = LengthRule()
        assert rule.plausible(word("a"))
        assert rule.plausible(word("I"))
        assert not rule.plausible(word("b"))
        assert rule.plausible(word("ab"))

    def test_max_length(self) -> None:
        rule = LengthRule(max_length=45)
        assert rule.plausible(word("pneumonoultramicroscopicsilicovolcanoconiosis"))
        assert not rule.plausible(word("pneumonoultramicroscopicsilicovolcanoconiosisx"))


class TestRepetitionRule:
    """Tests for RepetitionRule."""

    @pytest.mark.parametrize("text", ["IIII", "zzz", "aaargh", "iIii"])
    def test_rejects_long_runs(self, text: str) -> None:
        assert not RepetitionRule().plausible(word(text))

    @pytest.mark.parametrize("text", ["bookkeeper", "all", "see", "I"])
    def test_accepts_double_letters(self, text: str) -> None:
        assert RepetitionRule().plausible(word(text))

    def test_threshold(self) -> None:
        assert RepetitionRule(max_repeat=3).plausible(word("zzz"))
        assert not RepetitionRule(max_repeat=1).plausible(word("all"))


class TestVowelAndCaseRules:
    """Tests for VowelRule and MixedCaseRule."""

    def test_vowel_rule(self) -> None:
        assert VowelRule().plausible(word("rhythm"))
        assert VowelRule().plausible(word("I"))
        assert not VowelRule().plausible(word("xkcd"))
        assert not VowelRule().plausible(word("brr"))

    @pytest.mark.parametrize("text", ["iPhone", "McDonald", "tHe"])
    def test_mixed_case_rejected(self, text: str) -> None:
        assert not MixedCaseRule().plausible(word(text))

    @pytest.mark.parametrize("text", ["Hello", "NASA", "hello", "I", "HELLo"])
    def test_plain_case_accepted(self, text: str) -> None:
        assert MixedCaseRule().plausible(word(text))


class TestRuleCatalog:
    """Tests for RuleCatalog and build_rule_catalog()."""

    def test_default_catalog(self) -> None:
        catalog = build_rule_catalog()
        assert catalog.names == [
            "length", "alphabetic", "repetition", "vowel", "mixed_case", "roman_numeral",
        ]

    def test_toggles(self) -> None:
        catalog = build_rule_catalog(FrequencyConfig(
            enable_roman_numeral_rule=False,
            enable_repetition_rule=False,
        ))
        assert "roman_numeral" not in catalog.names
        assert "repetition" not in catalog.names

    def test_length_parameters_flow_through(self) -> None:
        catalog = build_rule_catalog(FrequencyConfig(min_word_length=4, max_word_length=5))
        assert not catalog.plausible(word("hav"))
        assert catalog.plausible(word("apple"))
        assert not catalog.plausible(word("apples"))

    def test_conjunction_and_first_rejection(self) -> None:
        catalog = build_rule_catalog()
        assert catalog.plausible(word("apples"))
        assert catalog.first_rejection(word("apples")) is None
        assert catalog.first_rejection(word("XIV")) == "roman_numeral"
        assert catalog.first_rejection(word("b")) == "length"

    def test_with_rule_returns_new_catalog(self) -> None:
        base = build_rule_catalog()
        extended = base.with_rule(BannedWordRule())
        assert len(extended) == len(base) + 1
        assert extended.names[-1] == "banned"
        assert base.plausible(word("apples"))
        assert not extended.plausible(word("apples"))
        assert "banned" not in extended.without("banned").names

    def test_rejects_non_rules(self) -> None:
        with pytest.raises(TypeError):
            RuleCatalog([object()])

    def test_order_never_changes_outcome(self) -> None:
        rules = list(build_rule_catalog())
        sample = [c for c in Tokenizer().tokenize(
            "I have XIV apples and IIII oranges, café iPhone xkcd abc123 b zzz mix".encode("utf-8")
        )]
        expected = [RuleCatalog(rules).plausible(c) for c in sample]
        for perm in itertools.islice(itertools.permutations(rules), 0, None, 37):
            assert [RuleCatalog(perm).plausible(c) for c in sample] == expected

    def test_rules_are_immutable(self) -> None:
        rule = LengthRule()
        with pytest.raises(AttributeError):
            rule.min_length = 5


class TestCandidateFilter:
    """Tests for CandidateFilter."""

    def test_example_sentence(self) -> None:
        candidate_filter = CandidateFilter(build_rule_catalog())
        tokens = Tokenizer().tokenize(b"I have XIV apples and IIII oranges.")
        accepted = [c.normalized for c in candidate_filter.filter(tokens)]
        assert accepted == ["i", "have", "apples", "and", "oranges"]

    def test_rule_independence(self) -> None:
        text = b"I have XIV apples and IIII oranges mix zzz"
        with_roman = CandidateFilter(build_rule_catalog())
        without_roman = CandidateFilter(build_rule_catalog(FrequencyConfig(
            enable_roman_numeral_rule=False,
        )))
        roman = RomanNumeralRule()
        for candidate in Tokenizer().tokenize(text):
            if roman.plausible(candidate):
                assert with_roman.accept(candidate) == without_roman.accept(candidate)
        accepted = [c.normalized for c in without_roman.filter(Tokenizer().tokenize(text))]
        assert accepted == ["i", "have", "xiv", "apples", "and", "oranges", "mix"]
