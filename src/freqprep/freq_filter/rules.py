"""
Plausibility rules for candidate words.

Each rule is a pure predicate over a WordCandidate: ``plausible`` returns
False to reject. Rules hold only immutable settings, so one instance can be
shared by every worker.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, FrozenSet, Protocol, runtime_checkable
import re

from ..freq_acquire.tokenizer import WordCandidate

__all__ = [
    "Rule",
    "RomanNumeralRule",
    "AlphabeticRule",
    "LengthRule",
    "RepetitionRule",
    "VowelRule",
    "MixedCaseRule",
    "ROMAN_NUMERAL_PATTERN",
]

# Strict subtractive notation, 1..3999; "IIII" and "VX" do not match
ROMAN_NUMERAL_PATTERN = re.compile(
    r"M{0,3}(?:CM|CD|D?C{0,3})(?:XC|XL|L?X{0,3})(?:IX|IV|V?I{0,3})"
)


@runtime_checkable
class Rule(Protocol):
    """Anything with a name and a pure ``plausible(candidate) -> bool``."""
    name: str

    def plausible(self, candidate: WordCandidate) -> bool:
        ...


@dataclass(frozen=True)
class RomanNumeralRule:
    """
    Reject candidates that spell a well-formed Roman numeral.

    The original form is uppercased before matching, so lowercase words
    that happen to spell a numeral ("mix", "mi", "vi") are rejected too. Words
    shorter than ``min_length`` are left alone so that the pronoun "I"
    survives; single letters are the length rule's concern.

    Attributes:
        min_length: Shortest candidate this rule may reject
    """
    name: ClassVar[str] = "roman_numeral"
    min_length: int = 2

    def plausible(self, candidate: WordCandidate) -> bool:
        word = candidate.original
        if len(word) < self.min_length:
            return True
        return ROMAN_NUMERAL_PATTERN.fullmatch(word.upper()) is None


@dataclass(frozen=True)
class AlphabeticRule:
    """
    Reject candidates containing digits or symbols.

    Attributes:
        ascii_only: Accept only ASCII letters (English corpora)
        connectors: Non-letter characters allowed inside a word
    """
    name: ClassVar[str] = "alphabetic"
    ascii_only: bool = True
    connectors: str = "'’"

    def plausible(self, candidate: WordCandidate) -> bool:
        for ch in candidate.original:
            if ch in self.connectors:
                continue
            if not ch.isalpha():
                return False
            if self.ascii_only and not ch.isascii():
                return False
        return True


@dataclass(frozen=True)
class LengthRule:
    """
    Reject candidates that are too short or implausibly long.

    Length is counted in characters of the normalized form.

    Attributes:
        min_length: Shortest accepted word
        max_length: Longest accepted word
        exceptions: Normalized words accepted below min_length
    """
    name: ClassVar[str] = "length"
    min_length: int = 2
    max_length: int = 45
    exceptions: FrozenSet[str] = field(default_factory=lambda: frozenset({"a", "i"}))

    def plausible(self, candidate: WordCandidate) -> bool:
        length = len(candidate.normalized)
        if length > self.max_length:
            return False
        if length < self.min_length:
            return candidate.normalized in self.exceptions
        return True


@dataclass(frozen=True)
class RepetitionRule:
    """
    Reject candidates with one character repeated too many times in a row.

    Case is ignored, so "IIII" and "iIii" are the same run.

    Attributes:
        max_repeat: Longest accepted run of a single character
    """
    name: ClassVar[str] = "repetition"
    max_repeat: int = 2

    def plausible(self, candidate: WordCandidate) -> bool:
        run = 0
        previous = None
        for ch in candidate.normalized:
            if ch == previous:
                run += 1
                if run > self.max_repeat:
                    return False
            else:
                run = 1
                previous = ch
        return True


@dataclass(frozen=True)
class VowelRule:
    """Reject candidates without a single vowel ("xkcd", "brrr")."""
    name: ClassVar[str] = "vowel"
    vowels: str = "aeiouy"

    def plausible(self, candidate: WordCandidate) -> bool:
        return any(ch in self.vowels for ch in candidate.normalized)


@dataclass(frozen=True)
class MixedCaseRule:
    """
    Reject candidates where an uppercase letter follows a lowercase one.

    Catches "iPhone", "McDonald", and OCR noise such as "tHe".
    Capitalized and ALL-CAPS words pass.
    """
    name: ClassVar[str] = "mixed_case"

    def plausible(self, candidate: WordCandidate) -> bool:
        seen_lower = False
        for ch in candidate.original:
            if ch.islower():
                seen_lower = True
            elif seen_lower and ch.isupper():
                return False
        return True
