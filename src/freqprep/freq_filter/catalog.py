"""Ordered, immutable rule catalog."""
from __future__ import annotations

from typing import Iterable, Iterator, Optional, Tuple

from ..common.config import FrequencyConfig
from ..freq_acquire.tokenizer import WordCandidate
from .rules import (
    Rule,
    AlphabeticRule,
    LengthRule,
    MixedCaseRule,
    RepetitionRule,
    RomanNumeralRule,
    VowelRule,
)

__all__ = ["RuleCatalog", "build_rule_catalog"]


class RuleCatalog:
    """
    An ordered tuple of plausibility rules.

    A candidate is plausible iff every rule accepts it. Evaluation stops at
    the first rejection, so order only affects speed, never the outcome.
    Catalogs are immutable; ``with_rule`` returns a new one.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[Rule] = ()):
        rules = tuple(rules)
        for rule in rules:
            if not callable(getattr(rule, "plausible", None)):
                raise TypeError(f"Not a rule: {rule!r}")
        self._rules: Tuple[Rule, ...] = rules

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def names(self) -> list[str]:
        return [rule.name for rule in self._rules]

    def with_rule(self, rule: Rule) -> "RuleCatalog":
        """Return a new catalog with ``rule`` appended."""
        return RuleCatalog(self._rules + (rule,))

    def without(self, name: str) -> "RuleCatalog":
        """Return a new catalog with every rule named ``name`` removed."""
        return RuleCatalog(r for r in self._rules if r.name != name)

    def plausible(self, candidate: WordCandidate) -> bool:
        for rule in self._rules:
            if not rule.plausible(candidate):
                return False
        return True

    def first_rejection(self, candidate: WordCandidate) -> Optional[str]:
        """Name of the first rule that rejects the candidate, or None."""
        for rule in self._rules:
            if not rule.plausible(candidate):
                return rule.name
        return None

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleCatalog({', '.join(self.names)})"


def build_rule_catalog(config: Optional[FrequencyConfig] = None) -> RuleCatalog:
    """
    Assemble the catalog described by a configuration.

    Cheap character-class checks come first so that most rejections
    happen before the regex-based Roman numeral check.

    Args:
        config: Run configuration (default: FrequencyConfig())

    Returns:
        RuleCatalog with the enabled rules

    Example:
        >>> build_rule_catalog(FrequencyConfig(enable_vowel_rule=False)).names
        ['length', 'alphabetic', 'repetition', 'mixed_case', 'roman_numeral']
    """
    config = (config or FrequencyConfig()).validate()
    rules: list[Rule] = []

    if config.enable_length_rule:
        rules.append(LengthRule(
            min_length=config.min_word_length,
            max_length=config.max_word_length,
            exceptions=frozenset(config.short_word_exceptions),
        ))
    if config.enable_alphabetic_rule:
        rules.append(AlphabeticRule(
            ascii_only=config.ascii_only,
            connectors=config.connectors,
        ))
    if config.enable_repetition_rule:
        rules.append(RepetitionRule(max_repeat=config.max_char_repeat))
    if config.enable_vowel_rule:
        rules.append(VowelRule())
    if config.enable_mixed_case_rule:
        rules.append(MixedCaseRule())
    if config.enable_roman_numeral_rule:
        rules.append(RomanNumeralRule())

    return RuleCatalog(rules)
