"""
Plausibility filtering for candidate words.

Key components:
    - rules: Stateless plausibility predicates
    - catalog: Ordered, immutable rule catalog built from configuration
    - filter: Applies a catalog to a candidate stream
"""

from .rules import (
    Rule,
    RomanNumeralRule,
    AlphabeticRule,
    LengthRule,
    RepetitionRule,
    VowelRule,
    MixedCaseRule,
)
from .catalog import RuleCatalog, build_rule_catalog
from .filter import CandidateFilter

__all__ = [
    "Rule",
    "RomanNumeralRule",
    "AlphabeticRule",
    "LengthRule",
    "RepetitionRule",
    "VowelRule",
    "MixedCaseRule",
    "RuleCatalog",
    "build_rule_catalog",
    "CandidateFilter",
]
