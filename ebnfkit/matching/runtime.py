# ebnfkit/matching/runtime.py
from __future__ import annotations
from typing import NamedTuple

from .engine import DEFAULT_MAX_DEPTH, Matcher
from .tree import ParseNode
from ..grammar.registry import Grammar


class MatchResult(NamedTuple):
    success: bool
    remainder: str
    tree: ParseNode

    @property
    def full(self) -> bool:
        """Matched and consumed the whole input."""
        return self.success and not self.remainder


def match(grammar: Grammar, rule_id: str, text: str, *,
          max_depth: int = DEFAULT_MAX_DEPTH) -> MatchResult:
    """Test `text` against rule `rule_id`. "No match" is a result, never an exception."""
    ok, remainder, tree = Matcher(grammar, max_depth).match(rule_id, text)
    return MatchResult(ok, remainder, tree)


class Validator:
    """Match entry points bound to one compiled grammar."""
    def __init__(self, grammar: Grammar, max_depth: int = DEFAULT_MAX_DEPTH):
        self.grammar = grammar
        self.max_depth = max_depth

    def match(self, rule_id: str, text: str) -> MatchResult:
        return match(self.grammar, rule_id, text, max_depth=self.max_depth)

    def is_valid(self, rule_id: str, text: str) -> bool:
        return self.match(rule_id, text).full
