# ebnfkit/matching/engine.py
from __future__ import annotations
from typing import Tuple

from .tree import ParseNode
from ..grammar.ast import (
    Alternative, Group, NonTerminal, OptionalGroup, Pattern, Repetition, Terminal,
)
from ..grammar.registry import Grammar
from ..errors import RecursionLimitExceeded

# Backtracking recursive-descent engine:
# - Alternatives are tried in order; the first one that succeeds wins.
# - A failed atom aborts its alternative and rewinds to the rule's start position.
# - No memoization. Depth counts non-terminal applications on the call path
#   (sub-rules run at their owner's depth) and is capped by max_depth, so
#   left recursion fails with RecursionLimitExceeded.

DEFAULT_MAX_DEPTH = 250


class Matcher:
    def __init__(self, grammar: Grammar, max_depth: int = DEFAULT_MAX_DEPTH):
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self.grammar = grammar
        self.max_depth = max_depth

    # ---- Public entrypoint for one rule ----
    def match(self, rule_id: str, text: str) -> Tuple[bool, str, ParseNode]:
        self.grammar.rule(rule_id)  # UnknownRule for programmer misuse
        try:
            ok, end, node = self._apply_rule(rule_id, text, 0, 0)
        except RecursionLimitExceeded:
            raise
        except RecursionError as e:
            # interpreter stack ran out before max_depth did
            raise RecursionLimitExceeded(rule_id, self.max_depth) from e
        return ok, text[end:], node

    # ---- Rule application ----
    def _apply_rule(self, name: str, text: str, pos: int, depth: int) -> Tuple[bool, int, ParseNode]:
        if depth >= self.max_depth:
            raise RecursionLimitExceeded(name, self.max_depth)
        rule = self.grammar[name]
        node = ParseNode(name)
        for alt in rule.alts:
            ok, end = self._eval_alt(alt, text, pos, node, depth)
            if ok:
                node.value = text[pos:end]
                return True, end, node
            node.children.clear()
        return False, pos, node

    # ---- Evaluator for one alternative ----
    def _eval_alt(self, alt: Alternative, text: str, pos: int,
                  node: ParseNode, depth: int) -> Tuple[bool, int]:
        cur = pos
        for atom in alt.items:
            if isinstance(atom, Terminal):
                if not text.startswith(atom.text, cur):
                    return False, pos
                cur += len(atom.text)

            elif isinstance(atom, Pattern):
                # match against the remainder so ^ and lookbehinds see its start
                m = atom.compiled.match(text[cur:])
                if m is None:
                    return False, pos
                cur += m.end()

            elif isinstance(atom, NonTerminal):
                ok, end, child = self._apply_rule(atom.name, text, cur, depth + 1)
                if not ok:
                    return False, pos
                cur = end
                node.children.append(child)

            elif isinstance(atom, OptionalGroup):
                ok, end, sub = self._apply_rule(atom.rule, text, cur, depth)
                if ok:
                    cur = end
                    node.children.extend(sub.children)

            elif isinstance(atom, Repetition):
                while True:
                    ok, end, sub = self._apply_rule(atom.rule, text, cur, depth)
                    # an iteration that consumes nothing would loop forever
                    if not ok or end == cur:
                        break
                    cur = end
                    node.children.extend(sub.children)

            elif isinstance(atom, Group):
                ok, end, sub = self._apply_rule(atom.rule, text, cur, depth)
                if not ok:
                    return False, pos
                cur = end
                node.children.extend(sub.children)

            else:
                raise AssertionError(f"unknown atom: {atom!r}")
        return True, cur
