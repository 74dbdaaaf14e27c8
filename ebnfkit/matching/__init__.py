"""Matcher engine and parse tree model.

Matching is a pure function of (grammar, rule, text): the compiled Grammar is
read-only and every call owns its own position and tree state, so one Grammar
can be shared across threads.
"""

from .engine import DEFAULT_MAX_DEPTH, Matcher
from .runtime import MatchResult, Validator, match
from .tree import ParseNode
