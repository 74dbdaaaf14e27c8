"""EBNF 문법 프런트엔드: 스캐너, 문장 파서, 합성 rule, 레지스트리."""

from .ast import (
    Alternative, Group, NonTerminal, OptionalGroup, Pattern, Repetition, Rule,
    SubRuleKind, Terminal,
)
from .compiler import compile_file, compile_grammar
from .registry import Grammar, GrammarBuilder
