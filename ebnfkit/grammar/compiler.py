# ebnfkit/grammar/compiler.py
"""문법 텍스트 → Grammar 한 번에 컴파일

    text ─ iter_statements ─ declared_identifiers ─ parse_statement(합성 포함) ─ GrammarBuilder.freeze ─ Grammar

오류가 나면 부분 Grammar 없이 예외만 전파된다.
"""

from __future__ import annotations
from pathlib    import Path
from typing     import Union

from .loader import load_grammar_text
from .parser import declared_identifiers, parse_statement
from .registry import Grammar, GrammarBuilder
from .scan import iter_statements


def compile_grammar(text: str) -> Grammar:
    statements = list(iter_statements(text))
    builder = GrammarBuilder(declared_identifiers(statements))
    for statement in statements:
        parse_statement(statement, builder)
    return builder.freeze()


def compile_file(path: Union[str, Path]) -> Grammar:
    return compile_grammar(load_grammar_text(path))
