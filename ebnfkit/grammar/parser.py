# ebnfkit/grammar/parser.py
"""EBNF 문장 파서 + 합성 rule 생성

문장 형식(공백 제거 후):
    Ident = definitions ;
    definitions := alternative ( "|" alternative )*
    alternative := atom ( "," atom )*
    atom        := "lit" | !"regex" | Ident | [ definitions ] | { definitions } | ( definitions )

- '|' 와 ','는 괄호 깊이 0에서만 구분자로 쓰인다([a|b] 안의 '|'는 안쪽 rule 몫).
- 괄호 그룹은 <parent>SubDef<k> 이름의 합성 rule로 바로 만들어 builder에 등록한다.
  문자열로 다시 조립해서 재파싱하지 않는다.
"""

from __future__ import annotations
from typing import Iterable, List, Tuple

import regex as re

from .ast import (
    Alternative, Atom, NonTerminal, Pattern, Rule, SUBRULE_ATOMS, SubRuleKind, Terminal,
)
from .registry import GrammarBuilder
from .scan import (
    ALTERNATION, BRACKETS, CONCATENATION, DEFINING, QUOTE,
    bracket_end, find_top_level, literal_end, sanitize, split_top_level, unescape,
)
from ..errors import (
    EmptyAlternative, EmptyAtom, EmptyIdentifier, InvalidPattern,
    MalformedAtom, MissingDefiningSymbol,
)

PATTERN_MARK = "!"

_GROUP_KINDS = {
    "[": SubRuleKind.OPTIONAL,
    "{": SubRuleKind.REPETITION,
    "(": SubRuleKind.GROUP,
}

# 식별자에 올 수 없는 문자
_RESERVED = frozenset('"[]{}()|,=;!')


def _check_identifier(name: str, what: str, statement: str) -> None:
    bad = [c for c in name if c in _RESERVED]
    if bad:
        raise MalformedAtom(
            f"Invalid {what} '{name}' (unexpected {bad[0]!r}; missing ',' or '|'?)", statement
        )


def declared_identifiers(statements: Iterable[str]) -> List[str]:
    """
    문장들에서 '=' 앞의 rule 이름만 미리 모은다(합성 이름 충돌 회피용).
    형식이 잘못된 문장은 건너뛴다. 오류는 parse_statement에서 보고된다.
    """
    names: List[str] = []
    for raw in statements:
        stmt = sanitize(raw)
        eq = find_top_level(stmt, DEFINING)
        if eq > 0:
            names.append(stmt[:eq])
    return names


def parse_statement(raw: str, builder: GrammarBuilder) -> str:
    """
    문장 하나를 파싱해 builder에 등록하고 rule 이름을 돌려준다.
    합성 rule은 부모 바로 뒤 순서로 함께 등록된다.
    """
    stmt = sanitize(raw)
    eq = find_top_level(stmt, DEFINING)
    if eq == -1:
        raise MissingDefiningSymbol("Statement is missing defining symbol '='", stmt)
    name = stmt[:eq]
    if not name:
        raise EmptyIdentifier("Statement has no rule identifier before '='", stmt)
    _check_identifier(name, "rule identifier", stmt)

    builder.reserve(name, stmt)
    alts = parse_definitions(stmt[eq + 1:], name, name, builder, stmt)
    builder.define(Rule(name, alts, source=stmt))
    return name


def parse_definitions(body: str, parent: str, owner: str,
                      builder: GrammarBuilder, statement: str) -> Tuple[Alternative, ...]:
    """definitions-list → 대안 튜플. parent는 합성 rule 이름의 접두, owner는 분류용 최상위 rule."""
    alts: List[Alternative] = []
    for piece in split_top_level(body, ALTERNATION, statement):
        if not piece:
            raise EmptyAlternative(f"Empty alternative in rule '{parent}'", statement)
        items: List[Atom] = []
        for tok in split_top_level(piece, CONCATENATION, statement):
            if not tok:
                raise EmptyAtom(f"Empty atom in rule '{parent}'", statement)
            items.append(_parse_atom(tok, parent, owner, builder, statement))
        alts.append(Alternative(tuple(items)))
    return tuple(alts)


def _parse_atom(tok: str, parent: str, owner: str,
                builder: GrammarBuilder, statement: str) -> Atom:
    head = tok[0]

    if head == QUOTE:
        if literal_end(tok, 0) != len(tok) - 1:
            raise MalformedAtom(f"Malformed terminal {tok} (missing ','?)", statement)
        return Terminal(unescape(tok[1:-1]))

    if head == PATTERN_MARK:
        if len(tok) < 3 or tok[1] != QUOTE or literal_end(tok, 1) != len(tok) - 1:
            raise MalformedAtom(f"Malformed pattern {tok}; expected !\"regex\"", statement)
        source = tok[2:-1].replace('\\"', '"')
        try:
            compiled = re.compile(source)
        except re.error as e:
            raise InvalidPattern(f"Invalid pattern {tok}: {e}", statement) from e
        return Pattern(source, compiled)

    if head in BRACKETS:
        if bracket_end(tok, 0) != len(tok) - 1:
            raise MalformedAtom(
                f"Malformed group {tok} (text after '{BRACKETS[head]}'; missing ','?)", statement
            )
        kind = _GROUP_KINDS[head]
        sub = builder.next_sub_name(parent)
        builder.reserve(sub, statement)
        inner = tok[1:-1]
        alts = parse_definitions(inner, sub, owner, builder, statement)
        builder.define(Rule(sub, alts, source=f"{sub}={inner}", owner=owner, kind=kind))
        return SUBRULE_ATOMS[kind](sub)

    _check_identifier(tok, "rule reference", statement)
    return NonTerminal(tok)
