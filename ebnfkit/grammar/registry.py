# ebnfkit/grammar/registry.py
"""Grammar 레지스트리

- GrammarBuilder : 합성(synthesis) 단계에서만 쓰는 가변 빌더.
                   이름 예약 순서 = 선언 순서(최상위 rule 다음에 그 합성 rule들)
- Grammar        : freeze() 결과물. 읽기 전용 Mapping[str, Rule]
"""

from __future__ import annotations
from enum       import Enum
from types      import MappingProxyType
from typing     import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple, Type

from .ast import Rule
from ..errors import (
    DuplicateIdentifier, EmptyGrammar, MalformedAtom, UnknownRule, UnresolvedReference,
)

SUBDEF_INFIX = "SubDef"


class GrammarBuilder:
    """
    - declared: 문법 전체의 최상위 rule 이름. 합성 이름은 이 이름들을 건너뛴다
                (XSubDef1 을 직접 선언한 문법에서도 X의 그룹은 XSubDef2 가 된다)
    """
    def __init__(self, declared: Iterable[str] = ()):
        self._order: List[str] = []
        self._rules: Dict[str, Optional[Rule]] = {}
        self._counters: Dict[str, int] = {}
        self._declared: FrozenSet[str] = frozenset(declared)

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def reserve(self, name: str, statement: Optional[str] = None) -> None:
        """이름을 먼저 잡아 둔다. 이미 있으면 DuplicateIdentifier."""
        if name in self._rules:
            raise DuplicateIdentifier(f"Duplicate rule identifier '{name}'", statement)
        self._rules[name] = None
        self._order.append(name)

    def define(self, rule: Rule) -> None:
        if rule.name not in self._rules:
            raise KeyError(f"rule '{rule.name}' was not reserved")
        if self._rules[rule.name] is not None:
            raise DuplicateIdentifier(f"Duplicate rule identifier '{rule.name}'", rule.source)
        self._rules[rule.name] = rule

    def next_sub_name(self, parent: str) -> str:
        """<parent>SubDef<k>, k는 parent마다 1부터 증가. 이미 쓰인 이름은 건너뛴다."""
        k = self._counters.get(parent, 0)
        while True:
            k += 1
            name = f"{parent}{SUBDEF_INFIX}{k}"
            if name not in self._rules and name not in self._declared:
                break
        self._counters[parent] = k
        return name

    def freeze(self) -> "Grammar":
        if not self._order:
            raise EmptyGrammar("Grammar contains no rules")
        rules: Dict[str, Rule] = {}
        for name in self._order:
            rule = self._rules[name]
            if rule is None:
                raise KeyError(f"rule '{name}' was reserved but never defined")
            rules[name] = rule

        missing: List[Tuple[str, str]] = []
        statements: Dict[str, str] = {}
        for rule in rules.values():
            for ref in rule.references():
                if ref not in rules:
                    pair = (rule.owner or rule.name, ref)
                    if pair not in missing:
                        missing.append(pair)
                        statements[pair[0]] = rules[pair[0]].source
        if missing:
            raise UnresolvedReference(missing, statements)

        try:
            return Grammar(rules, self._order)
        except ValueError as e:
            # NodeType 열거형 멤버가 될 수 없는 이름(예: _x_)
            raise MalformedAtom(f"Rule identifier cannot name a node type: {e}") from e


class Grammar(Mapping[str, Rule]):
    """
    컴파일된 문법(불변).
    - 순회 순서는 선언 순서(최상위 rule, 바로 뒤에 그 합성 rule들)
    - 매칭은 ebnfkit.matching.runtime.match 또는 Grammar.match
    """

    def __init__(self, rules: Mapping[str, Rule], order: List[str]):
        self._rules = MappingProxyType(dict(rules))
        self._order: Tuple[str, ...] = tuple(order)
        self._node_types: Type[Enum] = Enum("NodeType", [(n, n) for n in self.top_level()])

    # ---- Mapping ----
    def __getitem__(self, name: str) -> Rule:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"<Grammar rules={len(self.top_level())} synthesized={len(self) - len(self.top_level())}>"

    # ---- 조회 ----
    def rule(self, name: str) -> Rule:
        try:
            return self._rules[name]
        except KeyError:
            raise UnknownRule(name) from None

    def rule_identifiers(self) -> Tuple[str, ...]:
        """합성 rule을 포함한 모든 rule 이름(선언 순서)."""
        return self._order

    def top_level(self) -> Tuple[str, ...]:
        return tuple(n for n in self._order if not self._rules[n].synthesized)

    def synthesized(self) -> Tuple[str, ...]:
        return tuple(n for n in self._order if self._rules[n].synthesized)

    @property
    def start(self) -> str:
        """첫 번째 최상위 rule."""
        return self.top_level()[0]

    def node_type_of(self, name: str) -> str:
        """합성 rule은 소속 최상위 rule로 분류한다."""
        rule = self.rule(name)
        return rule.owner or rule.name

    def node_types(self) -> Type[Enum]:
        """최상위 rule 이름들로 만든 NodeType 열거형(선언 순서)."""
        return self._node_types

    def describe(self) -> str:
        lines = []
        for name in self._order:
            rule = self._rules[name]
            indent = "    " if rule.synthesized else ""
            tag = f"  (* {rule.kind} of {rule.owner} *)" if rule.synthesized else ""
            lines.append(f"{indent}{rule}{tag}")
        return "\n".join(lines)

    # ---- 매칭 ----
    def match(self, rule_id: str, text: str, **kw):
        from ..matching.runtime import match
        return match(self, rule_id, text, **kw)
