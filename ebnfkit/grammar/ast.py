# ebnfkit/grammar/ast.py
"""Grammar AST
- Rule        : 식별자 + 대안(Alternative) 목록(순서 유지, 앞쪽 우선)
- Alternative : Atom 시퀀스(왼쪽→오른쪽으로 소비)
- Atom        : Terminal / Pattern / NonTerminal / OptionalGroup / Repetition / Group

괄호 그룹([ ], { }, ( ))은 파싱 단계에서 합성 rule(<owner>SubDef<k>)로 끌어올려지고,
Atom에는 그 rule 이름만 남는다. 따라서 매처는 평평한 rule 정의만 다룬다.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Any, Iterator, Optional, Tuple, Union


class SubRuleKind:
    OPTIONAL   = "optional"
    REPETITION = "repetition"
    GROUP      = "group"


@dataclass(frozen=True)
class Terminal:
    text: str   # 이스케이프 해제된 리터럴

    def __str__(self) -> str:
        return '"' + self.text.replace("\\", "\\\\").replace('"', '\\"') + '"'

@dataclass(frozen=True)
class Pattern:
    """!"regex" 단말. 나머지 입력의 맨 앞에서만 매칭한다."""
    source: str
    compiled: Any = field(compare=False, repr=False, default=None)

    def __str__(self) -> str:
        return '!"' + self.source.replace('"', '\\"') + '"'

@dataclass(frozen=True)
class NonTerminal:
    name: str

    def __str__(self) -> str:
        return self.name

@dataclass(frozen=True)
class OptionalGroup:
    rule: str   # 합성 rule 이름

    def __str__(self) -> str:
        return f"[{self.rule}]"

@dataclass(frozen=True)
class Repetition:
    rule: str

    def __str__(self) -> str:
        return "{" + self.rule + "}"

@dataclass(frozen=True)
class Group:
    rule: str

    def __str__(self) -> str:
        return f"({self.rule})"


Atom = Union[Terminal, Pattern, NonTerminal, OptionalGroup, Repetition, Group]
SubRuleAtom = (OptionalGroup, Repetition, Group)

SUBRULE_ATOMS = {
    SubRuleKind.OPTIONAL:   OptionalGroup,
    SubRuleKind.REPETITION: Repetition,
    SubRuleKind.GROUP:      Group,
}


@dataclass(frozen=True)
class Alternative:
    items: Tuple[Atom, ...]

    def __str__(self) -> str:
        return ", ".join(str(a) for a in self.items)


@dataclass(frozen=True)
class Rule:
    """
    rule 하나.
    - alts  : 비어 있지 않은 대안 튜플
    - source: 원본 문장(정리된 형태). 진단 메시지용
    - owner : 합성 rule이면 소속 최상위 rule 이름, 아니면 None
    - kind  : 합성 rule의 종류(SubRuleKind), 최상위 rule이면 None
    """
    name: str
    alts: Tuple[Alternative, ...]
    source: str = ""
    owner: Optional[str] = None
    kind: Optional[str] = None

    @property
    def synthesized(self) -> bool:
        return self.owner is not None

    def references(self) -> Iterator[str]:
        """이 rule이 참조하는 모든 rule 이름(비단말 + 합성 rule)."""
        for alt in self.alts:
            for atom in alt.items:
                if isinstance(atom, NonTerminal):
                    yield atom.name
                elif isinstance(atom, SubRuleAtom):
                    yield atom.rule

    def __str__(self) -> str:
        return f"{self.name} = " + " | ".join(str(a) for a in self.alts) + ";"
