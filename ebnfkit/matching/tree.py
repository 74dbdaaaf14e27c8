# ebnfkit/matching/tree.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

# ---- Parse tree node ----
# One node per successful rule application. Terminals add no node; children of
# optional/repetition/group sub-rules are spliced into the owner's child list.

@dataclass
class ParseNode:
    type: str                    # rule identifier that produced this node
    value: str = ""              # consumed input span
    children: List["ParseNode"] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.type}: {self.value!r}"

    def walk(self) -> Iterator["ParseNode"]:
        """Pre-order traversal, self first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, type_: str) -> List["ParseNode"]:
        return [n for n in self.walk() if n.type == type_]

    def pretty(self, indent: str = "  ") -> str:
        lines: List[str] = []

        def _emit(node: "ParseNode", level: int) -> None:
            lines.append(f"{indent * level}{node}")
            for c in node.children:
                _emit(c, level + 1)

        _emit(self, 0)
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "value": self.value,
            "children": [c.to_dict() for c in self.children],
        }
