# ebnfkit/errors.py
"""ebnfkit 오류 계층

- 문법 컴파일 오류는 모두 SyntaxError 계열(GrammarError)로 던진다.
- 매칭 단계 오류(잘못된 rule 이름, 재귀 한도 초과)는 MatchError 계열.
- 입력이 문법에 맞지 않는 것은 오류가 아니라 MatchResult(success=False)로 돌려준다.
"""

from __future__ import annotations
from typing import Iterable, Mapping, Optional, Tuple


class GrammarError(SyntaxError):
    """컴파일 시점 오류. `statement`에 문제가 된 문장 원문을 보관한다."""

    def __init__(self, message: str, statement: Optional[str] = None):
        self.statement = statement
        if statement is not None:
            message = f"{message}\n  in statement: {statement}"
        super().__init__(message)


class UnterminatedLiteral(GrammarError):
    pass

class UnterminatedComment(GrammarError):
    pass

class UnbalancedBracket(GrammarError):
    pass

class MissingDefiningSymbol(GrammarError):
    pass

class EmptyIdentifier(GrammarError):
    pass

class EmptyAlternative(GrammarError):
    pass

class EmptyAtom(GrammarError):
    pass

class MalformedAtom(GrammarError):
    pass

class InvalidPattern(GrammarError):
    pass

class DuplicateIdentifier(GrammarError):
    pass

class EmptyGrammar(GrammarError):
    pass


class UnresolvedReference(GrammarError):
    """
    등록이 끝난 뒤에도 정의를 찾지 못한 비단말 참조.
    - missing   : (참조한 rule, 참조된 이름) 쌍 목록
    - statements: 참조한 rule → 그 rule의 원본 문장
    """

    def __init__(self, missing: Iterable[Tuple[str, str]],
                 statements: Optional[Mapping[str, str]] = None):
        self.missing = list(missing)
        self.statements = dict(statements or {})
        lines = []
        for owner, name in self.missing:
            lines.append(f"  '{name}' (referenced from '{owner}')")
            if owner in self.statements:
                lines.append(f"    in statement: {self.statements[owner]}")
        super().__init__("Unresolved rule reference(s):\n" + "\n".join(lines))
        if self.missing:
            self.statement = self.statements.get(self.missing[0][0])


# ---- 매칭 단계 ----

class MatchError(Exception):
    pass


class UnknownRule(MatchError, LookupError):
    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Unknown rule '{rule_id}'")


class RecursionLimitExceeded(MatchError, RecursionError):
    def __init__(self, rule_id: str, limit: int):
        self.rule_id = rule_id
        self.limit = limit
        super().__init__(
            f"Recursion depth limit ({limit}) exceeded while matching '{rule_id}'; "
            f"is the grammar left-recursive?"
        )
