# ebnfkit/grammar/scan.py
"""문법 원문 스캐너(리터럴 인식)

- strip_comments    : (* ... *) 주석 제거 (중첩 없음, 첫 번째 *) 에서 종료)
- iter_statements   : ';' 기준으로 문장 분리. "..." 안의 ';'는 무시
- sanitize          : 리터럴 바깥의 공백 제거 ("My Rule" → "MyRule")
- split_top_level   : 괄호 깊이 0, 리터럴 바깥에서만 구분자로 자름

모두 한 번의 왼→오 스캔으로 처리한다. 따옴표 상태는 이스케이프되지 않은 '"'를
만날 때마다 토글되고, 괄호 깊이는 스택으로 추적한다.
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Tuple

from ..errors import UnbalancedBracket, UnterminatedComment, UnterminatedLiteral

QUOTE         = '"'
ESCAPE        = "\\"
TERMINATOR    = ";"
DEFINING      = "="
ALTERNATION   = "|"
CONCATENATION = ","
COMMENT_OPEN  = "(*"
COMMENT_CLOSE = "*)"

BRACKETS = {"[": "]", "{": "}", "(": ")"}
_CLOSERS = {v: k for k, v in BRACKETS.items()}

_UNESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t", "r": "\r"}


def _where(text: str, pos: int) -> str:
    """pos의 1-based line:col"""
    line = text.count("\n", 0, pos) + 1
    col = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return f"{line}:{col}"


def strip_comments(text: str) -> str:
    """
    주석을 제거한다. 줄 번호가 어긋나지 않도록 주석 안의 개행은 그대로 남기고,
    한 줄짜리 주석은 공백 하나로 바꾼다.
    """
    out: List[str] = []
    i, n = 0, len(text)
    in_lit = False
    while i < n:
        ch = text[i]
        if in_lit:
            out.append(ch)
            if ch == ESCAPE and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == QUOTE:
                in_lit = False
            i += 1
            continue
        if text.startswith(COMMENT_OPEN, i):
            j = text.find(COMMENT_CLOSE, i + len(COMMENT_OPEN))
            if j == -1:
                raise UnterminatedComment(f"Unterminated comment starting at {_where(text, i)}")
            out.append("\n" * text.count("\n", i, j) or " ")
            i = j + len(COMMENT_CLOSE)
            continue
        if ch == QUOTE:
            in_lit = True
        out.append(ch)
        i += 1
    return "".join(out)


def iter_statements(text: str) -> Iterator[str]:
    """
    주석을 지운 뒤 문장 단위로 잘라 하나씩 돌려준다(지연 평가).
    - 빈 문장(공백뿐)은 건너뛴다.
    - 마지막 ';' 뒤에 남은 비어 있지 않은 텍스트도 문장으로 취급한다.
    - 리터럴이 열린 채로 끝나면 UnterminatedLiteral.
    """
    text = strip_comments(text)
    start = 0
    lit_start = 0
    in_lit = False
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if in_lit:
            if ch == ESCAPE:
                i += 2
                continue
            if ch == QUOTE:
                in_lit = False
        elif ch == QUOTE:
            in_lit = True
            lit_start = i
        elif ch == TERMINATOR:
            stmt = text[start:i]
            if stmt.strip():
                yield stmt
            start = i + 1
        i += 1

    if in_lit:
        raise UnterminatedLiteral(
            f"Unterminated literal starting at {_where(text, lit_start)}",
            text[start:].strip(),
        )
    tail = text[start:]
    if tail.strip():
        yield tail


def sanitize(statement: str) -> str:
    """리터럴 바깥의 모든 공백을 지운다. 따옴표와 리터럴 내부는 그대로 둔다."""
    out: List[str] = []
    in_lit = False
    i, n = 0, len(statement)
    while i < n:
        ch = statement[i]
        if in_lit:
            out.append(ch)
            if ch == ESCAPE and i + 1 < n:
                out.append(statement[i + 1])
                i += 2
                continue
            if ch == QUOTE:
                in_lit = False
        elif ch == QUOTE:
            in_lit = True
            out.append(ch)
        elif not ch.isspace():
            out.append(ch)
        i += 1
    return "".join(out)


def find_top_level(text: str, target: str) -> int:
    """리터럴 바깥에서 target이 처음 나오는 위치. 없으면 -1."""
    in_lit = False
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if in_lit:
            if ch == ESCAPE:
                i += 2
                continue
            if ch == QUOTE:
                in_lit = False
        elif ch == QUOTE:
            in_lit = True
        elif ch == target:
            return i
        i += 1
    return -1


def split_top_level(text: str, sep: str, statement: Optional[str] = None) -> List[str]:
    """
    괄호 깊이 0이고 리터럴 바깥인 sep에서만 자른다.
    빈 조각도 그대로 돌려준다(빈 대안/빈 원자 판정은 호출자 몫).
    """
    parts: List[str] = []
    stack: List[Tuple[str, int]] = []
    start = 0
    in_lit = False
    i, n = 0, len(text)
    while i < n:
        ch = text[i]
        if in_lit:
            if ch == ESCAPE:
                i += 2
                continue
            if ch == QUOTE:
                in_lit = False
        elif ch == QUOTE:
            in_lit = True
        elif ch in BRACKETS:
            stack.append((ch, i))
        elif ch in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[ch]:
                raise UnbalancedBracket(f"Unexpected '{ch}' in '{text}'", statement)
            stack.pop()
        elif ch == sep and not stack:
            parts.append(text[start:i])
            start = i + 1
        i += 1

    if in_lit:
        raise UnterminatedLiteral(f"Unterminated literal in '{text}'", statement)
    if stack:
        opener, _pos = stack[-1]
        raise UnbalancedBracket(f"Missing '{BRACKETS[opener]}' for '{opener}' in '{text}'", statement)
    parts.append(text[start:])
    return parts


def literal_end(text: str, start: int) -> int:
    """text[start]가 '"'일 때 짝이 되는 닫는 따옴표 위치. 없으면 -1."""
    i, n = start + 1, len(text)
    while i < n:
        ch = text[i]
        if ch == ESCAPE:
            i += 2
            continue
        if ch == QUOTE:
            return i
        i += 1
    return -1


def bracket_end(text: str, start: int) -> int:
    """text[start]의 여는 괄호와 짝인 닫는 괄호 위치. 없으면 -1."""
    depth = 0
    in_lit = False
    i, n = start, len(text)
    while i < n:
        ch = text[i]
        if in_lit:
            if ch == ESCAPE:
                i += 2
                continue
            if ch == QUOTE:
                in_lit = False
        elif ch == QUOTE:
            in_lit = True
        elif ch in BRACKETS:
            depth += 1
        elif ch in _CLOSERS:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def unescape(body: str) -> str:
    r"""리터럴 본문의 \" \\ \n \t \r 를 풀어준다. 모르는 이스케이프는 그대로 둔다."""
    if ESCAPE not in body:
        return body
    out: List[str] = []
    i, n = 0, len(body)
    while i < n:
        ch = body[i]
        if ch == ESCAPE and i + 1 < n and body[i + 1] in _UNESCAPES:
            out.append(_UNESCAPES[body[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)
