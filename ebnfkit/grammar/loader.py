"""EBNF 문법 파일 로더"""

from __future__ import annotations
from pathlib    import Path
from typing     import Union


def load_grammar_text(path: Union[str, Path]) -> str:
    """
    파일을 UTF-8로 읽고 개행을 '\\n'으로 통일한다.
    BOM이 있으면 떼어낸다.
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    return text.replace("\r\n", "\n").replace("\r", "\n")
