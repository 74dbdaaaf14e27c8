# ebnfkit/ebnfc.py
"""ebnfc – ebnfkit CLI

사용 예)
    $ python -m ebnfkit.ebnfc check examples/number.ebnf -D
    $ python -m ebnfkit.ebnfc rules examples/number.ebnf --all
    $ python -m ebnfkit.ebnfc match examples/number.ebnf SignedNumber --text "-10"
    $ python -m ebnfkit.ebnfc match examples/number.ebnf SignedNumber --input in.txt --json --full

기능
----
- check : 문법을 컴파일(분리→정리→파싱→합성→참조 검사)하고 요약 출력
- rules : rule 이름 목록 출력(--all 이면 합성 rule 포함)
- match : 입력 텍스트를 rule에 매칭하고 나머지/파스 트리 출력

디버그 모드(-D/--debug)를 켜면 단계별 요약과 rule 표를 stderr로 출력합니다.
종료 코드: 0 = 성공/매치, 1 = 매치 실패, 2 = 오류
"""

from __future__ import annotations
import argparse
import json
import sys
from typing import Optional

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# 파이프라인 로딩
# ------------------------------

def _load_grammar(grammar_path: str, debug: bool):
    """
    문법 파일을 읽어 Grammar까지 컴파일.
    디버그 모드에서는 문장 수와 rule 수를 단계별로 찍는다.
    """
    from .grammar.loader import load_grammar_text
    from .grammar.parser import declared_identifiers, parse_statement
    from .grammar.registry import GrammarBuilder
    from .grammar.scan import iter_statements

    src = load_grammar_text(grammar_path)
    if debug: _eprint(f"[DEBUG] loaded {grammar_path} | chars={len(src)}")

    statements = list(iter_statements(src))
    builder = GrammarBuilder(declared_identifiers(statements))
    for statement in statements:
        parse_statement(statement, builder)
    if debug: _eprint(f"[DEBUG] statements parsed | statements={len(statements)}")

    g = builder.freeze()
    if debug: _eprint("[DEBUG] grammar frozen | rules=%d synthesized=%d" %
                      (len(g.top_level()), len(g.synthesized())))
    return g

# ------------------------------
# 디버그 출력 헬퍼
# ------------------------------

def _print_rules(g) -> None:
    _eprint("\n[Rules]")
    _eprint(g.describe())

# ------------------------------
# 커맨드 구현
# ------------------------------

def _compile_or_report(args):
    from .errors import GrammarError
    try:
        return _load_grammar(args.file, debug=args.debug)
    except GrammarError as e:
        _eprint("[SYNTAX ERROR]", type(e).__name__)
        _eprint(str(e))
    except (OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
    return None


def cmd_check(args) -> int:
    g = _compile_or_report(args)
    if g is None:
        return 2
    if args.debug:
        _print_rules(g)
    print(f"[CHECK OK] rules={len(g.top_level())} synthesized={len(g.synthesized())} start={g.start}")
    return 0


def cmd_rules(args) -> int:
    g = _compile_or_report(args)
    if g is None:
        return 2
    for name in g.rule_identifiers():
        rule = g[name]
        if not rule.synthesized:
            print(name)
        elif args.all:
            print(f"  {name}  ({rule.kind} of {rule.owner})")
    return 0


def cmd_match(args) -> int:
    from .errors import MatchError
    from .matching import match

    g = _compile_or_report(args)
    if g is None:
        return 2

    if args.text is not None:
        text = args.text
    else:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2

    try:
        res = match(g, args.rule, text, max_depth=args.max_depth)
    except (MatchError, ValueError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _eprint(f"[DEBUG] rule={args.rule} input={len(text)} consumed={len(text) - len(res.remainder)}")

    ok = res.full if args.full else res.success
    if args.json:
        print(json.dumps({
            "success": res.success,
            "full": res.full,
            "remainder": res.remainder,
            "tree": res.tree.to_dict() if res.success else None,
        }, ensure_ascii=False, indent=2))
    elif res.success:
        print(f"[MATCH OK] rule={args.rule} remainder={res.remainder!r}")
        print(res.tree.pretty())
    else:
        print(f"[NO MATCH] rule={args.rule}")
    return 0 if ok else 1


# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    from .matching import DEFAULT_MAX_DEPTH

    ap = argparse.ArgumentParser(prog="ebnfc", description="ebnfkit EBNF grammar compiler CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="문법을 컴파일하고 오류 유무를 확인합니다")
    p_check.add_argument("file", help="EBNF 문법 파일")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_rules = sub.add_parser("rules", help="rule 이름을 선언 순서대로 출력합니다")
    p_rules.add_argument("file", help="EBNF 문법 파일")
    p_rules.add_argument("--all", action="store_true", help="합성 rule(<Rule>SubDef<k>)도 함께 출력")
    p_rules.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_rules.set_defaults(func=cmd_rules)

    p_match = sub.add_parser("match", help="입력 텍스트를 rule에 매칭합니다")
    p_match.add_argument("file", help="EBNF 문법 파일")
    p_match.add_argument("rule", help="시작 rule 이름")
    src_group = p_match.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="직접 입력 텍스트")
    src_group.add_argument("--input", help="입력 텍스트 파일 경로")
    p_match.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                         help=f"rule 재귀 깊이 한도(기본 {DEFAULT_MAX_DEPTH})")
    p_match.add_argument("--full", action="store_true", help="입력 전체를 소비해야 성공으로 취급")
    p_match.add_argument("--json", action="store_true", help="결과를 JSON으로 출력")
    p_match.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_match.set_defaults(func=cmd_match)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
