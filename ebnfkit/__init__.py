"""ebnfkit: EBNF 문법 컴파일러 + 매처

    >>> import ebnfkit
    >>> g = ebnfkit.compile('Digits = Digit, {Digit}; Digit = "0" | "1";')
    >>> ebnfkit.match(g, "Digits", "101x").remainder
    'x'
"""

from .errors import (
    DuplicateIdentifier, EmptyAlternative, EmptyAtom, EmptyGrammar, EmptyIdentifier,
    GrammarError, InvalidPattern, MalformedAtom, MatchError, MissingDefiningSymbol,
    RecursionLimitExceeded, UnbalancedBracket, UnknownRule, UnresolvedReference,
    UnterminatedComment, UnterminatedLiteral,
)
from .grammar import Grammar, Rule, compile_file, compile_grammar
from .matching import DEFAULT_MAX_DEPTH, MatchResult, ParseNode, Validator, match

compile = compile_grammar

__version__ = "0.1.0"
