# lexer.py

"""
Splits an expression line into value and operator tokens.

Tokens are whitespace delimited: "1_3/5 + 7/2" is three tokens, while
"1_3/5+7/2" is a single (malformed) literal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union

from fraccalc.errors import NullInputError
from fraccalc.rational import Rational, RenderMode

logger = logging.getLogger(__name__)

# --------------------------
# Tokens
# --------------------------


class Operator(Enum):
    """Binary operators. Higher rank binds tighter."""
    ADD = ("+", 1)
    SUBTRACT = ("-", 1)
    MULTIPLY = ("*", 2)
    DIVIDE = ("/", 2)

    def __init__(self, symbol: str, rank: int):
        self.symbol = symbol
        self.rank = rank

    @classmethod
    def decode(cls, text: Optional[str]) -> Optional[Operator]:
        """Return the operator spelled by text, or None if it is not one."""
        if text is None:
            return None
        return _OPERATOR_SYMBOLS.get(text)

    def __str__(self) -> str:
        return f"OP[{self.symbol}|{self.rank}]"


# '−' (U+2212), '×' and '÷' are accepted as spellings of '-', '*' and '/'.
_OPERATOR_SYMBOLS: Dict[str, Operator] = {
    **{op.symbol: op for op in Operator},
    "−": Operator.SUBTRACT,
    "×": Operator.MULTIPLY,
    "÷": Operator.DIVIDE,
}


@dataclass(frozen=True)
class Value:
    """A fraction literal together with the text it was read from."""
    value: Rational
    text: str = field(compare=False)

    @classmethod
    def parse(cls, text: str) -> Value:
        return cls(Rational.parse(text), text)

    @classmethod
    def of(cls, value: Rational, mode: RenderMode = RenderMode.RATIO) -> Value:
        return cls(value, value.to_string(mode))

    def __str__(self) -> str:
        return f"VALUE[{self.value}]"


Token = Union[Value, Operator]

# --------------------------
# Tokenizer
# --------------------------


def process_line(line: Optional[str]) -> List[Token]:
    """Tokenize a line of text.

    A blank line gives an empty list. Pieces that are not operators must be
    fraction literals, otherwise MalformedLiteralError propagates.
    """
    if line is None:
        raise NullInputError("Cannot tokenize None")
    tokens: List[Token] = []
    for piece in line.split():
        op = Operator.decode(piece)
        if op is not None:
            tokens.append(op)
        else:
            tokens.append(Value.parse(piece))
    logger.debug(f"Tokenized {line!r} as {format_tokens(tokens)}")
    return tokens


def format_tokens(tokens: List[Token]) -> str:
    """Space separated debug rendering, e.g. "VALUE[1] OP[+|1] VALUE[2/3]"."""
    return " ".join(str(tok) for tok in tokens)
