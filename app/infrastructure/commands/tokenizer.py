"""Split raw command text into tokens.

Recognized delimiters, in priority order:

- ``"double quoted"``
- ``'single quoted'``
- fenced code blocks, optionally tagged with a language on the first line
- `` `inline code` ``
- anything else is a bare word ending at the next whitespace

A delimiter without a matching closing delimiter is not an error: the opening
character simply becomes part of a bare word.
"""

import re
from typing import List, Optional, Tuple

from infrastructure.commands.models import Token, TokenFormat

FENCE = "```"

_LANGUAGE_LINE = re.compile(r"([a-z]+)?\r?\n")
_WORD = re.compile(r"\S+")


def _quoted(text: str, quote: str) -> Optional[Tuple[str, str]]:
    """Return (interior, remainder) if ``text`` opens and closes ``quote``."""
    if not text.startswith(quote):
        return None
    end = text.find(quote, 1)
    if end < 0:
        return None
    return text[1:end], text[end + 1 :]


def _code_block(text: str) -> Optional[Tuple[Token, str]]:
    if not text.startswith(FENCE):
        return None
    end = text.find(FENCE, len(FENCE))
    if end < 0:
        return None

    interior = text[len(FENCE) : end]
    remainder = text[end + len(FENCE) :]

    match = _LANGUAGE_LINE.match(interior)
    if match:
        code = interior[match.end() :].strip()
        return Token(code, TokenFormat.CODE_BLOCK, match.group(1)), remainder

    return Token(interior.strip(), TokenFormat.CODE_BLOCK), remainder


def _inline_code(text: str) -> Optional[Tuple[str, str]]:
    # A second backtick means the start of a fence, not an inline span
    if text.startswith("``"):
        return None
    return _quoted(text, "`")


def _next_token(text: str) -> Tuple[Token, str]:
    """Scan one token off the front of ``text`` (already stripped)."""
    double = _quoted(text, '"')
    if double:
        return Token(double[0], TokenFormat.DOUBLE_QUOTED), double[1]

    single = _quoted(text, "'")
    if single:
        return Token(single[0], TokenFormat.SINGLE_QUOTED), single[1]

    block = _code_block(text)
    if block:
        return block

    inline = _inline_code(text)
    if inline:
        return Token(inline[0], TokenFormat.INLINE_CODE), inline[1]

    word = _WORD.match(text).group(0)
    return Token(word, TokenFormat.UNQUOTED_WORD), text[len(word) :]


def tokenize(raw: str) -> List[Token]:
    """Split ``raw`` into an ordered list of tokens.

    Args:
        raw: Command text after the prefix and command name were removed

    Returns:
        Tokens in left-to-right order. Never raises on malformed quoting.

    Example:
        >>> tokenize('"a b" c')
        [Token(value='a b', format=<TokenFormat.DOUBLE_QUOTED: ...>, language=None),
         Token(value='c', format=<TokenFormat.UNQUOTED_WORD: ...>, language=None)]
    """
    tokens: List[Token] = []
    remaining = raw.strip()

    while remaining:
        token, remaining = _next_token(remaining)
        tokens.append(token)
        remaining = remaining.strip()

    return tokens
