"""Parsed command arguments."""

from typing import Iterator, List, Optional, Sequence

from infrastructure.commands.binder import ArgumentBinder
from infrastructure.commands.models import Argument, BoundArgument, Token
from infrastructure.commands.tokenizer import tokenize


class ArgumentCursor:
    """Sequential reader over a fixed list of tokens.

    Only ``next`` and ``set_index`` move the cursor, every other read leaves
    it where it is.

    Example:
        cursor = ArgumentCursor(tokenize("add alice admin"))
        cursor.next()   # Token("add")
        cursor.peek()   # Token("alice")
        cursor.rest()   # [Token("alice"), Token("admin")]
    """

    def __init__(self, tokens: Sequence[Token]):
        self._tokens: List[Token] = list(tokens)
        self._index = 0

    @property
    def tokens(self) -> List[Token]:
        """All tokens, as a copy."""
        return list(self._tokens)

    @property
    def index(self) -> int:
        return self._index

    @property
    def size(self) -> int:
        """The total number of tokens."""
        return len(self._tokens)

    def nth(self, n: int) -> Optional[Token]:
        """Return the token at absolute index ``n``, regardless of the cursor."""
        if 0 <= n < len(self._tokens):
            return self._tokens[n]
        return None

    def peek(self) -> Optional[Token]:
        """Return the token at the cursor without advancing."""
        return self.nth(self._index)

    def next(self) -> Optional[Token]:
        """Return the token at the cursor and advance past it.

        At the end of the tokens this returns None and leaves the cursor alone.
        """
        token = self.nth(self._index)
        if token is not None:
            self._index += 1
        return token

    def prev(self) -> Optional[Token]:
        """Return the token just before the cursor (the last one read)."""
        return self.nth(self._index - 1)

    def rest(self) -> List[Token]:
        """Return every token from the cursor to the end without advancing."""
        return self._tokens[self._index :]

    def set_index(self, n: int) -> "ArgumentCursor":
        """Move the cursor to ``n``."""
        self._index = n
        return self

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)


class ArgumentSet(ArgumentCursor):
    """Arguments of one command invocation.

    Tokenizes ``raw`` once. When a schema is given the tokens are also bound
    to it, and the cursor reads the bound arguments instead of the bare tokens.

    Attributes:
        raw: The unparsed argument text
        schema: The positional schema the arguments were bound to

    Raises:
        ArgumentTypeError: If a token cannot be coerced to its declared kind
        ArgumentValidationError: If a validator rejects a value
    """

    def __init__(
        self,
        raw: str,
        schema: Optional[Sequence[Argument]] = None,
        binder: Optional[ArgumentBinder] = None,
    ):
        self.raw = raw
        self.schema: List[Argument] = list(schema or [])
        tokens = tokenize(raw)
        if self.schema:
            tokens = (binder or ArgumentBinder()).bind(tokens, self.schema)
        super().__init__(tokens)

    @property
    def bound(self) -> List[BoundArgument]:
        """Arguments that were paired with a schema entry."""
        return [
            token
            for token in self._tokens
            if isinstance(token, BoundArgument) and token.name is not None
        ]

    def get(self, name: str) -> Optional[BoundArgument]:
        """Find a bound argument by its schema name."""
        for arg in self.bound:
            if arg.name == name:
                return arg
        return None

    def missing_required(self) -> List[Argument]:
        """Required schema entries with no token at their position."""
        return [
            entry
            for position, entry in enumerate(self.schema)
            if entry.required and position >= len(self._tokens)
        ]

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"ArgumentSet(raw={self.raw!r}, size={self.size})"
