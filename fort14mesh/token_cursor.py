"""Forward-only token reader over a line-oriented text stream."""

# 1. Standard python modules
from typing import IO, Optional, Union

# 2. Third party modules

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh.errors import InvalidTokenError, UnexpectedEndOfLineError, UnexpectedEofError


class TokenCursor:
    """Reads whitespace separated tokens and whole lines from a stream, never backing up.

    Lines are pulled from the stream only when a token or line is requested, so the stream is never read past the
    last token a caller has asked for (plus the rest of that token's line).
    """

    def __init__(self, stream: IO[Union[str, bytes]], encoding: str = 'utf-8'):
        """Initializes the cursor.

        Args:
            stream: An already-open text or binary stream. The cursor does not close it.
            encoding: Encoding used to decode binary streams.
        """
        self._stream = stream
        self._encoding = encoding
        self._pending = []  # Unread tokens on the current line, reversed so pop() yields the next one
        self.line_number = 0  # 1-based number of the last line pulled from the stream

    def _pull_line(self) -> Optional[str]:
        """Read the next raw line from the stream.

        Returns:
            The line without its terminator, or None at the end of the stream.
        """
        line = self._stream.readline()
        if not line:
            return None
        if isinstance(line, bytes):
            line = line.decode(self._encoding, errors='replace')
        self.line_number += 1
        return line.rstrip('\r\n')

    def _fill(self) -> bool:
        """Make sure at least one token is pending.

        Returns:
            False if the end of the stream was reached first.
        """
        while not self._pending:
            line = self._pull_line()
            if line is None:
                return False
            self._pending = line.split()[::-1]
        return True

    def next_token(self, same_line: bool = False) -> str:
        """Get the next whitespace delimited token, crossing line boundaries as needed.

        Args:
            same_line: If True, the token must come from the line the last token was read from.
        """
        if same_line and not self._pending:
            raise UnexpectedEndOfLineError('line ended before the record was complete', self.line_number)
        if not self._fill():
            raise UnexpectedEofError('unexpected end of file', self.line_number)
        return self._pending.pop()

    def next_int(self, same_line: bool = False) -> int:
        """Get the next token as an integer."""
        token = self.next_token(same_line)
        try:
            return int(token)
        except ValueError:
            raise InvalidTokenError(f'expected an integer but found "{token}"', self.line_number) from None

    def next_float(self, same_line: bool = False) -> float:
        """Get the next token as a float. Fortran style exponents (1.0D+01) are accepted."""
        token = self.next_token(same_line)
        try:
            return float(token.replace('D', 'E').replace('d', 'e'))
        except ValueError:
            raise InvalidTokenError(f'expected a number but found "{token}"', self.line_number) from None

    def skip_line(self):
        """Discard whatever is left of the line the last token was read from."""
        self._pending = []

    def next_line(self) -> str:
        """Discard the rest of the current line and return the next full line, without its terminator."""
        self._pending = []
        line = self._pull_line()
        if line is None:
            raise UnexpectedEofError('unexpected end of file', self.line_number)
        return line

    def peek_is_eof(self) -> bool:
        """Returns True if no tokens remain in the stream."""
        return not self._fill()

    def peek_token(self) -> Optional[str]:
        """Look at the next token on the current line without consuming it.

        Returns:
            The token, or None if the current line has been used up. Never pulls a new line.
        """
        return self._pending[-1] if self._pending else None
