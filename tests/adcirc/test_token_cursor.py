"""Tests for token_cursor.py."""

# 1. Standard python modules
import io

# 2. Third party modules
import pytest

# 3. Aquaveo modules

# 4. Local modules
from fort14mesh.errors import InvalidTokenError, UnexpectedEndOfLineError, UnexpectedEofError
from fort14mesh.token_cursor import TokenCursor


__copyright__ = "(C) Copyright Aquaveo 2024"
__license__ = "All rights reserved"


@pytest.fixture
def cursor() -> TokenCursor:
    """
    Returns a cursor over a few lines of mixed text and numbers.

    Returns:
        A TokenCursor.
    """
    yield TokenCursor(io.BytesIO(b'  mesh name  \n1 2 rest of line\n\n3.5 4D+01\nword\n'))


def test_next_line_and_tokens(cursor):
    """Tokens cross line boundaries and skip blank lines."""
    assert cursor.next_line() == '  mesh name  '
    assert cursor.next_int() == 1
    assert cursor.next_int() == 2
    assert cursor.next_token() == 'rest'
    cursor.skip_line()
    assert cursor.next_float() == 3.5
    assert cursor.next_float() == 40.0
    assert cursor.line_number == 4


def test_skip_line(cursor):
    """Skipping drops the rest of the current line only."""
    cursor.next_line()
    assert cursor.next_int() == 1
    cursor.skip_line()
    assert cursor.next_float() == 3.5


def test_peek(cursor):
    """Peeking never consumes a token or pulls a line."""
    cursor.next_line()
    assert cursor.peek_token() is None
    assert cursor.next_int() == 1
    assert cursor.peek_token() == '2'
    assert cursor.next_int() == 2


def test_same_line(cursor):
    """Record fields never come from the following line."""
    cursor.next_line()
    assert cursor.next_int() == 1
    assert cursor.next_int(True) == 2
    cursor.skip_line()
    with pytest.raises(UnexpectedEndOfLineError) as error:
        cursor.next_float(True)
    assert error.value.line_number == 2
    assert cursor.next_float() == 3.5


def test_invalid_token(cursor):
    """Non-numeric tokens raise with the line number."""
    cursor.next_line()
    cursor.next_line()
    cursor.next_line()
    cursor.next_line()
    with pytest.raises(InvalidTokenError) as error:
        cursor.next_int()
    assert error.value.line_number == 5
    assert '"word"' in str(error.value)


def test_eof():
    """Reading past the end raises, and peek_is_eof ignores trailing blank lines."""
    cursor = TokenCursor(io.StringIO('7\n\n   \n'))
    assert not cursor.peek_is_eof()
    assert cursor.next_int() == 7
    assert cursor.peek_is_eof()
    with pytest.raises(UnexpectedEofError):
        cursor.next_token()
    with pytest.raises(UnexpectedEofError):
        cursor.next_line()


def test_windows_line_endings():
    """Carriage returns are not part of a line."""
    cursor = TokenCursor(io.BytesIO(b'name\r\n1 2\r\n'))
    assert cursor.next_line() == 'name'
    assert cursor.next_int() == 1
    assert cursor.next_int() == 2
