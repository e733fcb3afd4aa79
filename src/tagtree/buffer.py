from collections import namedtuple

from .constants import NEWLINES

# Returned by peek() once the input is exhausted; never equal to a real character
EOF = ""

Bookmark = namedtuple("Bookmark", ("offset", "line", "column", "line_start"))


class Cursor:
    """Position-tracking reader over an immutable markup string.

    Keeps the 1-based line/column of the current character for diagnostics and
    supports one level of backtracking through bookmark()/restore().
    """

    __slots__ = ("_buffer", "_column", "_length", "_line", "_line_start", "_offset", "last_bookmark")

    def __init__(self, text):
        self._buffer = text or ""
        self._length = len(self._buffer)
        self._offset = 0
        self._line = 1
        self._column = 1
        self._line_start = 0
        self.last_bookmark = None

    def __repr__(self):
        return f"Cursor(line={self._line}, column={self._column}, char={self.peek()!r})"

    def peek(self):
        if self._offset < self._length:
            return self._buffer[self._offset]
        return EOF

    def peek_next(self):
        index = self._offset + 1
        if index < self._length:
            return self._buffer[index]
        return EOF

    def at_end(self):
        return self._offset >= self._length

    def advance(self):
        """Consume the current character and return the consumed slice.

        A CR immediately followed by LF is consumed as one newline unit, so the
        returned slice is two characters long in that case.
        """
        start = self._offset
        if start >= self._length:
            return EOF
        ch = self._buffer[start]
        end = start + 1
        if ch == "\r" and end < self._length and self._buffer[end] == "\n":
            end += 1
        self._offset = end
        if ch in NEWLINES:
            self._line += 1
            self._column = 1
            self._line_start = end
        else:
            self._column += 1
        return self._buffer[start:end]

    def skip(self, count):
        for _ in range(count):
            if self._offset >= self._length:
                break
            self.advance()
        return self.peek()

    def matches(self, literal):
        """Case-insensitive test for `literal` at the current offset. Consumes nothing."""
        segment = self._buffer[self._offset : self._offset + len(literal)]
        return len(segment) == len(literal) and segment.lower() == literal.lower()

    def bookmark(self):
        mark = Bookmark(self._offset, self._line, self._column, self._line_start)
        self.last_bookmark = mark
        return mark

    def restore(self, mark=None):
        if mark is None:
            mark = self.last_bookmark
            if mark is None:
                return
        self._offset, self._line, self._column, self._line_start = mark

    def position(self):
        return self._line, self._column, self._offset

    def current_line_text(self):
        end = self._length
        for terminator in ("\n", "\r"):
            index = self._buffer.find(terminator, self._line_start)
            if index != -1 and index < end:
                end = index
        return self._buffer[self._line_start : end]
