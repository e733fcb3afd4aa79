"""Tests for the position-tracking cursor."""

import unittest

from tagtree.buffer import EOF, Cursor


class TestCursorReading(unittest.TestCase):
    def test_peek_and_advance(self):
        """peek() looks ahead without consuming; advance() consumes."""
        cursor = Cursor("ab")
        assert cursor.peek() == "a"
        assert cursor.peek_next() == "b"
        assert cursor.advance() == "a"
        assert cursor.peek() == "b"
        assert cursor.peek_next() == EOF
        assert cursor.advance() == "b"
        assert cursor.at_end()
        assert cursor.peek() == EOF

    def test_advance_at_end_is_noop(self):
        """Advancing an empty cursor returns EOF and keeps the position."""
        cursor = Cursor("")
        assert cursor.at_end()
        assert cursor.advance() == EOF
        assert cursor.position() == (1, 1, 0)

    def test_end_marker_is_not_a_character(self):
        """A NUL character in the input is not mistaken for end of input."""
        cursor = Cursor("\0")
        assert not cursor.at_end()
        assert cursor.peek() == "\0"
        assert cursor.peek() != EOF

    def test_skip_is_clamped(self):
        """Skipping past the end stops at the end of input."""
        cursor = Cursor("abc")
        assert cursor.skip(10) == EOF
        assert cursor.at_end()
        assert cursor.position() == (1, 4, 3)

    def test_matches_is_case_insensitive_and_does_not_consume(self):
        """matches() ignores case and leaves the cursor where it was."""
        cursor = Cursor("<?PHP echo")
        assert cursor.matches("<?php")
        assert cursor.peek() == "<"
        assert not Cursor("ab").matches("abc")


class TestCursorPositions(unittest.TestCase):
    def test_line_and_column(self):
        """Line and column advance across a newline."""
        cursor = Cursor("a\nb")
        cursor.advance()
        assert cursor.position() == (1, 2, 1)
        assert cursor.advance() == "\n"
        assert cursor.position() == (2, 1, 2)

    def test_crlf_is_one_newline(self):
        """CRLF is consumed as a single newline unit."""
        cursor = Cursor("a\r\nb")
        cursor.advance()
        assert cursor.advance() == "\r\n"
        assert cursor.position() == (2, 1, 3)
        assert cursor.peek() == "b"

    def test_lone_cr_is_a_newline(self):
        """A bare CR also starts a new line."""
        cursor = Cursor("a\rb")
        cursor.skip(2)
        assert cursor.position() == (2, 1, 2)

    def test_current_line_text(self):
        """current_line_text() returns the line holding the cursor."""
        cursor = Cursor("first\nsecond line\nthird")
        cursor.skip(8)
        assert cursor.current_line_text() == "second line"

    def test_current_line_text_stops_at_crlf(self):
        """The returned line excludes its CRLF terminator."""
        cursor = Cursor("a\r\nbc\r\nd")
        cursor.skip(2)
        assert cursor.current_line_text() == "bc"


class TestCursorBookmarks(unittest.TestCase):
    def test_restore_returns_to_bookmark(self):
        """Restoring a bookmark resets offset, line and column."""
        cursor = Cursor("one\ntwo")
        cursor.skip(5)
        mark = cursor.bookmark()
        cursor.skip(2)
        cursor.restore(mark)
        assert cursor.position() == (2, 2, 5)
        assert cursor.peek() == "w"
        assert cursor.current_line_text() == "two"

    def test_restore_without_argument_uses_last_bookmark(self):
        """restore() with no argument goes back to the latest bookmark."""
        cursor = Cursor("abcdef")
        cursor.bookmark()
        cursor.skip(1)
        cursor.bookmark()
        cursor.skip(3)
        cursor.restore()
        assert cursor.peek() == "b"

    def test_restore_without_bookmark_is_noop(self):
        """restore() before any bookmark leaves the cursor alone."""
        cursor = Cursor("abc")
        cursor.advance()
        cursor.restore()
        assert cursor.peek() == "b"

    def test_bookmark_is_immutable(self):
        """Bookmarks cannot be modified after they are taken."""
        mark = Cursor("abc").bookmark()
        with self.assertRaises(AttributeError):
            mark.offset = 2
