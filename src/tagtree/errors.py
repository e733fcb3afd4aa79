"""Exceptions raised by the tokenizer and the parser entry point."""


class MarkupSyntaxError(Exception):
    """Fatal grammar violation. Parsing stops at the first one.

    Carries the location of the cursor when the violation was detected and the
    text of the offending source line so callers can point at it.
    """

    def __init__(self, message, line, column, source_line=""):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.source_line = source_line

    @classmethod
    def at(cls, cursor, message):
        line, column, _ = cursor.position()
        return cls(message, line, column, cursor.current_line_text())

    def __repr__(self):
        return f"MarkupSyntaxError({self.message!r}, line={self.line}, column={self.column})"

    def __str__(self):
        # Tabs are kept in the padding so the caret lines up under tabbed source
        prefix = self.source_line[: max(self.column - 1, 0)]
        padding = "".join("\t" if ch == "\t" else " " for ch in prefix)
        return (
            f"Syntax error at line {self.line} column {self.column}: {self.message}\n"
            f"{self.source_line}\n"
            f"{padding}^"
        )


class StrictModeError(Exception):
    """Raised in strict mode on the first recovered parse error."""

    def __init__(self, error):
        self.error = error
        super().__init__(str(error))
