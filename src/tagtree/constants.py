"""Static lookup tables shared by the tokenizer and tree builder."""

import string

# Elements that never have a body or closing tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
})

# Elements whose body is captured verbatim up to the matching end tag
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

WHITESPACE = frozenset(" \t\n\r")
NEWLINES = frozenset("\r\n")
QUOTES = frozenset("\"'")

ASCII_ALPHA = frozenset(string.ascii_letters)
ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)
IDENTIFIER_CHARS = ASCII_ALNUM | {"_", "-"}

# An unquoted attribute value stops at whitespace or one of these
UNQUOTED_VALUE_TERMINATORS = WHITESPACE | set("/=><`")
# ...and may not start with one of these
UNQUOTED_VALUE_ILLEGAL_START = frozenset("=><`")

# Characters ending the attribute list of a start tag
START_TAG_TERMINATORS = frozenset("</>")

# Doctype tokens run until whitespace or one of these
DOCTYPE_TOKEN_TERMINATORS = WHITESPACE | {"/", ">"}
