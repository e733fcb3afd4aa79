"""Grammar productions for HTML mixed with PHP/Ruby template blocks.

Every production takes a Cursor positioned on its first character and leaves
it just past the production. Malformed input raises MarkupSyntaxError.

    entity      : doctype | start_tag | end_tag | comment | embedded_code | text
    start_tag   : '<' tag_name attribute* ['/'] '>'
    end_tag     : '</' tag_name '>'
    comment     : '<!--' cdata '-->'
    embedded    : '<?' ['php'] cdata '?>' | '<%' ['='] cdata '%>'
    doctype     : '<!' 'DOCTYPE' (token ['=' token])* ['/'] '>'
    attribute   : identifier ['=' (string | unquoted)]
"""

from .buffer import EOF
from .constants import (
    ASCII_ALNUM,
    ASCII_ALPHA,
    DOCTYPE_TOKEN_TERMINATORS,
    IDENTIFIER_CHARS,
    QUOTES,
    START_TAG_TERMINATORS,
    UNQUOTED_VALUE_ILLEGAL_START,
    UNQUOTED_VALUE_TERMINATORS,
    VOID_ELEMENTS,
    WHITESPACE,
)
from .errors import MarkupSyntaxError
from .tokens import Comment, Doctype, EmbeddedCode, EndTag, StartTag, TagAttribute, Text


def _describe(ch):
    if ch == EOF:
        return "end of input"
    return f"'{ch}'"


def _take(cursor, count):
    return "".join(cursor.advance() for _ in range(count))


# ---------------------
# Terminal productions
# ---------------------


def consume_whitespace(cursor):
    out = []
    while cursor.peek() in WHITESPACE:
        out.append(cursor.advance())
    return "".join(out)


def identifier(cursor):
    """identifier: [a-z0-9][a-z0-9_-]*"""
    if cursor.peek() not in ASCII_ALNUM:
        raise MarkupSyntaxError.at(cursor, "Expected identifier name")
    out = []
    while cursor.peek() in IDENTIFIER_CHARS:
        out.append(cursor.advance())
    return "".join(out)


def tag_name(cursor):
    """tag_name: [a-z][a-z0-9]*, returned lower-cased."""
    if cursor.peek() not in ASCII_ALPHA:
        raise MarkupSyntaxError.at(cursor, "Tag name must begin with an alpha character")
    out = []
    while cursor.peek() in ASCII_ALNUM:
        out.append(cursor.advance())
    return "".join(out).lower()


def quoted_string(cursor):
    """Single or double quoted string; returns the contents without quotes.

    An unterminated string runs to the end of input.
    """
    quote = cursor.peek()
    if quote not in QUOTES:
        raise MarkupSyntaxError.at(cursor, "Expected string literal")
    cursor.advance()
    out = []
    while not cursor.at_end() and cursor.peek() != quote:
        out.append(cursor.advance())
    cursor.advance()
    return "".join(out)


def raw_text(cursor):
    out = []
    while not cursor.at_end() and cursor.peek() != "<":
        out.append(cursor.advance())
    return "".join(out)


def cdata_until(cursor, delimiter):
    """Consume everything up to, but not including, `delimiter`."""
    first = delimiter[0].lower()
    out = []
    while not cursor.at_end():
        if cursor.peek().lower() == first and cursor.matches(delimiter):
            return "".join(out)
        out.append(cursor.advance())
    raise MarkupSyntaxError.at(
        cursor, f"End of input found while parsing CDATA, ending delimiter '{delimiter}' not found"
    )


def literal(cursor, expected):
    for ch in expected:
        found = cursor.peek()
        if found != ch:
            raise MarkupSyntaxError.at(cursor, f"Expecting '{expected}' found {_describe(found)}")
        cursor.advance()
    return expected


# ---------------------
# Entity productions
# ---------------------


def attribute(cursor):
    consume_whitespace(cursor)
    name = identifier(cursor)
    after_name = cursor.bookmark()
    consume_whitespace(cursor)
    if cursor.peek() != "=":
        # Boolean attribute; the whitespace belongs to whatever follows
        cursor.restore(after_name)
        return TagAttribute(name)
    cursor.advance()
    consume_whitespace(cursor)

    ch = cursor.peek()
    if ch in QUOTES:
        return TagAttribute(name, quoted_string(cursor), ch)
    if ch in UNQUOTED_VALUE_ILLEGAL_START:
        raise MarkupSyntaxError.at(
            cursor, f"Expecting unquoted value for attribute '{name}' found illegal character '{ch}'"
        )

    out = []
    while not cursor.at_end() and cursor.peek() not in UNQUOTED_VALUE_TERMINATORS:
        out.append(cursor.advance())
    if not out:
        raise MarkupSyntaxError.at(cursor, f"Illegal or missing value for attribute '{name}'")
    return TagAttribute(name, "".join(out))


def start_tag(cursor, void_elements=VOID_ELEMENTS):
    literal(cursor, "<")
    name = tag_name(cursor)
    trailing = consume_whitespace(cursor)

    attrs = {}
    while not cursor.at_end() and cursor.peek() not in START_TAG_TERMINATORS:
        attr = attribute(cursor)
        key = attr.name.lower()
        if key in attrs:
            raise MarkupSyntaxError.at(cursor, f"Attribute '{attr.name}' already defined")
        attrs[key] = attr
        trailing = consume_whitespace(cursor)

    # Whatever sits between the last attribute and '>' is kept verbatim
    closing = trailing
    if cursor.peek() == "/":
        if name not in void_elements:
            raise MarkupSyntaxError.at(cursor, "Illegal '/' character for non-void element tag")
        closing += cursor.advance()
    literal(cursor, ">")
    return StartTag(name, attrs, closing)


def end_tag(cursor):
    literal(cursor, "</")
    name = tag_name(cursor)
    consume_whitespace(cursor)
    literal(cursor, ">")
    return EndTag(name)


def comment(cursor):
    literal(cursor, "<!--")
    data = cdata_until(cursor, "-->")
    literal(cursor, "-->")
    return Comment(data)


def embedded_code(cursor):
    if cursor.matches("<%"):
        opener = literal(cursor, "<%")
        if cursor.peek() == "=":
            opener += cursor.advance()
        data = cdata_until(cursor, "%>")
        literal(cursor, "%>")
        return EmbeddedCode(EmbeddedCode.RUBY, data, opener)

    opener = literal(cursor, "<?")
    # The keyword keeps its source casing so the block renders back unchanged
    if cursor.matches("php"):
        opener += _take(cursor, 3)
    data = cdata_until(cursor, "?>")
    literal(cursor, "?>")
    return EmbeddedCode(EmbeddedCode.PHP, data, opener)


def _doctype_token(cursor):
    """Return (quote, text) for one doctype token."""
    quote = cursor.peek()
    if quote in QUOTES:
        return quote, quoted_string(cursor)
    out = []
    while not cursor.at_end() and cursor.peek() not in DOCTYPE_TOKEN_TERMINATORS:
        out.append(cursor.advance())
    return "", "".join(out)


def doctype(cursor):
    literal(cursor, "<!")
    keyword = identifier(cursor)
    if keyword.upper() != "DOCTYPE":
        raise MarkupSyntaxError.at(cursor, "Expecting doctype declaration")
    consume_whitespace(cursor)

    attrs = []
    while not cursor.at_end() and cursor.peek() not in ("/", ">"):
        quote, token = _doctype_token(cursor)
        consume_whitespace(cursor)
        if cursor.peek() == "=":
            cursor.advance()
            consume_whitespace(cursor)
            value_quote, value = _doctype_token(cursor)
            attrs.append(TagAttribute(f"{quote}{token}{quote}", value, value_quote))
            consume_whitespace(cursor)
        else:
            attrs.append(f"{quote}{token}{quote}")

    if cursor.peek() == "/":
        cursor.advance()
    literal(cursor, ">")
    return Doctype(attrs, keyword)


def read_entity(cursor, void_elements=VOID_ELEMENTS):
    """Read the next entity after any insignificant whitespace.

    Returns ``(bookmark, entity)`` where the bookmark marks the first character
    of the entity; the tree builder restores it to hand an end tag back to an
    enclosing element. ``entity`` is None when only whitespace was left.
    """
    consume_whitespace(cursor)
    mark = cursor.bookmark()
    if cursor.at_end():
        return mark, None

    if cursor.peek() == "<":
        following = cursor.peek_next()
        if following == "!":
            if cursor.matches("<!d"):
                return mark, doctype(cursor)
            return mark, comment(cursor)
        if following == "/":
            return mark, end_tag(cursor)
        if following in ("?", "%"):
            return mark, embedded_code(cursor)
        return mark, start_tag(cursor, void_elements)

    return mark, Text(raw_text(cursor))
