"""Entities produced by the tokenizer.

Each entity keeps enough of its source form to render itself back to text
with str().
"""


class TagAttribute:
    """Attribute of a start tag or doctype: ``name[=value]``.

    ``value`` is None for boolean attributes. ``quote`` is the quote character
    used in the source (empty for unquoted values).
    """

    __slots__ = ("name", "quote", "value")

    def __init__(self, name, value=None, quote=""):
        self.name = name
        self.value = value
        self.quote = quote

    def __repr__(self):
        return f"TagAttribute({self.name!r}, {self.value!r})"

    def __str__(self):
        if self.value is None:
            return self.name
        return f"{self.name}={self.quote}{self.value}{self.quote}"

    def __eq__(self, other):
        if not isinstance(other, TagAttribute):
            return NotImplemented
        return (self.name, self.value, self.quote) == (other.name, other.value, other.quote)

    __hash__ = None


class Entity:
    __slots__ = ()

    DOCTYPE = 1
    START_TAG = 2
    END_TAG = 3
    COMMENT = 4
    EMBEDDED_CODE = 5
    TEXT = 6

    kind = None

    def __str__(self):
        return self.to_text()

    def to_text(self):
        raise NotImplementedError


class Doctype(Entity):
    """``<!DOCTYPE token [name=value] ...>``; tokens are strings or TagAttributes."""

    __slots__ = ("attrs", "keyword")

    kind = Entity.DOCTYPE

    def __init__(self, attrs=None, keyword="DOCTYPE"):
        self.attrs = list(attrs) if attrs else []
        self.keyword = keyword

    def __repr__(self):
        return f"Doctype({[str(a) for a in self.attrs]!r})"

    def to_text(self):
        if not self.attrs:
            return f"<!{self.keyword}>"
        return f"<!{self.keyword} {' '.join(str(a) for a in self.attrs)}>"


class StartTag(Entity):
    """``<name attr ...>``.

    ``closing`` is the source text between the last attribute (or the name)
    and ``>``, e.g. ``""``, ``" "``, ``"/"`` or ``" /"``.
    """

    __slots__ = ("attrs", "closing", "name")

    kind = Entity.START_TAG

    def __init__(self, name, attrs=None, closing=""):
        self.name = name
        # Keyed by lower-cased attribute name, in source order
        self.attrs = attrs if attrs is not None else {}
        self.closing = closing

    @property
    def self_closing(self):
        return self.closing.endswith("/")

    def __repr__(self):
        attrs = "".join(f" {a}" for a in self.attrs.values())
        return f"<start:{self.name}{attrs}{self.closing}>"

    def to_text(self):
        parts = ["<", self.name]
        for attr in self.attrs.values():
            parts.append(" ")
            parts.append(str(attr))
        parts.append(self.closing)
        parts.append(">")
        return "".join(parts)


class EndTag(Entity):
    __slots__ = ("name",)

    kind = Entity.END_TAG

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<end:{self.name}>"

    def to_text(self):
        return f"</{self.name}>"


class Comment(Entity):
    __slots__ = ("data",)

    kind = Entity.COMMENT

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"Comment({self.data[:30]!r})"

    def to_text(self):
        return f"<!--{self.data}-->"


class EmbeddedCode(Entity):
    """Template code block: ``<?php ... ?>`` or ``<%= ... %>``.

    ``opener`` is the opening delimiter exactly as written in the source, e.g.
    ``<?``, ``<?PHP`` or ``<%``.
    """

    __slots__ = ("data", "language", "opener")

    kind = Entity.EMBEDDED_CODE

    PHP = "php"
    RUBY = "ruby"

    OPENERS = {PHP: "<?php", RUBY: "<%="}
    CLOSERS = {PHP: "?>", RUBY: "%>"}

    def __init__(self, language, data, opener=None):
        self.language = language
        self.data = data
        self.opener = opener if opener is not None else self.OPENERS[language]

    def __repr__(self):
        return f"EmbeddedCode({self.language}, {self.data[:30]!r})"

    @property
    def closer(self):
        return self.CLOSERS[self.language]

    def to_text(self):
        return f"{self.opener}{self.data}{self.closer}"


class Text(Entity):
    __slots__ = ("data",)

    kind = Entity.TEXT

    def __init__(self, data):
        self.data = data

    def __repr__(self):
        return f"Text({self.data[:30]!r})"

    def to_text(self):
        return self.data


class ParseError:
    """Nesting problem repaired by the tree builder.

    ``code`` names the repair (``missing-end-tag``, ``misplaced-end-tag-fixed``
    or ``unmatched-end-tag``); line and column point at the end tag involved.
    """

    __slots__ = ("code", "column", "line", "message")

    def __init__(self, code, message, line, column):
        self.code = code
        self.message = message
        self.line = line
        self.column = column

    def __repr__(self):
        return f"ParseError({self.code!r}, line={self.line}, column={self.column})"

    def __str__(self):
        return f"line {self.line}, column {self.column}: {self.message} [{self.code}]"
