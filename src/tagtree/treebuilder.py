import logging

from .buffer import Cursor
from .constants import RAW_TEXT_ELEMENTS, VOID_ELEMENTS
from .errors import StrictModeError
from .node import Document, Element, EntityNode
from .tokenizer import cdata_until, end_tag, read_entity
from .tokens import Entity, ParseError, Text

logger = logging.getLogger(__name__)


class BuilderOpts:
    __slots__ = ("debug", "raw_text_elements", "strict", "void_elements")

    def __init__(self, strict=False, debug=False, void_elements=None, raw_text_elements=None):
        self.strict = bool(strict)
        self.debug = bool(debug)
        self.void_elements = frozenset(void_elements) if void_elements is not None else VOID_ELEMENTS
        self.raw_text_elements = (
            frozenset(raw_text_elements) if raw_text_elements is not None else RAW_TEXT_ELEMENTS
        )


class TreeBuilder:
    """Builds a Node tree from the entity stream.

    Misnested end tags are repaired instead of failing the parse; each repair
    is recorded in `errors` as a ParseError located at the offending end tag.
    """

    __slots__ = ("errors", "opts")

    def __init__(self, opts=None):
        self.opts = opts or BuilderOpts()
        self.errors = []

    def run(self, text):
        cursor = Cursor(text)
        root = Document()
        # Stray end tags anticipated by recovery; lives for this one parse only
        stray = []
        self.build(cursor, root, stray)
        return root

    def build(self, cursor, parent, stray):
        """Read entities into `parent` until its end tag or the end of input.

        Open elements are kept on an explicit stack, so nesting depth is not
        bounded by the interpreter's recursion limit. An element is attached
        to its parent only once it is closed.
        """
        opts = self.opts
        open_elements = [parent]
        while not cursor.at_end():
            mark, entity = read_entity(cursor, opts.void_elements)
            if entity is None:
                break
            current = open_elements[-1]
            if opts.debug:
                logger.debug("(%d,%d) in <%s>: %r", mark.line, mark.column, current.tag_name or "#document", entity)

            kind = entity.kind
            if kind == Entity.START_TAG:
                element = self._insert_element(cursor, current, entity)
                if element is not None:
                    open_elements.append(element)
            elif kind == Entity.END_TAG:
                if self._close(cursor, mark, current, entity.name, stray):
                    open_elements.pop()
                    if not open_elements:
                        return
                    open_elements[-1].append_child(current)
            else:
                current.append_child(EntityNode(entity, current))

        # End of input closes whatever is still open, innermost first
        while len(open_elements) > 1:
            element = open_elements.pop()
            open_elements[-1].append_child(element)

    def _insert_element(self, cursor, parent, start_tag):
        """Attach void and raw text elements; return any element left open."""
        name = start_tag.name
        if name in self.opts.void_elements:
            parent.append_child(Element(start_tag, parent, void=True))
            return None

        element = Element(start_tag, parent)
        if name in self.opts.raw_text_elements:
            body = cdata_until(cursor, f"</{name}>")
            end_tag(cursor)
            element.append_child(EntityNode(Text(body), element))
            parent.append_child(element)
            return None
        return element

    def _close(self, cursor, mark, parent, name, stray):
        """Handle end tag `name` inside `parent`. Returns True when `parent` is closed."""
        if stray and stray[-1] == name:
            stray.pop()
            self._warn(mark, "misplaced-end-tag-fixed", f"Found misplaced end tag </{name}> and fixed it")
            return False

        if name == parent.tag_name:
            return True

        if parent.has_ancestor(name):
            self._warn(mark, "missing-end-tag", f"End tag </{parent.tag_name}> missing or misplaced, was added")
            stray.append(parent.tag_name)
            # Hand the end tag back to the enclosing element unconsumed
            cursor.restore(mark)
            return True

        self._warn(mark, "unmatched-end-tag", f"End tag </{name}> does not match any parent, was ignored")
        return False

    def _warn(self, mark, code, message):
        error = ParseError(code, message, mark.line, mark.column)
        self.errors.append(error)
        logger.warning("%s", error)
        if self.opts.strict:
            raise StrictModeError(error)
