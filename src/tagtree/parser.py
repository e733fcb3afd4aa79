"""TagTree parser entry points."""

import logging
from pathlib import Path

from .errors import MarkupSyntaxError
from .treebuilder import BuilderOpts, TreeBuilder

logger = logging.getLogger(__name__)


class TagTree:
    """Parse `text` immediately and keep the outcome.

    - root: the Document, or None when a fatal syntax error aborted the parse
    - errors: ParseErrors for every repaired nesting problem
    - syntax_error: the MarkupSyntaxError that aborted the parse, if any

    In strict mode the first repaired problem raises StrictModeError instead.
    """

    __slots__ = ("errors", "opts", "root", "syntax_error", "tree_builder")

    def __init__(self, text, *, strict=False, debug=False, opts=None):
        self.opts = opts or BuilderOpts(strict=strict, debug=debug)
        self.tree_builder = TreeBuilder(self.opts)
        self.errors = self.tree_builder.errors
        self.syntax_error = None
        try:
            self.root = self.tree_builder.run(text or "")
        except MarkupSyntaxError as exc:
            # A partial tree is never returned
            logger.error("%s", exc)
            self.syntax_error = exc
            self.root = None

    @property
    def ok(self):
        return self.root is not None

    def __repr__(self):
        state = "ok" if self.ok else "failed"
        return f"TagTree({state}, errors={len(self.errors)})"


def parse(text, *, strict=False):
    """Return the Document for `text`, or None on a fatal syntax error."""
    return TagTree(text, strict=strict).root


def parse_file(path, *, encoding="utf-8", strict=False):
    """Parse the file at `path`. Returns None when the file does not exist."""
    path = Path(path)
    if not path.is_file():
        logger.warning("%s: no such file", path)
        return None
    # newline="" keeps CRLF line endings so the tree renders back byte for byte
    with path.open("r", encoding=encoding, newline="") as f:
        text = f.read()
    return parse(text, strict=strict)
