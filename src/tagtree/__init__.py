from .buffer import Bookmark, Cursor
from .errors import MarkupSyntaxError, StrictModeError
from .node import Document, Element, EntityNode, Node
from .parser import TagTree, parse, parse_file
from .serialize import pretty_print, to_text
from .tokens import Comment, Doctype, EmbeddedCode, EndTag, ParseError, StartTag, TagAttribute, Text
from .treebuilder import BuilderOpts, TreeBuilder

__all__ = [
    "Bookmark",
    "BuilderOpts",
    "Comment",
    "Cursor",
    "Doctype",
    "Document",
    "Element",
    "EmbeddedCode",
    "EndTag",
    "EntityNode",
    "MarkupSyntaxError",
    "Node",
    "ParseError",
    "StartTag",
    "StrictModeError",
    "TagAttribute",
    "TagTree",
    "Text",
    "TreeBuilder",
    "parse",
    "parse_file",
    "pretty_print",
    "to_text",
]
