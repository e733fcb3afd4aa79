import weakref

from .serialize import pretty_print, to_text


class Node:
    """Base tree node: an ordered list of children and a parent link.

    The parent link is a weak reference; a node never keeps its parent alive.
    A bare Node is used as the document root (see Document).
    """

    __slots__ = ("__weakref__", "_parent", "children")

    node_type = "#node"
    tag_name = None

    def __init__(self, parent=None):
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children = []

    @property
    def parent(self):
        if self._parent is None:
            return None
        return self._parent()

    def append_child(self, child):
        child._parent = weakref.ref(self)
        self.children.append(child)

    def __iter__(self):
        return iter(self.children)

    @property
    def child_count(self):
        return len(self.children)

    @property
    def first_child(self):
        return self.children[0] if self.children else None

    @property
    def last_child(self):
        return self.children[-1] if self.children else None

    def find(self, tag_name):
        """Find the first direct child with the given tag name."""
        for child in self.children:
            if child.tag_name == tag_name:
                return child
        return None

    def direct_matches(self, tag_name):
        return [child for child in self.children if child.tag_name == tag_name]

    def find_all(self, tag_name):
        """Collect matches from the shallowest level that has any.

        Direct children are returned when at least one matches; otherwise the
        search continues in every child and their results are concatenated.
        """
        matches = []
        pending = [self]
        while pending:
            node = pending.pop()
            found = node.direct_matches(tag_name)
            if found:
                matches.extend(found)
            else:
                pending.extend(reversed(node.children))
        return matches

    def for_each(self, tag_name, func):
        for node in self.find_all(tag_name):
            func(node)

    def ancestors(self):
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def has_ancestor(self, tag_name):
        """Check whether any ancestor (excluding this node) has the given tag name."""
        return any(ancestor.tag_name == tag_name for ancestor in self.ancestors())

    def to_text(self):
        return to_text(self)

    def pretty_print(self, depth=0):
        return pretty_print(self, depth)

    def __str__(self):
        return to_text(self)

    def __repr__(self):
        return f"{type(self).__name__}(children={len(self.children)})"


class Document(Node):
    """Root of a parsed tree. Holds no entity, only children."""

    __slots__ = ()

    node_type = "#document"


class EntityNode(Node):
    """Leaf holding one non-element entity: text, comment, embedded code or doctype."""

    __slots__ = ("entity",)

    node_type = "#entity"

    def __init__(self, entity, parent=None):
        super().__init__(parent)
        self.entity = entity

    def append_child(self, child):
        msg = f"{self.entity!r} cannot have children"
        raise ValueError(msg)

    def __repr__(self):
        return f"EntityNode({self.entity!r})"


class Element(EntityNode):
    """Element built from a start tag, either void or with a body."""

    __slots__ = ("tag_name", "void")

    node_type = "#element"

    def __init__(self, start_tag, parent=None, void=False):
        super().__init__(start_tag, parent)
        self.tag_name = start_tag.name
        self.void = bool(void)

    @property
    def has_body(self):
        return not self.void

    @property
    def attributes(self):
        return self.entity.attrs

    def get(self, name, default=None):
        """Return the unquoted value of attribute `name` (None for boolean attributes)."""
        attr = self.entity.attrs.get(name.lower())
        if attr is None:
            return default
        return attr.value

    def append_child(self, child):
        if self.void:
            msg = f"Void element <{self.tag_name}> cannot have children"
            raise ValueError(msg)
        Node.append_child(self, child)

    def __repr__(self):
        kind = "void" if self.void else f"children={len(self.children)}"
        return f"Element(<{self.tag_name}>, {kind})"
