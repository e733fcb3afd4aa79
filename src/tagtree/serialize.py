"""Serialization of tagtree nodes back to markup.

Both renderers walk the tree with an explicit stack of pending nodes and
literal strings, so deep documents do not hit the recursion limit.
"""


def _has_body(node):
    return node.node_type == "#element" and not node.void


def to_text(node):
    """Render `node` exactly as parsed.

    With-body elements always get a closing tag, including ones whose end tag
    was missing in the source and recovered by the tree builder.
    """
    parts = []
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        if item.node_type != "#document":
            parts.append(item.entity.to_text())
            if not _has_body(item):
                continue
            stack.append(f"</{item.tag_name}>")
        stack.extend(reversed(item.children))
    return "".join(parts)


def pretty_print(node, depth=0):
    """Render `node` indented with one tab per level.

    An element whose only child has no body of its own is kept on one line.
    """
    parts = []
    stack = [(node, depth)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue
        node, depth = item
        if node.node_type == "#document":
            for child in reversed(node.children):
                stack.append("\n")
                stack.append((child, depth))
            continue

        prefix = "\t" * depth
        parts.append(prefix)
        parts.append(node.entity.to_text())
        if not _has_body(node):
            continue

        children = node.children
        if len(children) == 1 and not _has_body(children[0]):
            parts.append(to_text(children[0]))
            parts.append(f"</{node.tag_name}>")
            continue

        stack.append(f"\n{prefix}</{node.tag_name}>")
        for child in reversed(children):
            stack.append((child, depth + 1))
            stack.append("\n")
    return "".join(parts)
