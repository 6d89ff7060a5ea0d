"""Extract plain text from EggsML nodes.

Example:
    >>> from eggsml import parse, to_plain_text
    >>> to_plain_text(parse("Hello *World*"))
    'Hello World'
"""

from eggsml.nodes import Node, Tag, Text


def to_plain_text(node: Node) -> str:
    """Concatenate the text of ``node`` and its descendants, dropping all tags.

    Args:
        node: Any node (usually the root).

    Returns:
        Depth-first concatenation of every Text node's content.

    """
    parts: list[str] = []
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        match current:
            case Text():
                parts.append(current.text)
            case Tag():
                stack.extend(reversed(current.children))
    return "".join(parts)


def has_text(node: Node) -> bool:
    """Whether ``node`` contains any textual content."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        match current:
            case Text():
                if current.text:
                    return True
            case Tag():
                stack.extend(current.children)
    return False
