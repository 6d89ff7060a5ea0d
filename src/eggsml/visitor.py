"""Read-only traversal of EggsML trees.

Provides a base visitor class with match-based dispatch, a depth-first
``walk`` iterator, and ``active_tag_runs`` which pairs every piece of text
with the tags that enclose it.

Example: count the tags of each kind.

    class TagCounter(BaseVisitor[None]):
        def __init__(self) -> None:
            self.counts: Counter[str] = Counter()

        def visit_tag(self, node: Tag) -> None:
            if node.tag is not None:
                self.counts[node.tag] += 1

    counter = TagCounter()
    counter.visit(root)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. ``walk``
    and ``active_tag_runs`` are pure.

"""

from collections.abc import Iterator

from eggsml.nodes import Node, Tag, Text


class BaseVisitor[T]:
    """Base tree visitor with match-based dispatch.

    Override ``visit_tag`` and/or ``visit_text``. Children of a Tag are
    walked automatically after ``visit_tag`` returns.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to ``visit_tag``/``visit_text``, then walk children."""
        match node:
            case Tag():
                result = self.visit_tag(node)
                for child in node.children:
                    self.visit(child)
                return result
            case Text():
                return self.visit_text(node)
            case _:
                return self.visit_default(node)

    def visit_default(self, node: Node) -> T:
        return None  # type: ignore[return-value]

    def visit_tag(self, node: Tag) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all its descendants, depth-first, pre-order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Tag):
            stack.extend(reversed(current.children))


def active_tag_runs(node: Node) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield ``(tag_path, text)`` for every Text node under ``node``.

    ``tag_path`` lists the characters of the enclosing tags, outermost
    first; the root contributes nothing.

    Example:
        >>> from eggsml import parse
        >>> list(active_tag_runs(parse("a *b [c]*")))
        [((), 'a '), (('*',), 'b '), (('*', '['), 'c')]
    """
    stack: list[tuple[Node, tuple[str, ...]]] = [(node, ())]
    while stack:
        current, path = stack.pop()
        match current:
            case Text():
                yield path, current.text
            case Tag():
                inner = path if current.tag is None else (*path, current.tag)
                stack.extend((child, inner) for child in reversed(current.children))
