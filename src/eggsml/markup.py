"""Turn an EggsML tree back into EggsML markup.

The output is equivalent to, not necessarily identical to, the markup the
tree was parsed from: redundant backticks disappear, literal special
characters are re-escaped by doubling (or quoting, when there are many),
and backticks are inserted wherever two delimiters would otherwise merge
into a run.

Example:
    >>> from eggsml import parse, to_markup_text
    >>> to_markup_text(parse("*one ***two* three*"))
    '*one ***two* three*'
"""

from __future__ import annotations

from collections.abc import Iterator

from eggsml.lexer.charsets import ALWAYS_OPENS, SPECIAL_CHARACTERS, opposite
from eggsml.nodes import Node, Tag, Text

# Quoting wins over doubling once a text has this many special characters
_QUOTE_THRESHOLD = 3


def escape(text: str) -> str:
    """Escape ``text`` so that it parses back to exactly ``text``.

    The result either contains no special characters or is enclosed in
    double quotes in its entirety.

    Examples:
        >>> escape("plain")
        'plain'
        >>> escape("a*b")
        '"a*b"'
        >>> escape('""') == '"' * 4
        True
    """
    if not any(ch in SPECIAL_CHARACTERS for ch in text):
        return text
    if all(ch == '"' for ch in text):
        return '"' * (len(text) * 2)
    return '"' + text.replace('"', '""') + '"'


def to_markup_text(node: Node) -> str:
    """Reconstruct EggsML markup for ``node``.

    Args:
        node: A Tag (root or otherwise) or a Text node

    Returns:
        Markup that parses to a tree with the same text and tag structure
    """
    match node:
        case Text():
            return _text_markup(node.text)
        case Tag():
            return _tag_markup(node)
        case _:
            raise TypeError(f"Expected Tag or Text, got {type(node).__name__}")


def _text_markup(text: str) -> str:
    specials = sum(1 for ch in text if ch in SPECIAL_CHARACTERS and ch != '"')
    if specials >= _QUOTE_THRESHOLD:
        return '"' + text.replace('"', '""') + '"'
    return "".join(ch * 2 if ch in SPECIAL_CHARACTERS else ch for ch in text)


def _tag_markup(root: Tag) -> str:
    """Build markup for ``root`` bottom-up on an explicit stack.

    Each frame holds a tag, an iterator over its remaining children, and
    the (child, markup) pairs finished so far.
    """
    stack: list[tuple[Tag, Iterator[Node], list[tuple[Node, str]]]] = [
        (root, iter(root.children), [])
    ]
    while True:
        node, children, done = stack[-1]
        child = next(children, None)
        if isinstance(child, Tag):
            stack.append((child, iter(child.children), []))
        elif child is not None:
            done.append((child, to_markup_text(child)))
        else:
            stack.pop()
            markup = _close_tag(node, done)
            if not stack:
                return markup
            stack[-1][2].append((node, markup))


def _close_tag(node: Tag, children: list[tuple[Node, str]]) -> str:
    tag = node.tag
    closer = opposite(tag)

    if not children:
        if tag is None:
            return ""
        # "**" would be a literal asterisk, so separate the pair
        return tag + closer if tag in ALWAYS_OPENS else tag + "`" + closer

    inner = _join_children(children, tag)
    if tag is None:
        return inner

    head = tag + "`" if inner.startswith(tag) else tag
    tail = "`" + closer if inner.endswith(closer) else closer
    return head + inner + tail


def _join_children(children: list[tuple[Node, str]], tag: str | None) -> str:
    parts: list[str] = []
    last = ""
    for child, child_markup in children:
        if not child_markup:
            continue

        # Keep adjacent identical characters from fusing into one run
        if last and child_markup[0] == last:
            parts.append("`")
        # Same-character nesting needs the tripled opener
        if tag is not None and isinstance(child, Tag) and child.tag == tag and tag not in ALWAYS_OPENS:
            parts.append(tag * 2)

        parts.append(child_markup)
        last = child_markup[-1]
    return "".join(parts)
