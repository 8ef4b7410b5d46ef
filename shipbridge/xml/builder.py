"""Tree-of-tags builder for outbound carrier XML.

Requests are built by nesting nodes so the code mirrors the target schema:

    root = XmlNode("TrackRequest")
    with root.child("Request") as request:
        request.add("RequestAction", "Track")
        request.add("RequestOption", "1")
    root.add("TrackingNumber", "1Z12345E0291980793")
    body = root.to_xml()

Serialization goes through xmltodict. Attributes are not used. Children are
emitted in insertion order; siblings that share a tag are emitted together
at the position of the first one, which is how every carrier schema here
lays out repeating elements (Package, PackageResults).
"""

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Iterator

import xmltodict

from shipbridge.models.location import is_blank


def to_text(value: Any) -> str | None:
    """Render a Python value as element text.

    Booleans render as ``true``/``false``, Decimals without exponent
    notation, everything else through ``str``.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


class XmlNode:
    """An element with optional text and ordered children."""

    def __init__(self, tag: str, text: Any = None) -> None:
        if not tag:
            raise ValueError("XmlNode tag must be non-empty")
        self.tag = tag
        self.text = to_text(text)
        self.children: list["XmlNode"] = []

    def __repr__(self) -> str:
        return f"XmlNode({self.tag!r}, children={len(self.children)})"

    def append(self, node: "XmlNode | None") -> "XmlNode | None":
        """Append an existing node; ``None`` is ignored."""
        if node is not None:
            self.children.append(node)
        return node

    def add(self, tag: str, text: Any = None) -> "XmlNode":
        """Append and return a new child element."""
        node = XmlNode(tag, text)
        self.children.append(node)
        return node

    def add_text(self, tag: str, value: Any) -> "XmlNode | None":
        """Append a text child only when ``value`` is not blank."""
        if is_blank(value):
            return None
        return self.add(tag, value)

    @contextmanager
    def child(self, tag: str) -> Iterator["XmlNode"]:
        """Append a child and yield it for nested composition."""
        yield self.add(tag)

    def find(self, tag: str) -> "XmlNode | None":
        """Return the first direct child named ``tag``."""
        return next((c for c in self.children if c.tag == tag), None)

    def find_all(self, tag: str) -> list["XmlNode"]:
        return [c for c in self.children if c.tag == tag]

    def to_dict(self) -> Any:
        """Return the xmltodict representation of this node's content."""
        if not self.children:
            return self.text
        body: dict[str, Any] = {}
        if self.text is not None:
            body["#text"] = self.text
        for node in self.children:
            value = node.to_dict()
            if node.tag not in body:
                body[node.tag] = value
            elif isinstance(body[node.tag], list):
                body[node.tag].append(value)
            else:
                body[node.tag] = [body[node.tag], value]
        return body

    def to_xml(self, pretty: bool = False) -> str:
        """Serialize to a UTF-8 XML document with declaration."""
        return xmltodict.unparse(
            {self.tag: self.to_dict()},
            encoding="utf-8",
            full_document=True,
            pretty=pretty,
        )
