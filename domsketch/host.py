"""Host tree capability surface.

The description codec and the reconciliation engine never build nodes on
their own; they drive a host tree through the small part of the W3C DOM API
listed below. ``xml.dom.minidom`` implements that surface and is the default
host, but any object tree satisfying these protocols works::

    from domsketch.host import HostNode

    assert isinstance(document.documentElement, HostNode)  # structural check
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable
from xml.dom import minidom

from .types_dom import NodeKind

PathLike = Union[str, Path]


@runtime_checkable
class HostNode(Protocol):
    """Read access plus child list mutation shared by every host node."""

    nodeType: int
    nodeName: str
    nodeValue: Optional[str]
    childNodes: Sequence[Any]

    def appendChild(self, node: Any) -> Any: ...

    def removeChild(self, node: Any) -> Any: ...

    def replaceChild(self, new_node: Any, old_node: Any) -> Any: ...


@runtime_checkable
class HostAttributeMap(Protocol):
    """Indexed attribute collection exposed by elements."""

    length: int

    def item(self, index: int) -> Any: ...

    def getNamedItem(self, name: str) -> Any: ...


@runtime_checkable
class HostElement(HostNode, Protocol):
    attributes: HostAttributeMap

    def getAttribute(self, name: str) -> str: ...

    def hasAttribute(self, name: str) -> bool: ...

    def setAttribute(self, name: str, value: str) -> None: ...

    def removeAttribute(self, name: str) -> None: ...


@runtime_checkable
class HostDocument(Protocol):
    """Node factory used when a description has to be materialized."""

    def createElement(self, name: str) -> Any: ...

    def createTextNode(self, data: str) -> Any: ...

    def createComment(self, data: str) -> Any: ...

    def createCDATASection(self, data: str) -> Any: ...

    def createProcessingInstruction(self, target: str, data: str) -> Any: ...

    def createAttribute(self, name: str) -> Any: ...

    def createDocumentFragment(self) -> Any: ...


def new_document() -> HostDocument:
    return minidom.getDOMImplementation().createDocument(None, None, None)


def parse_document(text: str) -> HostDocument:
    return minidom.parseString(text)


def load_document(path: PathLike) -> HostDocument:
    return minidom.parse(str(path))


def owner_document(node: Any) -> HostDocument:
    """Return the document that should create nodes destined for ``node``."""
    if node.nodeType == NodeKind.DOCUMENT:
        return node
    document = getattr(node, "ownerDocument", None)
    if document is None:
        return new_document()
    return document


def has_attribute_collection(node: Any) -> bool:
    # Empty attribute maps are falsy, so compare against None explicitly.
    return getattr(node, "attributes", None) is not None


def child_nodes(node: Any) -> Sequence[Any]:
    """Return the live child list of ``node``.

    Attribute nodes are reported as childless: some hosts keep the value as a
    text child, which would otherwise leak into attribute descriptions.
    """
    if node.nodeType == NodeKind.ATTRIBUTE:
        return ()
    return node.childNodes


__all__ = [
    "HostAttributeMap",
    "HostDocument",
    "HostElement",
    "HostNode",
    "child_nodes",
    "has_attribute_collection",
    "load_document",
    "new_document",
    "owner_document",
    "parse_document",
]
