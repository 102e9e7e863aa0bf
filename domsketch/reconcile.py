"""Match and patch live host trees against node descriptions.

Children are compared and patched strictly by position. An insertion in the
middle of a child list therefore re-diffs every later sibling against a
shifted description; there is no keyed or LCS based matching, so which nodes
survive a patch is fully determined by their index.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from .dom_nodes import materialize
from .host import child_nodes, has_attribute_collection, owner_document
from .types_dom import CHARACTER_DATA_KINDS, NodeDescription, NodeKind


@dataclass(frozen=True)
class PatchedInPlace:
    """The node was updated where it stands; nothing needs splicing."""

    node: Any


@dataclass(frozen=True)
class Replaced:
    """A fresh node was built; the caller must put it in the old one's place."""

    node: Any


PatchResult = Union[PatchedInPlace, Replaced]


def attributes_match(live_attributes: Any, required: Mapping[str, str]) -> bool:
    """Strict equality between a live attribute map and ``required``.

    Extra live attributes fail the match just like missing or changed ones.
    """
    matched = 0
    for key, value in required.items():
        attribute = live_attributes.getNamedItem(key)
        if attribute is None or attribute.value != value:
            return False
        matched += 1
    return live_attributes.length == matched


def node_matches(node: Any, description: NodeDescription) -> bool:
    if node.nodeType != description.get("kind"):
        return False
    name = description.get("name")
    if name is not None and node.nodeName != name:
        return False
    value = description.get("value")
    if value is not None and node.nodeValue != value:
        return False
    attributes = description.get("attributes")
    if has_attribute_collection(node):
        if not attributes_match(node.attributes, attributes or {}):
            return False
    elif attributes:
        return False
    return list_matches(child_nodes(node), description.get("children") or [])


def list_matches(
    live_nodes: Sequence[Any], descriptions: Sequence[NodeDescription]
) -> bool:
    if len(live_nodes) != len(descriptions):
        return False
    for node, description in zip(live_nodes, descriptions):
        if not node_matches(node, description):
            return False
    return True


def check_equivalence(a: Any, b: Any) -> bool:
    """Deep equality for JSON-like values, independent of any host tree."""
    if isinstance(a, (list, tuple)):
        if not isinstance(b, (list, tuple)) or len(a) != len(b):
            return False
        return all(check_equivalence(x, y) for x, y in zip(a, b))
    if isinstance(a, Mapping):
        if not isinstance(b, Mapping):
            return False
        for key, value in a.items():
            if key not in b or not check_equivalence(value, b[key]):
                return False
        return all(key in a for key in b)
    if isinstance(b, (list, tuple, Mapping)):
        return False
    # bool subclasses int; JSON true is never the number 1.
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    return a == b


def apply_attribute_changes(element: Any, required: Mapping[str, str]) -> None:
    """Make the element's attribute set exactly ``required``.

    Attributes are only written when missing or different, and only the ones
    absent from ``required`` are removed.
    """
    for key, value in required.items():
        if not element.hasAttribute(key) or element.getAttribute(key) != value:
            element.setAttribute(key, value)
    live_attributes = element.attributes
    stale = []
    for index in range(live_attributes.length):
        attribute = live_attributes.item(index)
        if attribute is not None and attribute.nodeName not in required:
            stale.append(attribute.nodeName)
    for key in stale:
        element.removeAttribute(key)


def reconcile_node(node: Any, description: NodeDescription) -> Optional[PatchResult]:
    """Bring ``node`` in line with ``description``.

    Same name: the node is patched in place (value, attributes, and children
    when the description lists them). Different name: a new node is
    materialized and returned as ``Replaced`` while ``node`` itself is left
    untouched. ``None`` means the replacement could not be materialized.
    """
    if node.nodeName != description.get("name"):
        replacement = materialize(description, owner_document(node))
        if replacement is None:
            return None
        return Replaced(replacement)

    value = description.get("value")
    if (
        node.nodeType in CHARACTER_DATA_KINDS
        and value is not None
        and node.nodeValue != value
    ):
        node.nodeValue = value
    if node.nodeType == NodeKind.ELEMENT and has_attribute_collection(node):
        apply_attribute_changes(node, description.get("attributes") or {})
    children = description.get("children")
    if children is not None:
        reconcile_children(node, children)
    return PatchedInPlace(node)


def reconcile_children(node: Any, descriptions: Sequence[NodeDescription]) -> None:
    """Patch the children of ``node`` position by position.

    Surplus children are removed from the tail first; each remaining position
    is patched or replaced, and missing positions are materialized and
    appended. A description that cannot be materialized adds nothing.
    """
    children = node.childNodes
    while len(children) > len(descriptions):
        node.removeChild(children[len(children) - 1])

    document = None
    for index, description in enumerate(descriptions):
        if index < len(children):
            current = children[index]
            result = reconcile_node(current, description)
            if isinstance(result, Replaced):
                node.replaceChild(result.node, current)
            continue
        if document is None:
            document = owner_document(node)
        created = materialize(description, document)
        if created is not None:
            node.appendChild(created)


__all__ = [
    "PatchResult",
    "PatchedInPlace",
    "Replaced",
    "apply_attribute_changes",
    "attributes_match",
    "check_equivalence",
    "list_matches",
    "node_matches",
    "reconcile_children",
    "reconcile_node",
]
