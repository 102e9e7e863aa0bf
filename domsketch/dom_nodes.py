"""Convert between live host nodes and JSON friendly node descriptions."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .host import HostDocument, child_nodes, has_attribute_collection, new_document
from .types_dom import FIXED_NODE_NAMES, NodeDescription, NodeKind


def describe(node: Any) -> NodeDescription:
    """Capture a live node, and everything below it, as a description.

    ``children`` is only attached when the node has at least one child, so a
    leaf and an element without content describe the same way they were built.
    """
    description: NodeDescription = {"kind": node.nodeType, "name": node.nodeName}
    if node.nodeValue is not None:
        description["value"] = node.nodeValue
    if has_attribute_collection(node):
        description["attributes"] = describe_attributes(node)
    children = describe_list(child_nodes(node))
    if children:
        description["children"] = children
    return description


def describe_list(nodes: Iterable[Any]) -> List[NodeDescription]:
    return [describe(child) for child in nodes]


def describe_attributes(element: Any) -> Dict[str, str]:
    attributes = element.attributes
    values: Dict[str, str] = {}
    for index in range(attributes.length):
        attribute = attributes.item(index)
        if attribute is not None:
            values[attribute.nodeName] = attribute.value
    return values


def materialize(
    description: NodeDescription, document: Optional[HostDocument] = None
) -> Any:
    """Try to build a live node from a description.

    Returns ``None`` when the description lacks a name its kind requires, or
    when its kind (documents, doctypes) cannot be created through a document.
    Fragments come back empty: their ``children`` are left to the caller.
    """
    if document is None:
        document = new_document()
    kind = description.get("kind")
    name = description.get("name")
    value = description.get("value")

    if kind == NodeKind.TEXT:
        return document.createTextNode(value if value is not None else "")
    if kind == NodeKind.ELEMENT:
        if name is None:
            return None
        element = document.createElement(name)
        attributes = description.get("attributes")
        if attributes is not None:
            set_element_attributes(element, attributes)
        append_described_children(element, description, document)
        return element
    if kind == NodeKind.ATTRIBUTE:
        if name is None:
            return None
        attribute = document.createAttribute(name)
        if value is not None:
            attribute.value = value
        return attribute
    if kind == NodeKind.CDATA_SECTION:
        return document.createCDATASection(value if value is not None else "")
    if kind == NodeKind.COMMENT:
        return document.createComment(value if value is not None else "")
    if kind == NodeKind.PROCESSING_INSTRUCTION:
        if name is None:
            return None
        return document.createProcessingInstruction(
            name, value if value is not None else ""
        )
    if kind == NodeKind.DOCUMENT_FRAGMENT:
        return document.createDocumentFragment()
    return None


def append_described_children(
    target: Any,
    description: NodeDescription,
    document: Optional[HostDocument] = None,
) -> None:
    children = description.get("children")
    if children is None:
        return
    for child_description in children:
        child = materialize(child_description, document)
        if child is not None:
            target.appendChild(child)


def set_element_attributes(element: Any, values: Mapping[str, str]) -> None:
    for key, value in values.items():
        if not element.hasAttribute(key) or element.getAttribute(key) != value:
            element.setAttribute(key, value)


def element_description(
    tag: str,
    attributes: Optional[Mapping[str, str]] = None,
    children: Optional[List[NodeDescription]] = None,
) -> NodeDescription:
    description: NodeDescription = {"kind": NodeKind.ELEMENT, "name": tag}
    if attributes is not None:
        description["attributes"] = dict(attributes)
    if children is not None:
        description["children"] = children
    return description


def attribute_description(name: str, value: Optional[str]) -> NodeDescription:
    return {"kind": NodeKind.ATTRIBUTE, "name": name, "value": value}


def text_description(text: str) -> NodeDescription:
    return {
        "kind": NodeKind.TEXT,
        "name": FIXED_NODE_NAMES[NodeKind.TEXT],
        "value": text,
    }


def comment_description(text: str) -> NodeDescription:
    return {
        "kind": NodeKind.COMMENT,
        "name": FIXED_NODE_NAMES[NodeKind.COMMENT],
        "value": text,
    }


def cdata_description(data: str) -> NodeDescription:
    return {
        "kind": NodeKind.CDATA_SECTION,
        "name": FIXED_NODE_NAMES[NodeKind.CDATA_SECTION],
        "value": data,
    }


def processing_instruction_description(target: str, data: str) -> NodeDescription:
    return {"kind": NodeKind.PROCESSING_INSTRUCTION, "name": target, "value": data}


def fragment_description(
    children: Optional[List[NodeDescription]] = None,
) -> NodeDescription:
    description: NodeDescription = {
        "kind": NodeKind.DOCUMENT_FRAGMENT,
        "name": FIXED_NODE_NAMES[NodeKind.DOCUMENT_FRAGMENT],
    }
    if children is not None:
        description["children"] = children
    return description


__all__ = [
    "append_described_children",
    "attribute_description",
    "cdata_description",
    "comment_description",
    "describe",
    "describe_attributes",
    "describe_list",
    "element_description",
    "fragment_description",
    "materialize",
    "processing_instruction_description",
    "set_element_attributes",
    "text_description",
]
