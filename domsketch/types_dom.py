"""Node description and shorthand type definitions."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, List, Optional, TypedDict, Union


class NodeKind(IntEnum):
    """Node type codes; these numbers are part of the JSON wire format."""

    ELEMENT = 1
    ATTRIBUTE = 2
    TEXT = 3
    CDATA_SECTION = 4
    PROCESSING_INSTRUCTION = 7
    COMMENT = 8
    DOCUMENT = 9
    DOCUMENT_TYPE = 10
    DOCUMENT_FRAGMENT = 11


class FixedNodeName(str, Enum):
    TEXT = "#text"
    CDATA_SECTION = "#cdata-section"
    COMMENT = "#comment"
    DOCUMENT = "#document"
    DOCUMENT_FRAGMENT = "#document-fragment"


FIXED_NODE_NAMES: Dict[NodeKind, str] = {
    NodeKind.TEXT: FixedNodeName.TEXT.value,
    NodeKind.CDATA_SECTION: FixedNodeName.CDATA_SECTION.value,
    NodeKind.COMMENT: FixedNodeName.COMMENT.value,
    NodeKind.DOCUMENT: FixedNodeName.DOCUMENT.value,
    NodeKind.DOCUMENT_FRAGMENT: FixedNodeName.DOCUMENT_FRAGMENT.value,
}

# Kinds whose value is edited in place during reconciliation.
CHARACTER_DATA_KINDS = frozenset(
    {
        NodeKind.TEXT,
        NodeKind.CDATA_SECTION,
        NodeKind.COMMENT,
        NodeKind.PROCESSING_INSTRUCTION,
    }
)


class _DescriptionBase(TypedDict):
    kind: int


class NodeDescription(_DescriptionBase, total=False):
    name: str
    value: Optional[str]
    attributes: Dict[str, str]
    children: List["NodeDescription"]


class _ElementShorthandBase(TypedDict):
    tag: str


class ElementShorthand(_ElementShorthandBase, total=False):
    attributes: Dict[str, str]
    content: List["NodeShorthand"]


class AttributeShorthand(TypedDict):
    name: str
    value: Optional[str]


class CDataShorthand(TypedDict):
    cData: str


class ProcessingInstructionShorthand(TypedDict):
    target: str
    data: str


class CommentShorthand(TypedDict):
    comment: str


class FragmentShorthand(TypedDict, total=False):
    content: List["NodeShorthand"]


NodeShorthand = Union[
    str,
    ElementShorthand,
    AttributeShorthand,
    CDataShorthand,
    ProcessingInstructionShorthand,
    CommentShorthand,
    FragmentShorthand,
]


__all__ = [
    "AttributeShorthand",
    "CDataShorthand",
    "CHARACTER_DATA_KINDS",
    "CommentShorthand",
    "ElementShorthand",
    "FIXED_NODE_NAMES",
    "FixedNodeName",
    "FragmentShorthand",
    "NodeDescription",
    "NodeKind",
    "NodeShorthand",
    "ProcessingInstructionShorthand",
]
