"""Compact, kind specific shorthands for node descriptions.

A shorthand is a smaller JSON form of a description: text is a bare string,
every other kind is an object recognised by which keys it carries. Keys are
checked in a fixed order (element, attribute, cdata, processing instruction,
comment) and anything else with no keys, or only ``content``, is a fragment.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from .dom_nodes import (
    attribute_description,
    cdata_description,
    comment_description,
    describe,
    describe_list,
    element_description,
    fragment_description,
    processing_instruction_description,
    text_description,
)
from .host import child_nodes
from .reconcile import PatchResult, reconcile_children, reconcile_node
from .types_dom import NodeDescription, NodeKind, NodeShorthand


def to_shorthand(description: NodeDescription) -> Optional[NodeShorthand]:
    kind = description.get("kind")
    name = description.get("name")
    value = description.get("value")

    if kind == NodeKind.TEXT:
        return value if value is not None else ""
    if kind == NodeKind.ELEMENT:
        element: dict = {"tag": name if name is not None else ""}
        attributes = description.get("attributes")
        if attributes:
            element["attributes"] = dict(attributes)
        _add_content(description, element)
        return element
    if kind == NodeKind.ATTRIBUTE:
        return {"name": name if name is not None else "", "value": value}
    if kind == NodeKind.CDATA_SECTION:
        return {"cData": value if value is not None else ""}
    if kind == NodeKind.COMMENT:
        return {"comment": value if value is not None else ""}
    if kind == NodeKind.PROCESSING_INSTRUCTION:
        return {
            "target": name if name is not None else "",
            "data": value if value is not None else "",
        }
    if kind == NodeKind.DOCUMENT_FRAGMENT:
        fragment: dict = {}
        _add_content(description, fragment)
        return fragment
    return None


def _add_content(description: NodeDescription, shorthand: dict) -> None:
    children = description.get("children")
    if children is None:
        return
    content: List[NodeShorthand] = []
    for child in children:
        child_shorthand = to_shorthand(child)
        if child_shorthand is not None:
            content.append(child_shorthand)
    shorthand["content"] = content


def from_shorthand(shorthand: NodeShorthand) -> NodeDescription:
    if isinstance(shorthand, str):
        return text_description(shorthand)
    if "tag" in shorthand:
        return element_description(
            shorthand["tag"],
            shorthand.get("attributes"),
            shorthand_content_descriptions(shorthand),
        )
    if "name" in shorthand and "value" in shorthand:
        return attribute_description(shorthand["name"], shorthand["value"])
    if "cData" in shorthand:
        return cdata_description(shorthand["cData"])
    if "target" in shorthand and "data" in shorthand:
        return processing_instruction_description(
            shorthand["target"], shorthand["data"]
        )
    if "comment" in shorthand:
        return comment_description(shorthand["comment"])
    return fragment_description(shorthand_content_descriptions(shorthand))


def shorthand_content_descriptions(
    shorthand: Mapping[str, Any]
) -> Optional[List[NodeDescription]]:
    content = shorthand.get("content")
    if content is None:
        return None
    return [from_shorthand(item) for item in content]


def render_markup(shorthand: NodeShorthand) -> str:
    """Render a shorthand as HTML-like text without building any nodes.

    Nothing is escaped: text and attribute values are emitted verbatim.
    Elements close with ``/>`` unless they carry a ``content`` list, even an
    empty one. Processing instructions are written as comments.
    """
    if isinstance(shorthand, str):
        return shorthand
    if "tag" in shorthand:
        tag = shorthand["tag"]
        parts = [f"<{tag}"]
        for key, value in (shorthand.get("attributes") or {}).items():
            parts.append(f' {key}="{value}"')
        content = shorthand.get("content")
        if content is None:
            parts.append("/>")
        else:
            parts.append(">")
            parts.extend(render_markup(item) for item in content)
            parts.append(f"</{tag}>")
        return "".join(parts)
    if shorthand.get("content") is not None:
        return "".join(render_markup(item) for item in shorthand["content"])
    if "comment" in shorthand:
        return f"<!--{shorthand['comment']}-->"
    if "cData" in shorthand:
        return f"<![CDATA[ {shorthand['cData']} ]]>"
    if "target" in shorthand and "data" in shorthand:
        return f"<!--{shorthand['target']} {shorthand['data']}-->"
    if "name" in shorthand and "value" in shorthand:
        value = shorthand["value"]
        return f'{shorthand["name"]}="{value if value is not None else "null"}"'
    return ""


def validate_shorthand(value: Any) -> Optional[NodeShorthand]:
    """Return ``value`` if it is shaped like some shorthand, else ``None``."""
    if isinstance(value, str):
        return value
    if not isinstance(value, Mapping):
        return None
    if "tag" in value:
        return value  # type: ignore[return-value]
    if "name" in value and "value" in value:
        return value  # type: ignore[return-value]
    if "cData" in value:
        return value  # type: ignore[return-value]
    if "target" in value and "data" in value:
        return value  # type: ignore[return-value]
    if "comment" in value:
        return value  # type: ignore[return-value]
    keys = list(value.keys())
    if not keys or keys == ["content"]:
        return value  # type: ignore[return-value]
    return None


def node_shorthand(node: Any) -> Optional[NodeShorthand]:
    return to_shorthand(describe(node))


def node_content_shorthands(node: Any) -> List[NodeShorthand]:
    shorthands: List[NodeShorthand] = []
    for description in describe_list(child_nodes(node)):
        shorthand = to_shorthand(description)
        if shorthand is not None:
            shorthands.append(shorthand)
    return shorthands


def apply_shorthand(node: Any, shorthand: NodeShorthand) -> Optional[PatchResult]:
    """Patch ``node`` toward ``shorthand``; see ``reconcile_node``."""
    return reconcile_node(node, from_shorthand(shorthand))


def set_content_from_shorthands(
    node: Any, shorthands: Sequence[NodeShorthand]
) -> List[NodeDescription]:
    descriptions = [from_shorthand(shorthand) for shorthand in shorthands]
    reconcile_children(node, descriptions)
    return descriptions


__all__ = [
    "apply_shorthand",
    "from_shorthand",
    "node_content_shorthands",
    "node_shorthand",
    "render_markup",
    "set_content_from_shorthands",
    "shorthand_content_descriptions",
    "to_shorthand",
    "validate_shorthand",
]
