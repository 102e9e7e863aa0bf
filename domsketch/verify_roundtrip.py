"""Round-trip verification between live trees, descriptions and shorthands."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Any, List, Tuple

from .dom_nodes import describe, materialize
from .dom_shorthands import from_shorthand, to_shorthand
from .host import load_document, new_document
from .io_utils import stable_json_dumps
from .reconcile import check_equivalence


def drop_empty_attributes(obj: Any) -> Any:
    """Remove ``attributes: {}`` entries, which shorthands never carry."""
    if isinstance(obj, dict):
        items = {}
        for key, value in obj.items():
            if key == "attributes" and not value:
                continue
            items[key] = drop_empty_attributes(value)
        return items
    if isinstance(obj, list):
        return [drop_empty_attributes(item) for item in obj]
    return obj


def _pretty_json(obj: Any) -> List[str]:
    return stable_json_dumps(obj).splitlines(keepends=True)


def _diff(expected: Any, actual: Any, fromfile: str, tofile: str) -> str:
    return "".join(
        difflib.unified_diff(
            _pretty_json(expected), _pretty_json(actual), fromfile=fromfile, tofile=tofile
        )
    )


def verify_node_roundtrip(node: Any, label: str = "node") -> Tuple[bool, List[str]]:
    errors: List[str] = []
    description = describe(node)

    rebuilt = materialize(description, new_document())
    if rebuilt is None:
        errors.append(f"{label}: description could not be materialized\n")
    else:
        restored = describe(rebuilt)
        if not check_equivalence(description, restored):
            errors.append(
                _diff(description, restored, f"describe/{label}", f"materialize/{label}")
            )

    shorthand = to_shorthand(description)
    if shorthand is None:
        errors.append(f"{label}: kind {description['kind']} has no shorthand form\n")
    else:
        expected = drop_empty_attributes(description)
        expanded = drop_empty_attributes(from_shorthand(shorthand))
        if not check_equivalence(expected, expanded):
            errors.append(
                _diff(expected, expanded, f"describe/{label}", f"shorthand/{label}")
            )

    return not errors, errors


def verify_roundtrip_all(documents_dir: Path) -> Tuple[bool, List[str]]:
    errors: List[str] = []
    for path in sorted(documents_dir.glob("*.xml")):
        document = load_document(path)
        _, file_errors = verify_node_roundtrip(document.documentElement, label=path.name)
        errors.extend(file_errors)
    return not errors, errors
