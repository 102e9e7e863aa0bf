"""Command-line interface for domsketch."""

import argparse
import difflib
import json
import sys
from pathlib import Path
from typing import Any, Iterable, List, Optional
from xml.parsers.expat import ExpatError

import yaml
from pydantic import ValidationError

from .dom_nodes import describe
from .dom_shorthands import (
    from_shorthand,
    node_shorthand,
    render_markup,
    to_shorthand,
    validate_shorthand,
)
from .host import load_document
from .io_utils import read_data, stable_json_dumps, warn, write_text
from .models import NodeDescriptionModel, PatchJob, PatchPlan
from .reconcile import check_equivalence, reconcile_children
from .types_dom import NodeDescription, NodeShorthand
from .verify_roundtrip import verify_roundtrip_all

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}


def _load_data(path: Path) -> Any:
    if not path.exists():
        raise SystemExit(f"File not found: {path}")
    try:
        return read_data(path)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SystemExit(f"Could not parse {path}: {exc}") from exc


def _load_root(path: Path) -> Any:
    if not path.exists():
        raise SystemExit(f"Document not found: {path}")
    try:
        document = load_document(path)
    except ExpatError as exc:
        raise SystemExit(f"Could not load XML document {path}: {exc}") from exc
    return document.documentElement


def _as_list(payload: Any, path: Path) -> List[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, str):
        return [payload]
    raise SystemExit(f"{path} must contain an object or a list of objects.")


def _load_shorthands(path: Path) -> List[NodeShorthand]:
    shorthands: List[NodeShorthand] = []
    errors: List[str] = []
    for index, item in enumerate(_as_list(_load_data(path), path), start=1):
        shorthand = validate_shorthand(item)
        if shorthand is None:
            errors.append(f"{path} item {index}: not a recognised shorthand: {item!r}")
            continue
        shorthands.append(shorthand)
    if errors:
        for message in errors:
            warn(message)
        raise SystemExit(1)
    return shorthands


def _load_descriptions(path: Path, *, strict: bool = False) -> List[NodeDescription]:
    descriptions: List[NodeDescription] = []
    errors: List[str] = []
    for index, item in enumerate(_as_list(_load_data(path), path), start=1):
        if not isinstance(item, dict):
            errors.append(f"{path} item {index}: not a node description: {item!r}")
            continue
        if not strict:
            descriptions.append(item)
            continue
        try:
            descriptions.append(NodeDescriptionModel.model_validate(item).to_description())
        except ValidationError as exc:
            errors.append(f"{path} item {index}: {exc}")
    if errors:
        for message in errors:
            warn(message)
        raise SystemExit(1)
    return descriptions


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        write_text(Path(output), text)
    else:
        sys.stdout.write(text)


def _handle_describe(args: argparse.Namespace) -> None:
    root = _load_root(Path(args.input))
    _emit(stable_json_dumps(describe(root), sort_keys=False), args.output)


def _handle_shorthand(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if input_path.suffix.lower() in XML_SUFFIXES:
        shorthand = node_shorthand(_load_root(input_path))
    else:
        descriptions = _load_descriptions(input_path, strict=args.strict)
        shorthands = [to_shorthand(item) for item in descriptions]
        shorthand = shorthands[0] if len(shorthands) == 1 else shorthands
    if shorthand is None:
        raise SystemExit(f"{input_path}: node kind has no shorthand form.")
    _emit(stable_json_dumps(shorthand, sort_keys=False), args.output)


def _handle_expand(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    descriptions = [from_shorthand(item) for item in _load_shorthands(input_path)]
    payload = descriptions[0] if len(descriptions) == 1 else descriptions
    _emit(stable_json_dumps(payload, sort_keys=False), args.output)


def _handle_render(args: argparse.Namespace) -> None:
    shorthands = _load_shorthands(Path(args.input))
    _emit("".join(render_markup(item) for item in shorthands) + "\n", args.output)


def _handle_validate(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    descriptions = _load_descriptions(input_path, strict=True)
    print(f"{input_path}: {len(descriptions)} description(s) OK")


def _run_patch(
    document_path: Path,
    target_path: Path,
    fmt: str,
    output_path: Optional[Path],
    strict: bool,
) -> None:
    root = _load_root(document_path)
    if fmt == "shorthand":
        descriptions = [from_shorthand(item) for item in _load_shorthands(target_path)]
    else:
        descriptions = _load_descriptions(target_path, strict=strict)
    reconcile_children(root, descriptions)
    destination = output_path or document_path
    write_text(destination, root.ownerDocument.toxml())
    warn(f"[patch] {document_path} -> {destination} ({len(descriptions)} node(s))")


def _handle_patch(args: argparse.Namespace) -> None:
    _run_patch(
        Path(args.document),
        Path(args.target),
        args.format,
        Path(args.output) if args.output else None,
        args.strict,
    )


def _load_patch_plan(path: Path) -> PatchPlan:
    data = _load_data(path) or {}
    try:
        return PatchPlan.model_validate(data)
    except ValidationError as exc:
        raise SystemExit(f"Invalid patch plan in {path}: {exc}") from exc


def _handle_apply(args: argparse.Namespace) -> None:
    plan_path = Path(args.plan)
    plan = _load_patch_plan(plan_path)
    if not plan.jobs:
        warn(f"[apply] {plan_path} lists no jobs")
        return
    for index, job in enumerate(plan.jobs, start=1):
        resolved: PatchJob = job.resolved(plan_path.parent)
        warn(f"[apply] job {index}: {resolved.name or resolved.document.name}")
        _run_patch(
            resolved.document,
            resolved.target,
            resolved.format,
            resolved.output,
            resolved.strict,
        )


def _handle_check(args: argparse.Namespace) -> None:
    before_path = Path(args.before)
    after_path = Path(args.after)
    before = _load_data(before_path)
    after = _load_data(after_path)
    if check_equivalence(before, after):
        print("equivalent")
        return
    diff = difflib.unified_diff(
        stable_json_dumps(before).splitlines(keepends=True),
        stable_json_dumps(after).splitlines(keepends=True),
        fromfile=str(before_path),
        tofile=str(after_path),
    )
    sys.stderr.write("".join(diff))
    raise SystemExit(1)


def _handle_verify(args: argparse.Namespace) -> None:
    documents_dir = Path(args.directory)
    if not documents_dir.is_dir():
        raise SystemExit(f"Document directory not found: {documents_dir}")
    ok, errors = verify_roundtrip_all(documents_dir)
    if not ok:
        sys.stderr.write("\n".join(errors))
        raise SystemExit(1)
    print("round-trip OK")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domsketch",
        description="Describe, compact, render and patch node trees.",
    )
    subparsers = parser.add_subparsers(dest="command")

    describe_parser = subparsers.add_parser(
        "describe",
        help="Describe the root element of an XML document as JSON.",
        description="Capture a document's root element as a node description.",
    )
    describe_parser.add_argument("input", help="Path to an XML document.")
    describe_parser.add_argument("--out", dest="output", help="Write JSON here.")
    describe_parser.set_defaults(func=_handle_describe)

    shorthand_parser = subparsers.add_parser(
        "shorthand",
        help="Compact an XML document or description file into shorthand.",
        description="Convert descriptions (or an XML root) to shorthand JSON.",
    )
    shorthand_parser.add_argument("input", help="XML document or description JSON/YAML.")
    shorthand_parser.add_argument("--out", dest="output", help="Write JSON here.")
    shorthand_parser.add_argument(
        "--strict",
        action="store_true",
        help="Validate descriptions against the strict schema first.",
    )
    shorthand_parser.set_defaults(func=_handle_shorthand)

    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand shorthand JSON/YAML into full descriptions.",
        description="Convert shorthand back into node descriptions.",
    )
    expand_parser.add_argument("input", help="Shorthand JSON/YAML file.")
    expand_parser.add_argument("--out", dest="output", help="Write JSON here.")
    expand_parser.set_defaults(func=_handle_expand)

    render_parser = subparsers.add_parser(
        "render",
        help="Render shorthand JSON/YAML as markup.",
        description="Render shorthand to unescaped HTML-like text.",
    )
    render_parser.add_argument("input", help="Shorthand JSON/YAML file.")
    render_parser.add_argument("--out", dest="output", help="Write markup here.")
    render_parser.set_defaults(func=_handle_render)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a description file against the strict schema.",
        description="Check that every description is well formed for its kind.",
    )
    validate_parser.add_argument("input", help="Description JSON/YAML file.")
    validate_parser.set_defaults(func=_handle_validate)

    patch_parser = subparsers.add_parser(
        "patch",
        help="Reconcile an XML document's root content with a target file.",
        description=(
            "Patch the children of the document element in place so they match "
            "the target content, position by position."
        ),
    )
    patch_parser.add_argument("document", help="XML document to patch.")
    patch_parser.add_argument("target", help="JSON/YAML file with the desired content.")
    patch_parser.add_argument(
        "--format",
        choices=["shorthand", "description"],
        default="shorthand",
        help="Encoding of the target file.",
    )
    patch_parser.add_argument(
        "--out",
        dest="output",
        help="Write the patched document here instead of overwriting it.",
    )
    patch_parser.add_argument(
        "--strict",
        action="store_true",
        help="Validate description targets against the strict schema.",
    )
    patch_parser.set_defaults(func=_handle_patch)

    apply_parser = subparsers.add_parser(
        "apply",
        help="Run every job of a patch plan YAML file.",
        description="Apply a batch of patch jobs described in YAML.",
    )
    apply_parser.add_argument("--plan", required=True, help="Path to the plan YAML.")
    apply_parser.set_defaults(func=_handle_apply)

    check_parser = subparsers.add_parser(
        "check",
        help="Compare two JSON/YAML snapshots for deep equivalence.",
        description="Exit non-zero with a diff when the snapshots differ.",
    )
    check_parser.add_argument("before", help="Earlier snapshot.")
    check_parser.add_argument("after", help="Later snapshot.")
    check_parser.set_defaults(func=_handle_check)

    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify description and shorthand round-trips for XML files.",
        description="Round-trip every *.xml file in a directory.",
    )
    verify_parser.add_argument("directory", help="Directory of XML documents.")
    verify_parser.set_defaults(func=_handle_verify)

    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
