"""Pydantic models for strict description checks and patch plans."""

from pathlib import Path
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .types_dom import FIXED_NODE_NAMES, NodeDescription, NodeKind

_CHILDLESS_KINDS = frozenset(
    {
        NodeKind.ATTRIBUTE,
        NodeKind.TEXT,
        NodeKind.CDATA_SECTION,
        NodeKind.PROCESSING_INSTRUCTION,
        NodeKind.COMMENT,
    }
)


class NodeDescriptionModel(BaseModel):
    """Schema for a node description read from JSON or YAML."""

    kind: NodeKind = Field(..., description="Node type code (1, 2, 3, 4, 7-11).")
    name: Optional[str] = Field(
        None, description="Tag, attribute name, target, or reserved #name."
    )
    value: Optional[str] = Field(
        None, description="Character data or attribute value, if the kind has one."
    )
    attributes: Optional[Dict[str, str]] = Field(
        None, description="Element attributes keyed by name."
    )
    children: Optional[List["NodeDescriptionModel"]] = Field(
        None, description="Child descriptions in document order."
    )

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _check_kind_shape(self) -> "NodeDescriptionModel":
        if self.attributes is not None and self.kind != NodeKind.ELEMENT:
            raise ValueError(f"attributes are only allowed on elements, not {self.kind.name}")
        if self.children and self.kind in _CHILDLESS_KINDS:
            raise ValueError(f"{self.kind.name} descriptions cannot have children")
        fixed_name = FIXED_NODE_NAMES.get(self.kind)
        if fixed_name is not None and self.name is not None and self.name != fixed_name:
            raise ValueError(
                f"{self.kind.name} descriptions must be named {fixed_name!r}, got {self.name!r}"
            )
        return self

    def to_description(self) -> NodeDescription:
        """Dump back to a plain description, keeping only the keys that were set."""
        return self.model_dump(mode="json", exclude_unset=True)  # type: ignore[return-value]


class PatchJob(BaseModel):
    """Entry in a patch plan: reconcile one document against one target file."""

    name: Optional[str] = Field(None, description="Label used in progress output.")
    document: Path = Field(..., description="XML document whose root gets patched.")
    target: Path = Field(
        ..., description="JSON or YAML file holding the desired root content."
    )
    format: Literal["shorthand", "description"] = Field(
        "shorthand", description="How the target file encodes the content list."
    )
    output: Optional[Path] = Field(
        None, description="Where to write the result; defaults to the document itself."
    )
    strict: bool = Field(
        False, description="Validate description targets against the strict schema."
    )

    model_config = ConfigDict(populate_by_name=True)

    def resolved(self, base_dir: Path) -> "PatchJob":
        """Return a copy whose relative paths are anchored at ``base_dir``."""
        updates = {
            "document": base_dir / self.document,
            "target": base_dir / self.target,
        }
        if self.output is not None:
            updates["output"] = base_dir / self.output
        return self.model_copy(update=updates)


class PatchPlan(BaseModel):
    """Schema for a patch plan YAML file."""

    jobs: List[PatchJob] = Field(
        default_factory=list, description="Patch jobs, run in order."
    )


__all__ = ["NodeDescriptionModel", "PatchJob", "PatchPlan"]
