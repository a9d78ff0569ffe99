"""Loader for DMMF JSON documents.

Validates the JSON produced by Prisma's DMMF export with pydantic and
converts it to the schema document IR. Both the flat layout
(``outputTypes``/``inputTypes``/``enums``) and Prisma's grouped layout
(``outputObjectTypes``/``inputObjectTypes``/``enumTypes``) are accepted.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .ir import (
    ENUM,
    OBJECT,
    SCALAR,
    EnumType,
    InputType,
    OutputType,
    SchemaArg,
    SchemaDocument,
    SchemaField,
    TypegenError,
    TypeRef,
)

logger = logging.getLogger(__name__)

# Newer Prisma releases describe where a type lives instead of its kind
LOCATION_KINDS = {
    "scalar": SCALAR,
    "inputObjectTypes": OBJECT,
    "outputObjectTypes": OBJECT,
    "enumTypes": ENUM,
}


class SchemaLoadError(TypegenError):
    """Raised when a schema source cannot be read or is invalid."""


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WireTypeRef(_WireModel):
    type: str
    kind: str | None = None
    location: str | None = None
    is_list: bool = Field(False, alias="isList")
    is_required: bool | None = Field(None, alias="isRequired")
    is_nullable: bool | None = Field(None, alias="isNullable")

    def to_ir(self) -> TypeRef:
        kind = self.kind or LOCATION_KINDS.get(self.location or "")
        if kind is None:
            raise SchemaLoadError(f"Type reference {self.type!r} has no kind or known location")
        return TypeRef(type=self.type, kind=kind, is_list=self.is_list)


class WireArg(_WireModel):
    name: str
    input_types: list[WireTypeRef] = Field(alias="inputTypes")
    is_required: bool = Field(False, alias="isRequired")
    is_nullable: bool = Field(False, alias="isNullable")

    def to_ir(self) -> SchemaArg:
        return SchemaArg(
            name=self.name,
            input_types=[t.to_ir() for t in self.input_types],
            is_required=self.is_required,
            is_nullable=self.is_nullable,
        )


class WireField(_WireModel):
    name: str
    output_type: WireTypeRef = Field(alias="outputType")
    args: list[WireArg] = Field(default_factory=list)
    is_required: bool | None = Field(None, alias="isRequired")
    is_nullable: bool | None = Field(None, alias="isNullable")

    def to_ir(self) -> SchemaField:
        # Older exports keep the modifiers on the output type
        is_required = self.is_required
        if is_required is None:
            is_required = self.output_type.is_required
        is_nullable = self.is_nullable
        if is_nullable is None:
            is_nullable = self.output_type.is_nullable
        return SchemaField(
            name=self.name,
            output_type=self.output_type.to_ir(),
            args=[a.to_ir() for a in self.args],
            is_nullable=bool(is_nullable),
            is_required=True if is_required is None else is_required,
        )


class WireOutputType(_WireModel):
    name: str
    fields: list[WireField] = Field(default_factory=list)


class WireInputType(_WireModel):
    name: str
    fields: list[WireArg] = Field(default_factory=list)


class WireEnumValue(_WireModel):
    name: str


class WireEnum(_WireModel):
    name: str
    values: list[str | WireEnumValue] = Field(default_factory=list)

    def to_ir(self) -> EnumType:
        return EnumType(
            name=self.name,
            values=[v if isinstance(v, str) else v.name for v in self.values],
        )


class WireSchema(_WireModel):
    output_types: list[WireOutputType] = Field(default_factory=list, alias="outputTypes")
    input_types: list[WireInputType] = Field(default_factory=list, alias="inputTypes")
    enums: list[WireEnum] = Field(default_factory=list)

    def to_ir(self) -> SchemaDocument:
        return SchemaDocument(
            output_types=[
                OutputType(t.name, [f.to_ir() for f in t.fields]) for t in self.output_types
            ],
            input_types=[
                InputType(t.name, [f.to_ir() for f in t.fields]) for t in self.input_types
            ],
            enums=[e.to_ir() for e in self.enums],
        )


def _flatten_groups(schema: dict[str, Any]) -> dict[str, Any]:
    """Convert Prisma's grouped layout to the flat one."""
    groups = {
        "outputObjectTypes": "outputTypes",
        "inputObjectTypes": "inputTypes",
        "enumTypes": "enums",
    }
    flat = dict(schema)
    for grouped_key, flat_key in groups.items():
        grouped = flat.pop(grouped_key, None)
        if grouped is None:
            continue
        if not isinstance(grouped, dict):
            raise SchemaLoadError(f"{grouped_key!r} must be an object of groups")
        items = list(flat.get(flat_key, []))
        for group_name in ("prisma", "model"):
            items.extend(grouped.get(group_name, []))
        flat[flat_key] = items
    return flat


def parse_document(data: dict[str, Any]) -> SchemaDocument:
    """Convert a decoded DMMF JSON value to a schema document."""
    if not isinstance(data, dict):
        raise SchemaLoadError("DMMF document must be a JSON object")
    schema = data.get("schema", data)
    if not isinstance(schema, dict):
        raise SchemaLoadError("DMMF 'schema' must be a JSON object")
    try:
        wire = WireSchema.model_validate(_flatten_groups(schema))
    except ValidationError as e:
        raise SchemaLoadError(f"Invalid DMMF document: {e}") from e
    document = wire.to_ir()
    logger.debug(
        "Loaded %d output types, %d input types and %d enums",
        len(document.output_types), len(document.input_types), len(document.enums),
    )
    return document


def load_document(path: str | Path) -> SchemaDocument:
    """Read and convert a DMMF JSON file."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SchemaLoadError(f"Cannot read DMMF file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in DMMF file {path}: {e}") from e
    return parse_document(data)
