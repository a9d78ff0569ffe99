"""Intermediate Representation (IR) for DMMF schema documents.

This module defines dataclasses that represent the schema constructs the
type generator consumes: output types with their resolver fields, input
types, enums and the type references that connect them.
"""

from dataclasses import dataclass, field
from functools import cached_property


class TypegenError(Exception):
    """Base class for all errors raised by dmmf-typegen."""


class SchemaError(TypegenError):
    """Raised when a schema document is malformed."""


SCALAR = "scalar"
OBJECT = "object"
ENUM = "enum"


@dataclass
class TypeRef:
    """A reference to a scalar, object or enum type."""
    type: str
    kind: str = OBJECT
    is_list: bool = False


@dataclass
class SchemaArg:
    """An argument of an output field, or a field of an input type.

    Carries one or more candidate type references (input type variants).
    """
    name: str
    input_types: list[TypeRef]
    is_required: bool = False
    is_nullable: bool = False


@dataclass
class SchemaField:
    """A field of an output type, resolved by a resolver function."""
    name: str
    output_type: TypeRef
    args: list[SchemaArg] = field(default_factory=list)
    is_nullable: bool = False
    is_required: bool = True


@dataclass
class OutputType:
    name: str
    fields: list[SchemaField] = field(default_factory=list)


@dataclass
class InputType:
    name: str
    fields: list[SchemaArg] = field(default_factory=list)


@dataclass
class EnumType:
    name: str
    values: list[str] = field(default_factory=list)


@dataclass
class SchemaDocument:
    """Complete schema document: output types, input types and enums.

    Input type lookups go through a name index built on first use, so the
    input type list should not be changed after the first lookup.
    """
    output_types: list[OutputType] = field(default_factory=list)
    input_types: list[InputType] = field(default_factory=list)
    enums: list[EnumType] = field(default_factory=list)

    @cached_property
    def _input_index(self) -> dict[str, InputType]:
        return {input_type.name: input_type for input_type in self.input_types}

    def get_input_type(self, name: str) -> InputType | None:
        """Look up an input type by name."""
        return self._input_index.get(name)


def select_input_type(variants: list[TypeRef]) -> TypeRef:
    """Pick the primary variant of an input field.

    Fields usually offer a raw value variant first and a nested object
    variant second. The second variant wins only when it is object-kind.
    Variants beyond the second are never considered.
    """
    if not variants:
        raise SchemaError("Input field has no input type variants")
    if len(variants) > 1 and variants[1].kind == OBJECT:
        return variants[1]
    return variants[0]


def argument_type(variants: list[TypeRef]) -> TypeRef:
    """Type reference of a field argument: always its first variant."""
    if not variants:
        raise SchemaError("Argument has no input type variants")
    return variants[0]
