"""Structured declarations and the emitters that build them.

Each emitter turns part of the schema document into a list of
declarations (name plus ordered members). Rendering to text is left to
the generator templates.
"""

import logging
from dataclasses import dataclass, field

from .elision import EmptyTypeDetector
from .ir import OBJECT, SchemaDocument, SchemaField, argument_type, select_input_type
from .resolver import (
    TypeResolver,
    args_type_name,
    count_field_name,
    is_aggregate,
    is_list_query,
    strip_aggregate,
)

logger = logging.getLogger(__name__)

EMPTY_SHAPE = "{}"
RESOLVER_INDEX_SIGNATURE = "[key: string]: CustomField"
REGISTRY_INDEX_SIGNATURE = "[key: string]: {[key: string]: CustomField}"
REGISTRY_NAME = "Resolvers"
AGGREGATE_OPERATIONS = ("Avg", "Sum", "Min", "Max")


@dataclass
class Member:
    """A single interface member: ``name?: type<terminator>``."""
    name: str
    type: str
    optional: bool = False
    terminator: str = ""


@dataclass
class InterfaceDeclaration:
    name: str
    members: list[Member] = field(default_factory=list)
    index_signature: str | None = None


@dataclass
class EnumDeclaration:
    name: str
    values: list[str] = field(default_factory=list)


def with_modifiers(ts_type: str, nullable: bool = False, undefined: bool = False) -> str:
    """Append ``| null`` and ``| undefined`` to a type expression."""
    if nullable:
        ts_type += " | null"
    if undefined:
        ts_type += " | undefined"
    return ts_type


class DeclarationBuilder:
    """Builds declarations for every part of a schema document."""

    def __init__(
        self,
        document: SchemaDocument,
        resolver: TypeResolver,
        detector: EmptyTypeDetector | None = None,
        root_types: tuple[str, ...] = ("Query", "Mutation"),
    ):
        self.document = document
        self.resolver = resolver
        self.detector = detector or EmptyTypeDetector(document)
        self.root_types = tuple(root_types)

    def parent_type(self, type_name: str) -> str:
        """Parent shape passed to resolvers of the given output type."""
        if type_name in self.root_types:
            return EMPTY_SHAPE
        return f"{self.resolver.namespace}.{type_name}"

    def registry(self) -> InterfaceDeclaration:
        """Map every output type name to its resolver interface."""
        members = [
            Member(t.name, t.name, optional=True, terminator=";")
            for t in self.document.output_types
        ]
        return InterfaceDeclaration(REGISTRY_NAME, members, REGISTRY_INDEX_SIGNATURE)

    def resolver_interfaces(self) -> list[InterfaceDeclaration]:
        """One resolver interface per output type."""
        declarations = []
        for output_type in self.document.output_types:
            parent = self.parent_type(output_type.name)
            members = []
            for schema_field in output_type.fields:
                members.extend(self._resolver_members(parent, schema_field))
            declarations.append(
                InterfaceDeclaration(output_type.name, members, RESOLVER_INDEX_SIGNATURE)
            )
        return declarations

    def _resolver_members(self, parent: str, schema_field: SchemaField) -> list[Member]:
        args = args_type_name(schema_field.name) if schema_field.args else EMPTY_SHAPE
        result = with_modifiers(
            self.resolver.resolve(schema_field.output_type),
            nullable=schema_field.is_nullable,
            undefined=not schema_field.is_required,
        )
        members = [
            Member(schema_field.name, f"Resolver<{parent}, {args}, {result}>", optional=True)
        ]
        if is_list_query(schema_field.name):
            members.append(
                Member(
                    count_field_name(schema_field.name),
                    f"Resolver<{parent}, {args}, number>",
                    optional=True,
                )
            )
        return members

    def args_interfaces(self) -> list[InterfaceDeclaration]:
        """Argument record interfaces for every field that takes arguments."""
        declarations = []
        for output_type in self.document.output_types:
            for schema_field in output_type.fields:
                if schema_field.args:
                    declarations.append(self._args_interface(schema_field))
        return declarations

    def _args_interface(self, schema_field: SchemaField) -> InterfaceDeclaration:
        name = args_type_name(schema_field.name)
        members = [
            Member(
                arg.name,
                with_modifiers(
                    self.resolver.resolve(argument_type(arg.input_types), for_input=True),
                    nullable=schema_field.is_nullable,
                ),
                optional=not arg.is_required,
            )
            for arg in schema_field.args
        ]
        if is_aggregate(name):
            model = strip_aggregate(schema_field.output_type.type)
            namespace = self.resolver.namespace
            members.append(Member("count", "true", optional=True))
            for operation in AGGREGATE_OPERATIONS:
                members.append(
                    Member(
                        operation.lower(),
                        f"{namespace}.{model}{operation}AggregateInputType",
                        optional=True,
                    )
                )
        return InterfaceDeclaration(name, members)

    def input_interfaces(self) -> list[InterfaceDeclaration]:
        """Input interfaces, skipping zero-field types and empty branches."""
        declarations = []
        for input_type in self.document.input_types:
            if not input_type.fields:
                continue
            members = []
            for input_field in input_type.fields:
                variant = select_input_type(input_field.input_types)
                if variant.kind == OBJECT and self.detector.is_effectively_empty(variant.type):
                    logger.debug(
                        "Eliding %s.%s: %s is empty",
                        input_type.name, input_field.name, variant.type,
                    )
                    continue
                members.append(
                    Member(
                        input_field.name,
                        with_modifiers(
                            self.resolver.resolve(variant, for_input=True),
                            nullable=input_field.is_nullable,
                        ),
                        optional=not input_field.is_required,
                    )
                )
            declarations.append(InterfaceDeclaration(input_type.name, members))
        return declarations

    def enums(self) -> list[EnumDeclaration]:
        return [EnumDeclaration(e.name, list(e.values)) for e in self.document.enums]
