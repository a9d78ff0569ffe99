"""GraphQL SDL parser using graphql-core.

Parses .graphql/.graphqls files and produces a SchemaDocument, so that
resolver types can be generated for hand-written schemas too.
"""

import logging
import os
from typing import Any

from graphql import (
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    GraphQLError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    TypeNode,
    parse,
)

from .dmmf import SchemaLoadError
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
    TypeRef,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")
BUILTIN_SCALARS = {"Int", "Float", "String", "Boolean"}
# GraphQL IDs are serialized as strings
SCALAR_ALIASES = {"ID": "String"}


class SDLParser:
    """Parses GraphQL SDL files into a schema document."""

    def __init__(self, schema_path: str):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.scalars: set[str] = set(BUILTIN_SCALARS) | set(SCALAR_ALIASES)
        self.enum_names: set[str] = set()
        self._objects: dict[str, list] = {}
        self._inputs: dict[str, list] = {}
        self._enums: dict[str, list[str]] = {}

    def parse(self) -> SchemaDocument:
        """Parse all schema files and return the schema document."""
        definitions = []
        for file_path in self._collect_schema_files():
            with open(file_path, encoding="utf-8") as f:
                content = f.read()
            try:
                definitions.extend(parse(content).definitions)
            except GraphQLError as e:
                raise SchemaLoadError(f"Error parsing {os.path.basename(file_path)}: {e}") from e

        # Scalars and enums first, so field kinds are known regardless of file order
        for definition in definitions:
            if isinstance(definition, ScalarTypeDefinitionNode):
                self.scalars.add(definition.name.value)
            elif isinstance(definition, (EnumTypeDefinitionNode, EnumTypeExtensionNode)):
                self._process_enum(definition)

        for definition in definitions:
            if isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
                self._process_object_type(definition)
            elif isinstance(definition, (InputObjectTypeDefinitionNode, InputObjectTypeExtensionNode)):
                self._process_input_type(definition)

        document = SchemaDocument(
            output_types=[OutputType(name, fields) for name, fields in self._objects.items()],
            input_types=[InputType(name, fields) for name, fields in self._inputs.items()],
            enums=[EnumType(name, values) for name, values in self._enums.items()],
        )
        logger.debug(
            "Parsed %d object types, %d input types and %d enums",
            len(document.output_types), len(document.input_types), len(document.enums),
        )
        return document

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        if not files:
            raise SchemaLoadError(f"No GraphQL schema files found at {self.schema_path}")
        return sorted(files)

    def _process_object_type(self, node: ObjectTypeDefinitionNode | ObjectTypeExtensionNode):
        """Add an object type, merging 'extend type' fields into it."""
        name = node.name.value
        existing = self._objects.setdefault(name, [])
        existing_names = {f.name for f in existing}
        for field_node in node.fields or ():
            if field_node.name.value in existing_names:
                continue
            type_info = self._get_type_info(field_node.type)
            existing.append(
                SchemaField(
                    name=field_node.name.value,
                    output_type=self._type_ref(type_info),
                    args=[self._process_argument(a) for a in field_node.arguments or ()],
                    is_nullable=type_info["is_optional"],
                    is_required=True,
                )
            )
            existing_names.add(field_node.name.value)

    def _process_input_type(
        self, node: InputObjectTypeDefinitionNode | InputObjectTypeExtensionNode
    ):
        """Add an input type, merging 'extend input' fields into it."""
        existing = self._inputs.setdefault(node.name.value, [])
        existing_names = {f.name for f in existing}
        for field_node in node.fields or ():
            if field_node.name.value not in existing_names:
                existing.append(self._process_argument(field_node))
                existing_names.add(field_node.name.value)

    def _process_enum(self, node: EnumTypeDefinitionNode | EnumTypeExtensionNode):
        """Add an enum, merging 'extend enum' values into it."""
        self.enum_names.add(node.name.value)
        values = self._enums.setdefault(node.name.value, [])
        for value_node in node.values or ():
            if value_node.name.value not in values:
                values.append(value_node.name.value)

    def _process_argument(self, node) -> SchemaArg:
        type_info = self._get_type_info(node.type)
        return SchemaArg(
            name=node.name.value,
            input_types=[self._type_ref(type_info)],
            is_required=not type_info["is_optional"],
            is_nullable=type_info["is_optional"],
        )

    def _type_ref(self, type_info: dict[str, Any]) -> TypeRef:
        name = type_info["name"]
        if name in self.scalars:
            return TypeRef(SCALAR_ALIASES.get(name, name), SCALAR, type_info["is_list"])
        if name in self.enum_names:
            return TypeRef(name, ENUM, type_info["is_list"])
        return TypeRef(name, OBJECT, type_info["is_list"])

    @staticmethod
    def _get_type_info(type_node: TypeNode) -> dict[str, Any]:
        """Extract the type name, is_list, and is_optional from the type node."""
        is_optional = True
        is_list = False

        # NonNull wrapper means not optional
        if isinstance(type_node, NonNullTypeNode):
            is_optional = False
            type_node = type_node.type

        # Lists, possibly nested, with non-null items
        while isinstance(type_node, ListTypeNode):
            is_list = True
            type_node = type_node.type
            if isinstance(type_node, NonNullTypeNode):
                type_node = type_node.type

        if not isinstance(type_node, NamedTypeNode):
            raise SchemaLoadError(f"Expected a named type, got {type(type_node).__name__}")

        return {
            "name": type_node.name.value,
            "is_list": is_list,
            "is_optional": is_optional,
        }
