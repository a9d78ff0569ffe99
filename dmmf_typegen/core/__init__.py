"""Core modules for TypeScript resolver type generation."""

from .config import ConfigError, GeneratorConfig
from .declarations import (
    DeclarationBuilder,
    EnumDeclaration,
    InterfaceDeclaration,
    Member,
)
from .dmmf import SchemaLoadError, load_document, parse_document
from .elision import EmptyTypeDetector
from .generator import TypeGenerator
from .hooks import (
    AddHeaderHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
    TypeFilterHook,
)
from .ir import (
    EnumType,
    InputType,
    OutputType,
    SchemaArg,
    SchemaDocument,
    SchemaError,
    SchemaField,
    TypegenError,
    TypeRef,
    argument_type,
    select_input_type,
)
from .parser import SDLParser
from .resolver import TypeKindError, TypeResolver
from .scalars import ScalarRegistry, UnknownScalarError

__all__ = [
    # Config
    "ConfigError",
    "GeneratorConfig",
    # Declarations
    "DeclarationBuilder",
    "EnumDeclaration",
    "InterfaceDeclaration",
    "Member",
    # Loaders
    "SchemaLoadError",
    "load_document",
    "parse_document",
    "SDLParser",
    # Elision
    "EmptyTypeDetector",
    # Generator
    "TypeGenerator",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "TypeFilterHook",
    "HookRunner",
    # IR types
    "EnumType",
    "InputType",
    "OutputType",
    "SchemaArg",
    "SchemaDocument",
    "SchemaError",
    "SchemaField",
    "TypegenError",
    "TypeRef",
    "argument_type",
    "select_input_type",
    # Resolver
    "TypeKindError",
    "TypeResolver",
    # Scalars
    "ScalarRegistry",
    "UnknownScalarError",
]
