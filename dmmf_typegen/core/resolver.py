"""Type reference resolution.

Turns a DMMF type reference into a TypeScript type expression.
"""

from typing import Callable

from .ir import ENUM, OBJECT, SCALAR, TypegenError, TypeRef
from .scalars import ScalarRegistry

AGGREGATE_PREFIX = "Aggregate"
LIST_QUERY_PREFIX = "findMany"
COUNT_SUFFIX = "Count"
ARGS_SUFFIX = "Args"


class TypeKindError(TypegenError):
    """Raised for a type reference with an unrecognized kind."""

    def __init__(self, ref: TypeRef):
        self.ref = ref
        super().__init__(f"Unknown kind {ref.kind!r} for type {ref.type!r}")


def capitalize(name: str) -> str:
    """Uppercase the first character, leaving the rest untouched."""
    return name[:1].upper() + name[1:]


def args_type_name(field_name: str) -> str:
    """Name of the argument record interface for a field."""
    return f"{capitalize(field_name)}{ARGS_SUFFIX}"


def is_aggregate(name: str) -> bool:
    return name.startswith(AGGREGATE_PREFIX)


def strip_aggregate(name: str) -> str:
    """Base model name of an aggregate type, e.g. AggregateUser -> User."""
    return name.replace(AGGREGATE_PREFIX, "", 1)


def is_list_query(field_name: str) -> bool:
    return field_name.startswith(LIST_QUERY_PREFIX)


def count_field_name(field_name: str) -> str:
    return f"{field_name}{COUNT_SUFFIX}"


def always_client_type(_name: str) -> bool:
    """Default classifier: every named type lives in the client namespace."""
    return True


class TypeResolver:
    """Resolves type references to TypeScript type expressions.

    Args:
        scalars: Scalar mappings used for scalar-kind references
        namespace: Namespace the runtime client is imported as
        is_client_type: Decides whether a name in return position refers
            to a runtime client type and therefore gets the namespace prefix
    """

    def __init__(
        self,
        scalars: ScalarRegistry | None = None,
        namespace: str = "Prisma",
        is_client_type: Callable[[str], bool] | None = None,
    ):
        self.scalars = scalars or ScalarRegistry()
        self.namespace = namespace
        self.is_client_type = is_client_type or always_client_type

    def resolve(self, ref: TypeRef, for_input: bool = False) -> str:
        """Resolve a type reference.

        Input and argument positions (for_input=True) never receive the
        namespace prefix.
        """
        suffix = "[]" if ref.is_list else ""
        if ref.kind == SCALAR:
            return f"{self.scalars.ts_type(ref.type)}{suffix}"
        if ref.kind not in (OBJECT, ENUM):
            raise TypeKindError(ref)

        name = ref.type
        if ref.kind == OBJECT and is_aggregate(name):
            model = strip_aggregate(name)
            name = f"Get{model}AggregateType<{name}{ARGS_SUFFIX}>"
        if not for_input and self.is_client_type(ref.type):
            name = f"{self.namespace}.{name}"
        return f"{name}{suffix}"
