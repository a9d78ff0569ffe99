"""Scalar type mappings for TypeScript code generation.

Maps DMMF scalar kinds to TypeScript primitive names.

Example usage:
    from dmmf_typegen.core.scalars import ScalarRegistry

    registry = ScalarRegistry()
    registry.ts_type("Int")  # "number"

    # Map a custom scalar
    registry.register("Json", "any")
"""

from .ir import TypegenError


class UnknownScalarError(TypegenError):
    """Raised when a scalar kind has no TypeScript mapping."""

    def __init__(self, scalar_name: str):
        self.scalar_name = scalar_name
        super().__init__(f"No TypeScript mapping for scalar {scalar_name!r}")


DEFAULT_SCALARS = {
    "Int": "number",
    "Float": "number",
    "String": "string",
    "Boolean": "boolean",
    "DateTime": "Date",
}


class ScalarRegistry:
    """Registry of scalar name to TypeScript type mappings.

    Example:
        registry = ScalarRegistry()
        registry.register("BigInt", "bigint")
        registry.ts_type("BigInt")  # "bigint"
    """

    def __init__(self, extra: dict[str, str] | None = None):
        self._mappings: dict[str, str] = {}
        self._register_defaults()
        for scalar_name, ts_type in (extra or {}).items():
            self.register(scalar_name, ts_type)

    def _register_defaults(self):
        """Register built-in default mappings."""
        for scalar_name, ts_type in DEFAULT_SCALARS.items():
            self.register(scalar_name, ts_type)

    def register(self, scalar_name: str, ts_type: str):
        """Register a TypeScript type for a scalar."""
        self._mappings[scalar_name] = ts_type

    def ts_type(self, scalar_name: str) -> str:
        """Get the TypeScript type for a scalar, failing if it is unmapped."""
        try:
            return self._mappings[scalar_name]
        except KeyError:
            raise UnknownScalarError(scalar_name) from None
