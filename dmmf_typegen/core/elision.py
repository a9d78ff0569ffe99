"""Detection of effectively empty input types.

An input type is effectively empty when none of its fields can carry a
usable value. Fields referencing such types are left out of generated
input interfaces.
"""

import logging

from .ir import OBJECT, SchemaDocument, select_input_type

logger = logging.getLogger(__name__)

# Marker for types whose evaluation is still on the traversal path
_IN_PROGRESS = None


class EmptyTypeDetector:
    """Decides whether input types are effectively empty.

    Every call to is_effectively_empty() owns its traversal state, so
    results never leak between calls and cyclic schemas terminate.
    """

    def __init__(self, document: SchemaDocument):
        self.document = document

    def is_effectively_empty(self, name: str) -> bool:
        """Check whether the named input type has no usable fields.

        Unknown names are opaque external types and count as non-empty.
        """
        state: dict[str, bool | None] = {}
        result = self._visit(name, state)
        logger.debug("Input type %s effectively empty: %s", name, result)
        return result

    def _visit(self, name: str, state: dict[str, bool | None]) -> bool:
        input_type = self.document.get_input_type(name)
        if input_type is None:
            return False
        if not input_type.fields:
            return True

        state[name] = _IN_PROGRESS
        empty = True
        for field in input_type.fields:
            variant = select_input_type(field.input_types)
            if variant.kind != OBJECT:
                empty = False
                break
            target = variant.type
            if target == name:
                continue
            if target in state:
                if state[target] is _IN_PROGRESS:
                    continue
                nested_empty = state[target]
            else:
                nested_empty = self._visit(target, state)
            if not nested_empty:
                empty = False
                break
        state[name] = empty
        return empty
