"""Hooks run around type generation.

Pre-generation hooks get the schema document and return the document to
generate from. Post-generation hooks get the rendered TypeScript and
return the text to emit.

Example:
    hooks = HookRunner(
        pre=[TypeFilterHook(exclude=["*CreateMany*"], sections={"input"})],
        post=[AddHeaderHook("Generated by dmmf-typegen")],
    )
    code = TypeGenerator(document, hooks=hooks).generate()
"""

import logging
from dataclasses import replace
from fnmatch import fnmatchcase
from typing import Iterable, Protocol, runtime_checkable

from .ir import SchemaDocument

logger = logging.getLogger(__name__)

OUTPUT = "output"
INPUT = "input"
ENUM = "enum"
SECTIONS = frozenset({OUTPUT, INPUT, ENUM})


@runtime_checkable
class PreGenerateHook(Protocol):
    """Receives the document before generation; must return a new one, not mutate it."""

    def pre_generate(self, document: SchemaDocument) -> SchemaDocument:
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Receives the output file name and the rendered text."""

    def post_generate(self, filename: str, content: str) -> str:
        ...


class AddHeaderHook:
    """Prepend a comment block to the generated file.

    Lines that are not already TypeScript comments are turned into
    ``//`` comments, so a plain sentence is safe to pass.
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        lines = []
        for line in self.header.rstrip("\n").splitlines():
            stripped = line.lstrip()
            if stripped and not stripped.startswith(("//", "/*", "*")):
                line = f"// {line}"
            lines.append(line)
        return "\n".join(lines) + "\n\n" + content


class TypeFilterHook:
    """Drop output types, input types or enums by glob pattern.

    A name is kept when it matches one of ``include`` (or ``include`` is
    empty) and matches none of ``exclude``. Only the given sections are
    filtered; the others pass through untouched.
    """

    def __init__(
        self,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
        sections: Iterable[str] = SECTIONS,
    ):
        self.include = list(include)
        self.exclude = list(exclude)
        self.sections = frozenset(sections)
        unknown = self.sections - SECTIONS
        if unknown:
            raise ValueError(f"Unknown sections: {', '.join(sorted(unknown))}")

    def keeps(self, name: str) -> bool:
        if self.include and not any(fnmatchcase(name, p) for p in self.include):
            return False
        return not any(fnmatchcase(name, p) for p in self.exclude)

    def _filter(self, section: str, items: list) -> list:
        if section not in self.sections:
            return items
        kept = [item for item in items if self.keeps(item.name)]
        if len(kept) != len(items):
            logger.debug("Filtered %d %s declarations", len(items) - len(kept), section)
        return kept

    def pre_generate(self, document: SchemaDocument) -> SchemaDocument:
        return replace(
            document,
            output_types=self._filter(OUTPUT, document.output_types),
            input_types=self._filter(INPUT, document.input_types),
            enums=self._filter(ENUM, document.enums),
        )


class HookRunner:
    """Applies pre hooks to the document and post hooks to the text, in order."""

    def __init__(
        self,
        pre: Iterable[PreGenerateHook] = (),
        post: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks = list(pre)
        self.post_hooks = list(post)

    def add(self, hook: PreGenerateHook | PostGenerateHook):
        """Register a hook as pre, post or both, depending on what it implements."""
        registered = False
        if isinstance(hook, PreGenerateHook):
            self.pre_hooks.append(hook)
            registered = True
        if isinstance(hook, PostGenerateHook):
            self.post_hooks.append(hook)
            registered = True
        if not registered:
            raise TypeError(f"{type(hook).__name__} implements neither hook method")

    def run_pre_hooks(self, document: SchemaDocument) -> SchemaDocument:
        for hook in self.pre_hooks:
            document = hook.pre_generate(document)
        return document

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
