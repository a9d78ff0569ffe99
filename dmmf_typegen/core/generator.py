"""TypeScript resolver type generator.

Renders Jinja2 templates to produce TypeScript declarations from a
schema document.

Supports custom templates via the config's template_dir:
    config = GeneratorConfig(template_dir="./my_templates")
    code = TypeGenerator(document, config).generate()

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .config import GeneratorConfig
from .declarations import DeclarationBuilder, EnumDeclaration, InterfaceDeclaration
from .elision import EmptyTypeDetector
from .hooks import HookRunner
from .ir import SchemaDocument
from .resolver import TypeResolver
from .scalars import ScalarRegistry

logger = logging.getLogger(__name__)


class TypeGenerator:
    """Generates TypeScript resolver types from a schema document.

    Available templates to override:
        - preamble.ts.j2: imports and the Resolver/CustomField aliases
        - interface.ts.j2: interface declarations
        - enum.ts.j2: enum declarations

    Example:
        generator = TypeGenerator(document, GeneratorConfig(namespace="Client"))
        code = generator.generate()
    """

    def __init__(
        self,
        document: SchemaDocument,
        config: GeneratorConfig | None = None,
        hooks: HookRunner | None = None,
        resolver: TypeResolver | None = None,
    ):
        """Initialize the generator.

        Args:
            document: The schema document to generate types for
            config: Generator settings; defaults are used when omitted
            hooks: Optional pre/post generation hooks
            resolver: Optional type resolver, e.g. with a custom
                      client type classifier. Its namespace is
                      also the one the preamble imports.
        """
        self.document = document
        self.config = config or GeneratorConfig()
        self.hooks = hooks or HookRunner()
        self.resolver = resolver or TypeResolver(
            scalars=ScalarRegistry(self.config.scalars),
            namespace=self.config.namespace,
        )

        # Build template loader - custom templates take precedence
        loaders = []
        if self.config.template_dir:
            template_path = Path(self.config.template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
            else:
                logger.warning("Template directory %s not found, using defaults", template_path)
        loaders.append(PackageLoader("dmmf_typegen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render_interface(self, declaration: InterfaceDeclaration) -> str:
        return self.env.get_template("interface.ts.j2").render(declaration=declaration)

    def render_enum(self, declaration: EnumDeclaration) -> str:
        return self.env.get_template("enum.ts.j2").render(declaration=declaration)

    def render_preamble(self) -> str:
        return self.env.get_template("preamble.ts.j2").render(
            config=self.config, namespace=self.resolver.namespace
        )

    def generate(self) -> str:
        """Generate the complete TypeScript module.

        Blocks, in order: preamble, resolver registry, resolver
        interfaces, argument records, input types and enums. Empty
        blocks still take part in the separator spacing.
        """
        document = self.hooks.run_pre_hooks(self.document)
        builder = DeclarationBuilder(
            document,
            self.resolver,
            EmptyTypeDetector(document),
            root_types=tuple(self.config.root_types),
        )

        resolvers = builder.resolver_interfaces()
        args = builder.args_interfaces()
        inputs = builder.input_interfaces()
        enums = builder.enums()
        logger.debug(
            "Rendering %d resolver, %d args, %d input interfaces and %d enums",
            len(resolvers), len(args), len(inputs), len(enums),
        )

        blocks = [
            self.render_preamble(),
            self.render_interface(builder.registry()),
            "\n\n".join(self.render_interface(d) for d in resolvers),
            "\n\n".join(self.render_interface(d) for d in args),
            "\n\n".join(self.render_interface(d) for d in inputs),
            "\n".join(self.render_enum(d) for d in enums),
        ]
        content = "\n\n".join(blocks)
        return self.hooks.run_post_hooks(self.config.output_file, content)
