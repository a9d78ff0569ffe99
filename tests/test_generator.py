"""Tests for the TypeScript type generator."""

import pytest

from dmmf_typegen.core.config import GeneratorConfig
from dmmf_typegen.core.generator import TypeGenerator
from dmmf_typegen.core.hooks import AddHeaderHook, HookRunner, TypeFilterHook
from dmmf_typegen.core.ir import (
    EnumType,
    InputType,
    OutputType,
    SchemaArg,
    SchemaDocument,
    SchemaField,
    TypeRef,
)
from dmmf_typegen.core.resolver import TypeKindError, TypeResolver
from dmmf_typegen.core.scalars import UnknownScalarError

PREAMBLE = (
    "import * as Prisma from '@prisma/client'\n\n"
    "import { Context } from './context'\n\n"
    "import { GraphQLResolveInfo } from 'graphql';\n\n"
    "type Resolver<T extends {}, A extends {}, R extends any> = "
    "(parent: T,args: A, context: Context, info: GraphQLResolveInfo) => Promise<R>;\n\n"
    "type CustomField = "
    "(parent: any,args: any, context: Context, info: GraphQLResolveInfo) => any"
)


@pytest.fixture
def find_many_document():
    """One Query type with a single list query and no arguments."""
    return SchemaDocument(
        output_types=[
            OutputType(
                "Query",
                [
                    SchemaField(
                        "findManyUser",
                        TypeRef("User", "object", is_list=True),
                        is_nullable=False,
                        is_required=True,
                    )
                ],
            )
        ]
    )


@pytest.fixture
def full_document():
    return SchemaDocument(
        output_types=[
            OutputType(
                "Mutation",
                [
                    SchemaField(
                        "createOneUser",
                        TypeRef("User", "object"),
                        args=[
                            SchemaArg(
                                "data", [TypeRef("UserCreateInput", "object")], is_required=True
                            )
                        ],
                    )
                ],
            ),
            OutputType(
                "User",
                [
                    SchemaField("id", TypeRef("Int", "scalar")),
                    SchemaField("name", TypeRef("String", "scalar"), is_nullable=True),
                ],
            ),
        ],
        input_types=[
            InputType(
                "UserCreateInput",
                [
                    SchemaArg("name", [TypeRef("String", "scalar")], is_nullable=True),
                    SchemaArg(
                        "posts",
                        [TypeRef("String", "scalar"), TypeRef("PostCreateManyInput", "object")],
                    ),
                ],
            ),
            InputType("PostCreateManyInput", []),
        ],
        enums=[
            EnumType("Role", ["USER", "ADMIN"]),
            EnumType("SortOrder", ["asc", "desc"]),
        ],
    )


class TestEndToEnd:

    def test_find_many_document(self, find_many_document):
        code = TypeGenerator(find_many_document).generate()
        assert code == (
            PREAMBLE
            + "\n\n"
            + "export interface Resolvers {\n"
            "[key: string]: {[key: string]: CustomField}\n"
            "Query?: Query;\n"
            "}"
            + "\n\n"
            + "export interface Query {\n"
            "[key: string]: CustomField\n"
            "findManyUser?: Resolver<{}, {}, Prisma.User[]>\n"
            "findManyUserCount?: Resolver<{}, {}, number>\n"
            "}"
            + "\n\n" + "" + "\n\n" + "" + "\n\n" + ""
        )

    def test_find_many_without_client_namespace(self, find_many_document):
        resolver = TypeResolver(is_client_type=lambda name: False)
        code = TypeGenerator(find_many_document, resolver=resolver).generate()
        assert "findManyUser?: Resolver<{}, {}, User[]>" in code
        assert "findManyUserCount?: Resolver<{}, {}, number>" in code

    def test_full_document(self, full_document):
        code = TypeGenerator(full_document).generate()
        assert code == (
            PREAMBLE
            + "\n\n"
            + "export interface Resolvers {\n"
            "[key: string]: {[key: string]: CustomField}\n"
            "Mutation?: Mutation;\n"
            "User?: User;\n"
            "}"
            + "\n\n"
            + "export interface Mutation {\n"
            "[key: string]: CustomField\n"
            "createOneUser?: Resolver<{}, CreateOneUserArgs, Prisma.User>\n"
            "}\n\n"
            "export interface User {\n"
            "[key: string]: CustomField\n"
            "id?: Resolver<Prisma.User, {}, number>\n"
            "name?: Resolver<Prisma.User, {}, string | null>\n"
            "}"
            + "\n\n"
            + "export interface CreateOneUserArgs {\n"
            "data: UserCreateInput\n"
            "}"
            + "\n\n"
            + "export interface UserCreateInput {\n"
            "name?: string | null\n"
            "}"
            + "\n\n"
            + "export enum Role {\n"
            'USER = "USER",\n'
            'ADMIN = "ADMIN",\n'
            "}\n"
            "export enum SortOrder {\n"
            'asc = "asc",\n'
            'desc = "desc",\n'
            "}"
        )

    def test_deterministic(self, full_document):
        first = TypeGenerator(full_document).generate()
        second = TypeGenerator(full_document).generate()
        assert first == second

    def test_document_not_mutated(self, full_document):
        before = repr(full_document)
        TypeGenerator(full_document).generate()
        assert repr(full_document) == before

    def test_empty_document(self):
        code = TypeGenerator(SchemaDocument()).generate()
        assert code == (
            PREAMBLE
            + "\n\n"
            + "export interface Resolvers {\n"
            "[key: string]: {[key: string]: CustomField}\n"
            "}"
            + "\n\n\n\n\n\n\n\n"
        )


class TestErrors:

    def test_unmapped_scalar(self):
        document = SchemaDocument(
            output_types=[OutputType("User", [SchemaField("data", TypeRef("Json", "scalar"))])]
        )
        with pytest.raises(UnknownScalarError):
            TypeGenerator(document).generate()

    def test_unknown_kind(self):
        document = SchemaDocument(
            output_types=[OutputType("User", [SchemaField("data", TypeRef("Json", "union"))])]
        )
        with pytest.raises(TypeKindError):
            TypeGenerator(document).generate()


class TestConfig:

    def test_namespace_and_modules(self, find_many_document):
        config = GeneratorConfig(
            namespace="Client",
            client_module="./client",
            context_module="../context",
        )
        code = TypeGenerator(find_many_document, config).generate()
        assert code.startswith("import * as Client from './client'\n\n")
        assert "import { Context } from '../context'" in code
        assert "findManyUser?: Resolver<{}, {}, Client.User[]>" in code

    def test_injected_resolver_namespace_used_everywhere(self, find_many_document):
        find_many_document.output_types.append(
            OutputType("User", [SchemaField("id", TypeRef("Int", "scalar"))])
        )
        resolver = TypeResolver(namespace="Db")
        code = TypeGenerator(find_many_document, GeneratorConfig(), resolver=resolver).generate()
        assert code.startswith("import * as Db from '@prisma/client'\n\n")
        assert "findManyUser?: Resolver<{}, {}, Db.User[]>" in code
        assert "id?: Resolver<Db.User, {}, number>" in code
        assert "Prisma." not in code

    def test_root_types_from_loaded_config(self, find_many_document):
        config = GeneratorConfig.from_dict({"root_types": ["Query"]})
        code = TypeGenerator(find_many_document, config).generate()
        assert "findManyUser?: Resolver<{}, {}, Prisma.User[]>" in code

    def test_custom_scalars(self):
        document = SchemaDocument(
            output_types=[OutputType("User", [SchemaField("data", TypeRef("Json", "scalar"))])]
        )
        config = GeneratorConfig(scalars={"Json": "any"})
        code = TypeGenerator(document, config).generate()
        assert "data?: Resolver<Prisma.User, {}, any>" in code

    def test_custom_root_types(self, find_many_document):
        config = GeneratorConfig(root_types=["Mutation"])
        code = TypeGenerator(find_many_document, config).generate()
        assert "findManyUser?: Resolver<Prisma.Query, {}, Prisma.User[]>" in code

    def test_template_override(self, tmp_path, full_document):
        (tmp_path / "enum.ts.j2").write_text(
            "export type {{ declaration.name }} = "
            "{{ declaration.values | map('tojson') | join(' | ') }}\n"
        )
        config = GeneratorConfig(template_dir=str(tmp_path))
        code = TypeGenerator(full_document, config).generate()
        assert code.endswith(
            'export type Role = "USER" | "ADMIN"\nexport type SortOrder = "asc" | "desc"'
        )
        assert "export interface User {" in code

    def test_missing_template_dir_falls_back(self, tmp_path, find_many_document):
        config = GeneratorConfig(template_dir=str(tmp_path / "missing"))
        assert TypeGenerator(find_many_document, config).generate() == (
            TypeGenerator(find_many_document).generate()
        )


class TestHooks:

    def test_post_hook_header(self, find_many_document):
        hooks = HookRunner(post=[AddHeaderHook("generated")])
        code = TypeGenerator(find_many_document, hooks=hooks).generate()
        assert code.startswith("// generated\n\nimport * as Prisma")

    def test_pre_hook_filters_types(self, full_document):
        hooks = HookRunner(pre=[TypeFilterHook(exclude=["Sort*"], sections={"enum"})])
        code = TypeGenerator(full_document, hooks=hooks).generate()
        assert "export enum SortOrder" not in code
        assert "export enum Role" in code
        assert len(full_document.enums) == 2
