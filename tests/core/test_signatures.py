"""Tests for signature formatters and the declaration classifier."""

import pytest

from api_surface.declarations import (
    BaseReference,
    ClassDeclaration,
    ClassMember,
    EnumDeclaration,
    FunctionDeclaration,
    InterfaceDeclaration,
    OtherDeclaration,
    TypeAliasDeclaration,
    VariableDeclaration,
)
from api_surface.exceptions import DeclarationKindMismatch
from api_surface.signatures import (
    format_class,
    format_enum,
    format_function,
    format_interface,
    format_raw,
    format_signature,
    format_type_alias,
    format_variable,
)


def _function(text: str, name: str = "f") -> FunctionDeclaration:
    body_start = text.find("{")
    body_range = (body_start, len(text)) if body_start != -1 else None
    return FunctionDeclaration(name=name, text=text, body_range=body_range)


def _method(text: str, visibility=None) -> ClassMember:
    body_start = text.index("{")
    return ClassMember(member_kind="method", name=text.split("(")[0].split()[-1], text=text, visibility=visibility, body_range=(body_start, len(text)))


def _property(text: str, visibility=None) -> ClassMember:
    return ClassMember(member_kind="property", name=text.split(":")[0].split()[-1], text=text, visibility=visibility)


# ---------------------------------------------------------------------------
# Function
# ---------------------------------------------------------------------------


class TestFormatFunction:
    def test_body_and_export_removed(self):
        declaration = _function("export function add(a: number,\n    b: number): number {\n  return a + b; // sum\n}", "add")
        assert format_function(declaration) == "function add(a: number, b: number): number"

    def test_body_tokens_never_leak(self):
        declaration = _function("export function run(): void {\n  const secret = compute();\n  if (secret) {\n    throw new Error('x');\n  }\n}")
        signature = format_function(declaration)
        assert "secret" not in signature
        assert "throw" not in signature
        assert "{" not in signature

    def test_overload_signature_semicolon_dropped(self):
        assert format_function(_function("export function f(a: string): void;")) == "function f(a: string): void"

    def test_default_and_declare_modifiers_removed(self):
        assert format_function(_function("export default function main(): void {}", "main")) == "function main(): void"
        assert format_function(_function("export declare function g(): void;", "g")) == "function g(): void"

    def test_async_kept(self):
        declaration = _function("export async function load(): Promise<void> {\n  await x;\n}", "load")
        assert format_function(declaration) == "async function load(): Promise<void>"

    def test_node_left_untouched(self):
        declaration = _function("export function f(): number {\n  return 1;\n}")
        first = format_function(declaration)
        assert "return 1;" in declaration.text
        assert format_function(declaration) == first

    def test_kind_mismatch(self):
        with pytest.raises(DeclarationKindMismatch) as exc_info:
            format_function(ClassDeclaration(name="C", text="class C {}"))
        assert exc_info.value.expected == "FunctionDeclaration"
        assert exc_info.value.actual == "ClassDeclaration"


# ---------------------------------------------------------------------------
# Class
# ---------------------------------------------------------------------------


class TestFormatClass:
    def test_full_header_and_public_members(self):
        declaration = ClassDeclaration(
            name="Service",
            text="",
            type_parameters=("T",),
            extends="Base<T>",
            implements=("Disposable", "Startable"),
            members=(
                _property("name: string;"),
                _property("private secret = 1;", "private"),
                _method("foo(): void {\n    this.bar();\n  }"),
                _method("private bar(): void {\n  }", "private"),
            ),
        )
        assert format_class(declaration) == (
            "class Service<T> extends Base<T> implements Disposable, Startable {\nname: string;\n\nfoo(): void;\n}"
        )

    def test_private_method_leaves_no_trace(self):
        declaration = ClassDeclaration(
            name="C",
            text="",
            members=(_method("foo(): void {\n    this.bar();\n  }"), _method("private bar(): void {}", "private")),
        )
        signature = format_class(declaration)
        assert "foo" in signature
        assert "bar" not in signature

    def test_protected_excluded_explicit_public_kept(self):
        declaration = ClassDeclaration(
            name="C",
            text="",
            members=(_property("protected internal: number;", "protected"), _property("public count: number", "public")),
        )
        assert format_class(declaration) == "class C {\npublic count: number;\n}"

    def test_methods_only(self):
        declaration = ClassDeclaration(name="C", text="", members=(_method("static create(): C {\n  return new C();\n}"),))
        assert format_class(declaration) == "class C {\nstatic create(): C;\n}"

    def test_empty_body_marker(self):
        assert format_class(ClassDeclaration(name="Empty", text="class Empty {}")) == "class Empty { }"

    def test_only_private_members_renders_empty(self):
        declaration = ClassDeclaration(name="C", text="", members=(_property("private x = 1;", "private"),))
        assert format_class(declaration) == "class C { }"

    def test_heritage_sanitized(self):
        declaration = ClassDeclaration(name="C", text="", extends="Base<\n    Options // generic\n  >", type_parameters=("T   extends object",))
        assert format_class(declaration) == "class C<T extends object> extends Base< Options > { }"

    def test_kind_mismatch_reports_other_kind_name(self):
        with pytest.raises(DeclarationKindMismatch) as exc_info:
            format_class(OtherDeclaration(name="ns", text="namespace ns {}", kind_name="ModuleDeclaration"))
        assert exc_info.value.actual == "ModuleDeclaration"


# ---------------------------------------------------------------------------
# Variable
# ---------------------------------------------------------------------------


def test_format_variable():
    declaration = VariableDeclaration(name="VERSION", text='VERSION = "1.0.0"', type_text='"1.0.0"')
    assert format_variable(declaration) == 'const VERSION: "1.0.0"'


def test_format_variable_normalizes_line_endings_only():
    declaration = VariableDeclaration(name="config", text="config = {}", type_text="{\r\n    debug: boolean;  // flag\r\n}")
    assert format_variable(declaration) == "const config: {\n    debug: boolean;  // flag\n}"


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class TestFormatInterface:
    @pytest.fixture
    def chain(self):
        a = InterfaceDeclaration(name="A", text="", properties=("x: number",))
        b = InterfaceDeclaration(name="B", text="", properties=("y: string",), bases=(BaseReference("A", a),))
        c = InterfaceDeclaration(name="C", text="", properties=("z: boolean",), bases=(BaseReference("B", b),))
        return a, b, c

    def test_flattening_is_one_level_deep(self, chain):
        _, _, c = chain
        signature = format_interface(c)
        assert signature == "interface C {\nz: boolean;\n\n// inherited from B\ny: string;\n}"
        assert "x: number" not in signature

    def test_multiple_bases(self, chain):
        a, b, _ = chain
        d = InterfaceDeclaration(name="D", text="", bases=(BaseReference("A", a), BaseReference("B", b)))
        assert format_interface(d) == "interface D {\n\n// inherited from A\nx: number;\n\n// inherited from B\ny: string;\n}"

    def test_unresolved_and_class_bases_contribute_nothing(self):
        base_class = ClassDeclaration(name="K", text="", members=(_property("k = 1"),))
        d = InterfaceDeclaration(
            name="D",
            text="",
            properties=("d: number;",),
            bases=(BaseReference("External", None), BaseReference("K", base_class)),
        )
        assert format_interface(d) == "interface D {\nd: number;\n}"

    def test_empty_interface(self):
        assert format_interface(InterfaceDeclaration(name="E", text="interface E {}")) == "interface E {}"

    def test_type_parameters_and_comments(self):
        declaration = InterfaceDeclaration(
            name="Box",
            text="",
            type_parameters=("T extends object",),
            properties=("value: T; // the value", "readonly size:\n    number,"),
        )
        assert format_interface(declaration) == "interface Box<T extends object> {\nvalue: T;\nreadonly size: number;\n}"


# ---------------------------------------------------------------------------
# Type alias, enum, fallback
# ---------------------------------------------------------------------------


def test_format_type_alias():
    assert format_type_alias(TypeAliasDeclaration(name="Id", text="export type Id = string | number;")) == "type Id = string | number;"


def test_format_type_alias_strips_comments():
    text = "export type Shape =\n  // circle\n  | Circle\n  | Square;"
    assert format_type_alias(TypeAliasDeclaration(name="Shape", text=text)) == "type Shape = | Circle | Square;"


def test_format_type_alias_only_removes_export_keyword():
    assert format_type_alias(TypeAliasDeclaration(name="exported", text="type exported = 1;")) == "type exported = 1;"


def test_format_enum_keeps_comments():
    text = "export enum Color {\r\n  /** primary */\r\n  Red, // warm\r\n  Blue,\r\n}"
    assert format_enum(EnumDeclaration(name="Color", text=text)) == "export enum Color {\n  /** primary */\n  Red, // warm\n  Blue,\n}"


def test_format_raw_sanitizes():
    declaration = OtherDeclaration(name="ns", text="export * as ns from './x'; // re-export", kind_name="NamespaceExport")
    assert format_raw(declaration) == "export * as ns from './x';"


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("declaration", "formatter"),
    [
        (_function("export function f(): void {}"), format_function),
        (ClassDeclaration(name="C", text=""), format_class),
        (VariableDeclaration(name="v", text="", type_text="number"), format_variable),
        (InterfaceDeclaration(name="I", text=""), format_interface),
        (TypeAliasDeclaration(name="T", text="export type T = 1;"), format_type_alias),
        (EnumDeclaration(name="E", text="export enum E { A }"), format_enum),
        (OtherDeclaration(name="ns", text="namespace ns {}"), format_raw),
    ],
)
def test_format_signature_dispatches_by_kind(declaration, formatter):
    assert format_signature(declaration) == formatter(declaration)


def test_other_kind_name_preserved():
    declaration = OtherDeclaration(name="ns", text="namespace ns {}", kind_name="ModuleDeclaration")
    assert declaration.kind_name == "ModuleDeclaration"
    assert format_signature(declaration) == "namespace ns {}"
