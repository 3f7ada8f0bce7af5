from pathlib import Path
from unittest import TestCase

from thrift_to_graphql.idl import ThriftDocument, ThriftErrors, ThriftParser, parse
from thrift_to_graphql.idl.nodes import (
    BaseType,
    BooleanLiteral,
    ConstDefinition,
    ConstList,
    ConstMap,
    DoubleConstant,
    EnumDefinition,
    ExceptionDefinition,
    Identifier,
    IncludeDefinition,
    IntConstant,
    ListType,
    MapType,
    NamespaceDefinition,
    ServiceDefinition,
    SetType,
    StringLiteral,
    StructDefinition,
    SyntaxType,
    TypedefDefinition,
    UnionDefinition,
    VoidType,
)

TEST_DATA = Path(__file__).parent / "test_data"


def parse_file(name: str) -> ThriftDocument:
    result = parse((TEST_DATA / name).read_text())
    assert isinstance(result, ThriftDocument), result
    return result


class TestParser(TestCase):
    """Parse Thrift IDL into AST nodes"""

    def test_headers(self):
        document = parse(
            """
            include "shared.thrift"
            cpp_include "<vector>"
            namespace py calc.math
            namespace * calc
            """
        )
        self.assertEqual([include.path for include in document.includes], ["shared.thrift"])
        namespaces = [statement for statement in document.body if isinstance(statement, NamespaceDefinition)]
        self.assertEqual([(ns.scope, ns.name) for ns in namespaces], [("py", "calc.math"), ("*", "calc")])

    def test_enum_values(self):
        document = parse_file("types.thrift")
        color = document.find_declarations("Color")[0]
        self.assertIsInstance(color, EnumDefinition)
        self.assertEqual([member.name for member in color.members], ["RED", "GREEN", "BLUE"])
        self.assertEqual([member.initializer.value for member in color.members], [1, 16, 7])
        self.assertTrue(color.members[1].initializer.is_hex)

    def test_struct_fields(self):
        document = parse_file("types.thrift")
        everything = document.find_declarations("Everything")[0]
        fields = {field.name: field for field in everything.fields}

        self.assertEqual(fields["flag"].field_id, 1)
        self.assertEqual(fields["number"].requiredness, "required")
        self.assertIsNone(fields["name"].requiredness)
        self.assertEqual(fields["number"].default_value.value, 42)
        self.assertIsInstance(fields["ratio"].default_value, DoubleConstant)
        self.assertEqual(fields["ratio"].default_value.value, 0.5)
        self.assertIsInstance(fields["flag"].default_value, BooleanLiteral)
        self.assertTrue(fields["flag"].default_value.value)
        self.assertIsInstance(fields["name"].default_value, StringLiteral)
        self.assertEqual(fields["name"].default_value.value, "anonymous")
        self.assertIsInstance(fields["tags"].default_value, ConstList)
        self.assertIsInstance(fields["counts"].default_value, ConstMap)
        self.assertIsInstance(fields["color"].default_value, Identifier)
        self.assertEqual(fields["color"].default_value.value, "Color.RED")

    def test_type_expressions(self):
        document = parse_file("types.thrift")
        fields = {field.name: field.field_type for field in document.find_declarations("Everything")[0].fields}

        self.assertIsInstance(fields["big"], BaseType)
        self.assertEqual(fields["big"].type_name, "i64")
        self.assertIsInstance(fields["tags"], ListType)
        self.assertEqual(fields["tags"].value_type.type_name, "string")
        self.assertIsInstance(fields["counts"], MapType)
        self.assertEqual(fields["counts"].key_type.type_name, "string")
        self.assertEqual(fields["counts"].value_type.type_name, "i32")
        self.assertIsInstance(fields["unique"], SetType)
        self.assertIsInstance(fields["created_at"], Identifier)

    def test_struct_likes(self):
        document = parse_file("types.thrift")
        self.assertIsInstance(document.find_declarations("Shape")[0], UnionDefinition)
        self.assertIsInstance(document.find_declarations("Oops")[0], ExceptionDefinition)
        self.assertIsInstance(document.find_declarations("Oops")[0], StructDefinition)
        self.assertEqual(document.find_declarations("Empty")[0].fields, [])

        timestamp = document.find_declarations("Timestamp")[0]
        self.assertIsInstance(timestamp, TypedefDefinition)
        self.assertEqual(timestamp.definition_type.type_name, "i64")

    def test_service(self):
        document = parse_file("types.thrift")
        service = document.services[0]
        self.assertIsInstance(service, ServiceDefinition)
        self.assertEqual(service.name, "Types")

        roundtrip = service.get_function("roundtrip")
        self.assertEqual(roundtrip.return_type.value, "Everything")
        self.assertEqual([field.name for field in roundtrip.fields], ["value"])
        self.assertEqual([field.name for field in roundtrip.throws], ["oops"])
        self.assertIsNone(service.get_function("missing"))

    def test_void_oneway_and_extends(self):
        document = parse(
            """
            service Base {}
            service Child extends Base {
                oneway void notify(1: string what);
                void wait(),
            }
            """
        )
        child = document.services[1]
        self.assertEqual(child.extends, "Base")
        notify = child.get_function("notify")
        self.assertTrue(notify.oneway)
        self.assertIsInstance(notify.return_type, VoidType)
        self.assertEqual(notify.return_type.kind, SyntaxType.VOID_TYPE)
        self.assertFalse(child.get_function("wait").oneway)

    def test_const_and_annotations(self):
        document = parse(
            """
            const i32 ANSWER = 42
            const list<string> NAMES = ["a", "b"];
            struct Annotated {
                1: string name (go.tag = 'json:"name"', deprecated)
            } (final = "true")
            """
        )
        constants = [statement for statement in document.body if isinstance(statement, ConstDefinition)]
        self.assertEqual([constant.name for constant in constants], ["ANSWER", "NAMES"])
        self.assertIsInstance(constants[0].initializer, IntConstant)
        self.assertEqual(len(constants[1].initializer.elements), 2)
        self.assertEqual(document.find_declarations("Annotated")[0].fields[0].name, "name")

    def test_negative_and_hex_constants(self):
        document = parse("enum Sign { MINUS = -1, BIG = 0xFF }")
        members = document.find_declarations("Sign")[0].members
        self.assertEqual(members[0].initializer.value, -1)
        self.assertEqual(members[1].initializer.value, 255)

    def test_line_numbers(self):
        document = parse_file("math.thrift")
        self.assertEqual(document.find_declarations("Op")[0].line, 4)


class TestComments(TestCase):
    """Comments become descriptions"""

    def test_leading_comments(self):
        document = parse_file("math.thrift")
        self.assertEqual(document.find_declarations("Op")[0].description, "Operation to apply")
        self.assertEqual(document.find_declarations("Calc")[0].description, "Two operands and an operation")

    def test_trailing_comment(self):
        document = parse_file("types.thrift")
        members = document.find_declarations("Color")[0].members
        self.assertEqual(members[2].description, "the last one")
        self.assertIsNone(members[0].description)
        self.assertEqual(document.find_declarations("Color")[0].description, "Colors, with explicit values")

    def test_function_comment(self):
        document = parse_file("service.thrift")
        service = document.services[0]
        self.assertEqual(service.get_function("calculate").description, "Apply an operation")
        self.assertIsNone(service.get_function("echo").description)

    def test_multiline_block(self):
        document = parse(
            """
            # first line
            # second line
            struct Documented {
                1: string a // about a
            }

            // detached

            struct Undocumented {}
            """
        )
        documented = document.find_declarations("Documented")[0]
        self.assertEqual(documented.description, "first line\nsecond line")
        self.assertEqual(documented.fields[0].description, "about a")
        self.assertIsNone(document.find_declarations("Undocumented")[0].description)

    def test_one_line_children_do_not_inherit_parent_comment(self):
        document = parse(
            "// Op doc\n"
            "enum Op { ADD, SUB }\n"
            "// Calc doc\n"
            "struct Calc { 1: i32 a }\n"
            "service S {\n"
            "  // fn doc\n"
            "  i32 f(1: i32 x)\n"
            "}\n"
        )
        op = document.find_declarations("Op")[0]
        self.assertEqual(op.description, "Op doc")
        self.assertEqual([member.description for member in op.members], [None, None])

        calc = document.find_declarations("Calc")[0]
        self.assertEqual(calc.description, "Calc doc")
        self.assertIsNone(calc.fields[0].description)

        f = document.services[0].functions[0]
        self.assertEqual(f.description, "fn doc")
        self.assertIsNone(f.fields[0].description)

    def test_trailing_comment_goes_to_the_node_closing_the_line(self):
        document = parse(
            "struct Calc { 1: i32 a } // Calc trailing\n"
            "service S {\n"
            "  i32 f(1: i32 x) // fn trailing\n"
            "  i32 g(\n"
            "    1: i32 y, // y trailing\n"
            "  )\n"
            "}\n"
        )
        self.assertIsNone(document.find_declarations("Calc")[0].fields[0].description)

        f, g = document.services[0].functions
        self.assertEqual(f.description, "fn trailing")
        self.assertIsNone(f.fields[0].description)
        self.assertEqual(g.fields[0].description, "y trailing")
        self.assertIsNone(g.description)

    def test_parser_is_reusable(self):
        parser = ThriftParser()
        first = parser.parse("// one\nstruct A {}")
        second = parser.parse("struct B {}")
        self.assertEqual(first.find_declarations("A")[0].description, "one")
        self.assertIsNone(second.find_declarations("B")[0].description)


class TestSyntaxErrors(TestCase):
    """Invalid IDL yields ThriftErrors, not an exception"""

    def test_missing_field_name(self):
        result = parse((TEST_DATA / "bad.thrift").read_text())
        self.assertIsInstance(result, ThriftErrors)
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].line, 3)
        self.assertIn("line 3", str(result.errors[0]))

    def test_unexpected_character(self):
        result = parse("struct A { 1: i32 a } @")
        self.assertIsInstance(result, ThriftErrors)
        self.assertIn("@", result.errors[0].message)

    def test_unexpected_end(self):
        result = parse("struct A {")
        self.assertIsInstance(result, ThriftErrors)

    def test_include_is_not_followed(self):
        document = parse('include "does_not_exist.thrift"')
        self.assertIsInstance(document.includes[0], IncludeDefinition)
