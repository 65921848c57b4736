"""Tests for schema parser."""

import pytest

from protostruct.generator import parse
from protostruct.generator.parser import (
    DuplicateName,
    MalformedField,
    MalformedMessageHeader,
    MissingSemicolon,
    UnbalancedBrace,
    UnsupportedSyntax,
)
from protostruct.generator.types import FieldDescriptor
from protostruct.proto import ScalarType, UnsupportedType

PERSON = """syntax = "proto3";
message Person {
  string name = 1;
  uint32 age = 2;
  optional string role = 3;
  bool is_coder = 4;
}"""


def describe_parse_message():
    def parses_person(expect):
        document = parse(PERSON)
        expect(len(document.messages)) == 1
        person = document.messages[0]
        expect(person.name) == "Person"
        expect([f.name for f in person.fields]) == ["name", "age", "role", "is_coder"]
        expect([f.type for f in person.fields]) == [
            ScalarType.STRING,
            ScalarType.UINT32,
            ScalarType.STRING,
            ScalarType.BOOL,
        ]
        expect([f.optional for f in person.fields]) == [False, False, True, False]

    def keeps_header(expect):
        expect(parse(PERSON).header) == 'syntax = "proto3";'

    def parses_every_scalar_type(expect):
        lines = [f"  {scalar.value} f_{scalar.value} = {i};" for i, scalar in enumerate(ScalarType, 1)]
        text = 'syntax = "proto3";\nmessage All {\n' + "\n".join(lines) + "\n}"
        fields = parse(text).messages[0].fields
        expect([f.type for f in fields]) == list(ScalarType)

    def parses_multiple_messages_in_order(expect):
        document = parse(
            """
            syntax = "proto3";
            message First {
              int32 a = 1;
            }
            message Second {
              int64 b = 1;
            }
            """
        )
        expect([m.name for m in document.messages]) == ["First", "Second"]
        expect(document.messages[1].fields[0].type) == ScalarType.INT64

    def parses_empty_message(expect):
        document = parse('syntax = "proto3";\nmessage Empty {\n}')
        expect(document.messages[0].fields) == ()

    def parses_document_without_messages(expect):
        expect(parse('syntax = "proto3";').messages) == ()

    def accepts_header_without_space_before_brace(expect):
        document = parse('syntax = "proto3";\nmessage Tight{\n  bool ok = 1;\n}')
        expect(document.messages[0].name) == "Tight"

    def treats_field_named_message_as_field(expect):
        document = parse('syntax = "proto3";\nmessage Log {\n  string message = 1;\n}')
        expect(document.messages[0].fields[0].name) == "message"


def describe_tags():
    def renumbers_tags_by_position(expect):
        document = parse(
            """
            syntax = "proto3";
            message Sparse {
              string a = 7;
              string b = 3;
              string c = 100;
            }
            """
        )
        expect([f.tag for f in document.messages[0].fields]) == [1, 2, 3]

    def builds_field_descriptors(expect):
        field = parse(PERSON).messages[0].fields[2]
        expect(field) == FieldDescriptor(name="role", type=ScalarType.STRING, optional=True, tag=3)
        expect(field.native_type) == "str | None"

    def rejects_non_numeric_tag(expect):
        with pytest.raises(MalformedField) as exc:
            parse('syntax = "proto3";\nmessage M {\n  bool a = one;\n}')
        expect(exc.value.line) == 3

    def rejects_zero_tag(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nmessage M {\n  bool a = 0;\n}')


def describe_comments_and_blank_lines():
    def skips_line_and_block_comments(expect):
        document = parse(
            """
            // leading comment
            /* block
             * continued
             */
            syntax = "proto3";

            // about the message
            message Commented {
              // about the field
              bool flag = 1;
            }
            """
        )
        expect(document.messages[0].fields[0].name) == "flag"

    def does_not_strip_trailing_comments(expect):
        with pytest.raises(MissingSemicolon):
            parse('syntax = "proto3";\nmessage M {\n  bool flag = 1; // trailing\n}')

    def reports_original_line_numbers(expect):
        with pytest.raises(MissingSemicolon) as exc:
            parse(
                'syntax = "proto3";\n'
                "\n"
                "// comment\n"
                "message M {\n"
                "\n"
                "  bool flag = 1\n"
                "}\n"
            )
        expect(exc.value.line) == 6
        expect(exc.value.text) == "bool flag = 1"


def describe_parse_errors():
    def rejects_missing_header(expect):
        with pytest.raises(UnsupportedSyntax):
            parse("message Person {\n  string name = 1;\n}")

    def rejects_proto2_header(expect):
        with pytest.raises(UnsupportedSyntax) as exc:
            parse('syntax = "proto2";\nmessage Person {\n  string name = 1;\n}')
        expect(exc.value.line) == 1

    def rejects_empty_input(expect):
        with pytest.raises(UnsupportedSyntax):
            parse("   \n// only a comment\n")

    def rejects_message_without_brace(expect):
        with pytest.raises(MalformedMessageHeader):
            parse('syntax = "proto3";\nmessage Person\n{\n}')

    def rejects_message_without_name(expect):
        with pytest.raises(MalformedMessageHeader):
            parse('syntax = "proto3";\nmessage {\n}')

    def rejects_missing_semicolon(expect):
        with pytest.raises(MissingSemicolon) as exc:
            parse('syntax = "proto3";\nmessage M {\n  string name = 1\n}')
        expect("';'" in str(exc.value)) == True

    def rejects_field_without_number(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nmessage M {\n  string name;\n}')

    def rejects_field_without_type(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nmessage M {\n  name = 1;\n}')

    def rejects_unknown_type(expect):
        with pytest.raises(UnsupportedType) as exc:
            parse('syntax = "proto3";\nmessage M {\n  foo name = 1;\n}')
        expect(exc.value.type_name) == "foo"
        expect(exc.value.line) == 3

    def rejects_repeated_fields(expect):
        with pytest.raises(UnsupportedType):
            parse('syntax = "proto3";\nmessage M {\n  repeated int32 ids = 1;\n}')

    def rejects_message_typed_fields(expect):
        with pytest.raises(UnsupportedType):
            parse('syntax = "proto3";\nmessage M {\n  Person owner = 1;\n}')

    def rejects_field_outside_message(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nstring name = 1;')

    def rejects_unclosed_message(expect):
        with pytest.raises(UnbalancedBrace) as exc:
            parse('syntax = "proto3";\nmessage Open {\n  bool a = 1;')
        expect(exc.value.line) == 2

    def rejects_stray_closing_brace(expect):
        with pytest.raises(UnbalancedBrace):
            parse('syntax = "proto3";\n}')

    def rejects_nested_messages(expect):
        with pytest.raises(UnbalancedBrace):
            parse('syntax = "proto3";\nmessage Outer {\nmessage Inner {\n}\n}')

    def rejects_duplicate_field_names(expect):
        with pytest.raises(DuplicateName):
            parse('syntax = "proto3";\nmessage M {\n  bool a = 1;\n  int32 a = 2;\n}')

    def rejects_duplicate_message_names(expect):
        with pytest.raises(DuplicateName):
            parse('syntax = "proto3";\nmessage M {\n}\nmessage M {\n}')


def describe_generated_name_safety():
    def rejects_keyword_field_names(expect):
        with pytest.raises(MalformedField) as exc:
            parse('syntax = "proto3";\nmessage Route {\n  string from = 1;\n}')
        expect(exc.value.line) == 3

    def rejects_keyword_message_names(expect):
        with pytest.raises(MalformedMessageHeader):
            parse('syntax = "proto3";\nmessage class {\n}')

    def rejects_names_bound_by_generated_module(expect):
        for name in ("Message", "dataclass", "UInt32"):
            with pytest.raises(MalformedMessageHeader):
                parse(f'syntax = "proto3";\nmessage {name} {{\n}}')

    def rejects_field_names_hiding_record_methods(expect):
        for name in ("to_schema_text", "schema_text", "proto_fields", "__init__"):
            with pytest.raises(MalformedField) as exc:
                parse(f'syntax = "proto3";\nmessage Doc {{\n  string {name} = 1;\n}}')
            expect("reserved" in str(exc.value)) == True

    def accepts_soft_keywords_as_names(expect):
        document = parse('syntax = "proto3";\nmessage match {\n  string type = 1;\n}')
        expect(document.messages[0].fields[0].name) == "type"


def describe_tag_number_format():
    def rejects_underscored_numbers(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nmessage M {\n  bool a = 1_0;\n}')

    def rejects_signed_numbers(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nmessage M {\n  bool a = +3;\n}')

    def rejects_non_ascii_digits(expect):
        with pytest.raises(MalformedField):
            parse('syntax = "proto3";\nmessage M {\n  bool a = ٣;\n}')
