"""Tests for individual norm rules."""

from __future__ import annotations

from epicstyle.functions import extract_functions
from epicstyle.rules.base import Rule, Severity, Violation
from epicstyle.rules.comments import CommentFormatRule, FunctionCommentRule
from epicstyle.rules.declarations import (
    DeclarationPlacementRule,
    ForLoopDeclarationRule,
    GlobalConstRule,
    MultipleDeclarationRule,
)
from epicstyle.rules.function_size import (
    FunctionCountRule,
    FunctionLengthRule,
    FunctionParametersRule,
)
from epicstyle.rules.layout import EmptyLinesRule, IndentationRule, LineLengthRule
from epicstyle.rules.naming import FilenameRule, FunctionNamingRule, MacroNamingRule
from epicstyle.rules.patterns import is_screaming_snake_case, is_snake_case
from epicstyle.source import FileContext


def test_line_length_flags_81_characters() -> None:
    violations = _check(LineLengthRule(), ["x" * 80, "x" * 81])
    assert [(v.rule, v.line, v.severity) for v in violations] == [("C-L1", 2, Severity.MAJOR)]
    assert "81" in violations[0].description


def test_line_length_counts_tab_as_one_character() -> None:
    assert _check(LineLengthRule(), ["\t" * 10 + "x" * 70]) == []


def test_empty_lines_at_edges_and_consecutive() -> None:
    lines = ["", "int a;", "", "", "int b;", " "]
    violations = _check(EmptyLinesRule(), lines)
    assert [(v.line, v.message) for v in violations] == [
        (1, "Empty line at beginning of file"),
        (6, "Empty line at end of file"),
        (4, "Consecutive empty lines"),
    ]
    assert {v.severity for v in violations} == {Severity.MINOR}


def test_empty_lines_single_blank_line_reported_once() -> None:
    violations = _check(EmptyLinesRule(), [""])
    assert len(violations) == 1
    assert violations[0].line == 1


def test_empty_lines_ignores_empty_file() -> None:
    assert _check(EmptyLinesRule(), []) == []


def test_indentation_flags_four_spaces_anywhere() -> None:
    lines = ["\treturn (0);", "    return (0);", "int x;    /* aligned */", "   x++;"]
    violations = _check(IndentationRule(), lines)
    assert [v.line for v in violations] == [2, 3]


def test_multiple_declaration() -> None:
    lines = [
        "\tint a, b;",
        "\tint c;",
        "\tchar *s, *t;",
        "\tunsigned int x, y;",
        "\tsize_t i, j;",
        "int add(int a, int b)",
    ]
    violations = _check(MultipleDeclarationRule(), lines)
    assert [v.line for v in violations] == [1, 3, 4]


def test_declaration_placement_after_statement() -> None:
    lines = [
        "int compute(int a)",
        "{",
        "\tint b;",
        "",
        "\t/* comment */",
        "\tb = a * 2;",
        "\tint c = b;",
        "\treturn (c);",
        "}",
        "int again(void)",
        "{",
        "\tint d = 0;",
        "\treturn (d);",
        "}",
    ]
    violations = _check(DeclarationPlacementRule(), lines)
    assert len(violations) == 1
    assert violations[0].rule == "C-V1"
    assert violations[0].line == 7
    assert "compute" in violations[0].description


def test_filename_must_be_snake_case() -> None:
    assert _check(FilenameRule(), [], filename="src/my_file.c") == []
    violations = _check(FilenameRule(), [], filename="src/MyFile.c")
    assert len(violations) == 1
    assert violations[0].line == 0
    assert violations[0].is_file_level
    assert _check(FilenameRule(), [], filename="_private.h") != []


def test_function_count_excludes_main() -> None:
    lines = _functions("one", "two", "three", "main")
    assert _check(FunctionCountRule(), lines) == []

    lines = _functions("one", "two", "three", "four")
    violations = _check(FunctionCountRule(), lines)
    assert len(violations) == 1
    assert violations[0].rule == "C-O2"
    assert violations[0].line == 0
    assert "4 functions" in violations[0].description


def test_function_count_includes_unclosed_last_function() -> None:
    lines = [*_functions("one", "two", "three"), "int four(void)", "{", "\treturn (4);"]
    violations = _check(FunctionCountRule(), lines)
    assert [(v.rule, v.line) for v in violations] == [("C-O2", 0)]
    assert "4 functions" in violations[0].description


def test_function_count_ignores_macro_bodies() -> None:
    lines = [
        *_functions("one", "two", "three"),
        "#define SWAP(a, b) { int t = a; a = b; b = t; }",
    ]
    assert _check(FunctionCountRule(), lines) == []


def test_function_naming() -> None:
    lines = _functions("good_name", "badName", "main")
    violations = _check(FunctionNamingRule(), lines)
    assert len(violations) == 1
    assert violations[0].line == 7
    assert "badName" in violations[0].message


def test_macro_naming_reports_name() -> None:
    lines = ["#define MAX_SIZE 100", "#define maxSize 100", "# define _HIDDEN 1"]
    violations = _check(MacroNamingRule(), lines)
    assert [v.line for v in violations] == [2, 3]
    assert "maxSize" in violations[0].message
    assert "maxSize" in violations[0].description


def test_function_length_anchored_at_start_line() -> None:
    body = ["\tx++;"] * 30
    lines = ["void short_one(int x)", "{", *body[:22], "}"]
    assert _check(FunctionLengthRule(), lines) == []

    lines = ["void long_one(int x)", "{", *body[:24], "}"]
    violations = _check(FunctionLengthRule(), lines)
    assert len(violations) == 1
    assert violations[0].line == 1
    assert "27 lines" in violations[0].description


def test_comment_format_flags_slashes_in_strings() -> None:
    lines = ["/* ok */", "x = 1; // nope", 'url = "http://example.com";']
    violations = _check(CommentFormatRule(), lines)
    assert [v.line for v in violations] == [2, 3]
    assert {v.severity for v in violations} == {Severity.MINOR}


def test_function_comment_required_except_main() -> None:
    lines = [
        "/* documented */",
        "int documented(void)",
        "{",
        "}",
        "int bare(void)",
        "{",
        "}",
        "/*",
        "** multi line",
        "*/",
        "int block(void)",
        "{",
        "}",
        "int main(void)",
        "{",
        "}",
    ]
    violations = _check(FunctionCommentRule(), lines)
    assert [v.line for v in violations] == [5, 12]
    assert "bare" in violations[0].description
    assert "block" in violations[1].description


def test_function_comment_ignores_trailing_comment_on_code() -> None:
    lines = ["int g = 0; /* not a header */", "int helper(void)", "{", "}"]
    violations = _check(FunctionCommentRule(), lines)
    assert [(v.rule, v.line) for v in violations] == [("C-C2", 2)]


def test_function_comment_accepts_block_opener_with_text() -> None:
    lines = ["/* helper: does nothing */", "int helper(void)", "{", "}"]
    assert _check(FunctionCommentRule(), lines) == []


def test_function_comment_first_line_function() -> None:
    violations = _check(FunctionCommentRule(), ["int first(void)", "{", "}"])
    assert [v.line for v in violations] == [1]


def test_global_const_outside_functions_only() -> None:
    lines = [
        "int counter = 0;",
        "static int hidden;",
        "const int limit = 4;",
        "int const other = 5;",
        "int prototype(int a);",
        "int use(void)",
        "{",
        "\tint local = 0;",
        "\treturn (local);",
        "}",
    ]
    violations = _check(GlobalConstRule(), lines)
    assert [v.line for v in violations] == [1, 2]
    assert {v.rule for v in violations} == {"C-G1"}


def test_global_const_ignores_struct_members() -> None:
    lines = ["struct point {", "\tint x;", "\tint y;", "};"]
    assert _check(GlobalConstRule(), lines) == []


def test_function_parameters_limit() -> None:
    lines = [
        "int four(int a, int b, int c, int d)",
        "{",
        "}",
        "int five(int a, int b, int c, int d, int e)",
        "{",
        "}",
    ]
    violations = _check(FunctionParametersRule(), lines)
    assert [v.line for v in violations] == [4]
    assert "5 parameters" in violations[0].description


def test_for_loop_declaration() -> None:
    lines = ["\tfor (int i = 0; i < n; i++) {", "\tfor (i = 0; i < n; i++) {", "for(char c;;)"]
    violations = _check(ForLoopDeclarationRule(), lines)
    assert [v.line for v in violations] == [1, 3]


def test_case_helpers() -> None:
    assert is_snake_case("my_file2")
    assert not is_snake_case("My_file")
    assert not is_snake_case("trailing_")
    assert not is_snake_case("")
    assert not is_snake_case("dash-name")
    assert is_screaming_snake_case("MAX_SIZE_2")
    assert not is_screaming_snake_case("Max")
    assert not is_screaming_snake_case("_GUARD")


def test_rules_never_raise_on_garbage() -> None:
    lines = ["}}}}", "{{", "(((", "#define", "for (", "int", ")))) {"]
    rules: list[Rule] = [
        LineLengthRule(),
        EmptyLinesRule(),
        IndentationRule(),
        MultipleDeclarationRule(),
        DeclarationPlacementRule(),
        FilenameRule(),
        FunctionCountRule(),
        FunctionNamingRule(),
        MacroNamingRule(),
        FunctionLengthRule(),
        CommentFormatRule(),
        FunctionCommentRule(),
        GlobalConstRule(),
        FunctionParametersRule(),
        ForLoopDeclarationRule(),
    ]
    for rule in rules:
        assert isinstance(_check(rule, lines), list)


def _check(rule: Rule, lines: list[str], filename: str = "sample.c") -> list[Violation]:
    context = FileContext(filename=filename, lines=tuple(lines))
    return rule.check(context, extract_functions(context.lines))


def _functions(*names: str) -> list[str]:
    lines: list[str] = []
    for name in names:
        lines.extend(["/* doc */", f"int {name}(void)", "{", "\treturn (0);", "}"])
    return lines
