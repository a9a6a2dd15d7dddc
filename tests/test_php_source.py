"""
Tests for the PHP source scanner — blanking, method spans, imports.

Pure string in → offsets out. No filesystem.
"""

import textwrap

import pytest

from filament_modular.core.services.php_source import (
    AmbiguousMethodError,
    MalformedSourceError,
    SourceParseError,
    blank_non_code,
    existing_imports,
    find_method,
    find_namespace,
    import_insertion_point,
    line_ending,
    match_delimiter,
)


# ═══════════════════════════════════════════════════════════════════
#  blank_non_code
# ═══════════════════════════════════════════════════════════════════


class TestBlankNonCode:
    def test_same_length_and_lines(self):
        src = "<?php\n// a { comment\n$x = 'str { }';\n"
        code = blank_non_code(src)
        assert len(code) == len(src)
        assert code.count("\n") == src.count("\n")

    def test_line_comment_blanked(self):
        code = blank_non_code("$a = 1; // { not code\n$b = 2;")
        assert "{" not in code
        assert "$b = 2;" in code

    def test_comment_opener_blanked(self):
        assert blank_non_code("a // x\n") == "a     \n"

    def test_hash_comment_blanked(self):
        code = blank_non_code("$a = 1; # { not code\n")
        assert "{" not in code

    def test_attribute_is_code(self):
        code = blank_non_code("#[Override]\npublic function form() {}\n")
        assert "#[Override]" in code

    def test_block_comment_blanked(self):
        code = blank_non_code("/* { \n } */ $x;")
        assert "{" not in code and "}" not in code
        assert "$x;" in code

    def test_single_quoted_string(self):
        code = blank_non_code("$r = '/{record}/edit';")
        assert "{" not in code
        assert code.startswith("$r = '")
        assert code.endswith("';")

    def test_escaped_quote_in_string(self):
        code = blank_non_code("$s = 'it\\'s {'; $t = 1;")
        assert "{" not in code
        assert "$t = 1;" in code

    def test_double_quoted_interpolation(self):
        code = blank_non_code('$s = "{$user->name} }"; $t = 1;')
        assert "{" not in code and "}" not in code
        assert "$t = 1;" in code

    def test_comment_marker_inside_string_is_not_comment(self):
        code = blank_non_code("$u = 'http://x'; $t = '{';\n$v = 1;")
        assert "$v = 1;" in code

    def test_heredoc_blanked(self):
        src = textwrap.dedent("""\
            $h = <<<EOT
            { unbalanced
            EOT;
            $after = 1;
            """)
        code = blank_non_code(src)
        assert "{" not in code
        assert "$after = 1;" in code

    def test_nowdoc_blanked(self):
        src = "$h = <<<'EOT'\n}\nEOT;\n$x;"
        code = blank_non_code(src)
        assert "}" not in code

    @pytest.mark.parametrize(
        "src",
        [
            "/* never closed",
            "$s = 'never closed;",
            '$s = "never closed;',
            "$h = <<<EOT\nno terminator\n",
        ],
    )
    def test_unterminated_raises(self, src):
        with pytest.raises(MalformedSourceError):
            blank_non_code(src)


# ═══════════════════════════════════════════════════════════════════
#  match_delimiter
# ═══════════════════════════════════════════════════════════════════


class TestMatchDelimiter:
    def test_nested(self):
        code = "{ { } { { } } }"
        assert match_delimiter(code, 0) == len(code) - 1

    def test_parens(self):
        code = "(a, (b), c) {"
        assert match_delimiter(code, 0, "(", ")") == 10

    def test_unbalanced(self):
        with pytest.raises(MalformedSourceError):
            match_delimiter("{ { }", 0)


# ═══════════════════════════════════════════════════════════════════
#  find_method
# ═══════════════════════════════════════════════════════════════════


class TestFindMethod:
    def test_generated_resource(self, employee_resource):
        span = find_method(employee_resource, "form")
        assert span is not None
        body = employee_resource[span.body_start:span.body_end]
        assert body.strip().startswith("return $form")
        assert body.rstrip().endswith("]);")
        assert span.param == "form"
        assert span.indent == "    "

    def test_span_covers_declaration_line(self, employee_resource):
        span = find_method(employee_resource, "table")
        assert span is not None
        assert employee_resource[span.start:].lstrip().startswith("public static function table(")
        assert employee_resource[span.end - 1] == "}"

    def test_missing_method(self, employee_resource):
        assert find_method(employee_resource, "infolist") is None

    def test_odd_indentation_and_nested_braces(self):
        src = textwrap.dedent("""\
            <?php
            class X {
            public static function table(Table $t): Table {
              return $t->columns([
              // } brace in comment
              ])->filters(array_map(function ($f) {
            return $f;
            }, []));
            }
            public function other() {}
            }
            """)
        span = find_method(src, "table")
        assert span is not None
        body = src[span.body_start:span.body_end]
        assert "array_map" in body
        assert "return $f;" in body
        assert "other" not in body
        assert span.param == "t"
        assert span.indent == ""

    def test_brace_inside_string_in_body(self):
        src = "<?php\nfunction form($form) {\n    return '}';\n}\n"
        span = find_method(src, "form")
        assert span is not None
        assert src[span.body_start:span.body_end] == "\n    return '}';\n"

    def test_name_in_comment_ignored(self):
        src = "<?php\n// function form(\nfunction form($f) { return 1; }\n"
        span = find_method(src, "form")
        assert span is not None
        assert span.param == "f"

    def test_case_insensitive(self):
        src = "<?php\nfunction Form($f) { }\n"
        assert find_method(src, "form") is not None

    def test_does_not_match_prefix(self):
        src = "<?php\nfunction formatted($f) { }\n"
        assert find_method(src, "form") is None

    def test_ambiguous(self):
        src = "<?php\nfunction form($a) {}\nfunction form($b) {}\n"
        with pytest.raises(AmbiguousMethodError) as exc:
            find_method(src, "form")
        assert "lines 2, 3" in str(exc.value)

    def test_bodiless_method(self):
        src = "<?php\nabstract public static function form(Form $form): Form;\n"
        with pytest.raises(MalformedSourceError):
            find_method(src, "form")

    def test_unbalanced_body(self):
        src = "<?php\nfunction form($f) {\n    if (true) {\n"
        with pytest.raises(MalformedSourceError):
            find_method(src, "form")

    def test_errors_share_base(self):
        assert issubclass(AmbiguousMethodError, SourceParseError)
        assert issubclass(MalformedSourceError, SourceParseError)


# ═══════════════════════════════════════════════════════════════════
#  namespace / imports
# ═══════════════════════════════════════════════════════════════════


class TestImports:
    def test_namespace(self, employee_resource):
        assert find_namespace(employee_resource) == "App\\Filament\\Resources"

    def test_no_namespace(self):
        assert find_namespace("<?php\nclass X {}\n") is None

    def test_existing_imports_in_order(self, employee_resource):
        imports = existing_imports(employee_resource)
        assert imports[0] == "use App\\Filament\\Resources\\EmployeeResource\\Pages;"
        assert imports[-1] == "use Illuminate\\Database\\Eloquent\\SoftDeletingScope;"
        assert len(imports) == 10

    def test_trait_use_is_not_import(self):
        src = "<?php\nuse A\\B;\nclass X {\n    use HasThing;\n}\n"
        assert existing_imports(src) == ["use A\\B;"]

    def test_insertion_after_last_use(self, employee_resource):
        pos, after_use = import_insertion_point(employee_resource)
        assert after_use is True
        assert employee_resource[:pos].endswith("use Illuminate\\Database\\Eloquent\\SoftDeletingScope;")

    def test_insertion_after_namespace(self):
        src = "<?php\n\nnamespace App;\n\nclass X {}\n"
        pos, after_use = import_insertion_point(src)
        assert after_use is False
        assert src[:pos].endswith("namespace App;")

    def test_insertion_after_open_tag(self):
        src = "<?php\nclass X {}\n"
        pos, after_use = import_insertion_point(src)
        assert after_use is False
        assert src[:pos] == "<?php"

    def test_use_in_comment_ignored(self):
        src = "<?php\nuse A;\n/*\nuse B;\n*/\nclass X {}\n"
        pos, _ = import_insertion_point(src)
        assert src[:pos].endswith("use A;")


class TestCRLFSource:
    """Windows line endings must not hide imports or the namespace."""

    @pytest.fixture
    def crlf_resource(self, employee_resource):
        return employee_resource.replace("\n", "\r\n")

    def test_line_ending(self, employee_resource, crlf_resource):
        assert line_ending(crlf_resource) == "\r\n"
        assert line_ending(employee_resource) == "\n"
        assert line_ending("<?php") == "\n"

    def test_namespace(self, crlf_resource):
        assert find_namespace(crlf_resource) == "App\\Filament\\Resources"

    def test_existing_imports(self, crlf_resource):
        imports = existing_imports(crlf_resource)
        assert len(imports) == 10
        assert imports[-1] == "use Illuminate\\Database\\Eloquent\\SoftDeletingScope;"

    def test_insertion_after_last_use(self, crlf_resource):
        pos, after_use = import_insertion_point(crlf_resource)
        assert after_use is True
        assert crlf_resource[:pos].endswith("use Illuminate\\Database\\Eloquent\\SoftDeletingScope;")
        assert crlf_resource[pos:].startswith("\r\n")

    def test_insertion_after_namespace(self):
        src = "<?php\r\n\r\nnamespace App;\r\n\r\nclass X {}\r\n"
        pos, after_use = import_insertion_point(src)
        assert after_use is False
        assert src[:pos].endswith("namespace App;")
