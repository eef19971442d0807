"""Unit tests for the logical line counter."""

from pathlib import Path

import pytest
from tree_sitter import Node, Tree

from c_lint.core.complexity import MAX_FUNCTION_LINES, check_function_complexity, count_function_body
from c_lint.core.parsing import parse_source

_FILE = Path("sample.c")


def _first_body(source: str) -> tuple[Tree, Node]:
    tree = parse_source(source)
    for node in tree.root_node.children:
        if node.type == "function_definition":
            body = node.child_by_field_name("body")
            assert body is not None
            return tree, body
    raise AssertionError("no function definition in source")


def _score(source: str) -> int:
    _tree, body = _first_body(source)
    score, _ = count_function_body(body, source, _FILE)
    return score


class TestCountFunctionBody:
    def test_single_return_scores_one(self) -> None:
        source = "int f(void) {\n  return 0;\n}\n"
        _tree, body = _first_body(source)

        score, contributions = count_function_body(body, source, _FILE)

        assert score == 1
        assert len(contributions) == 1
        assert contributions[0].message == "Counted return statement for 1 line"
        assert contributions[0].text == "  return 0;"

    def test_bare_return_costs_nothing(self) -> None:
        assert _score("void f(void) {\n  return;\n}\n") == 0

    def test_uninitialized_declaration_costs_nothing(self) -> None:
        assert _score("void f(void) {\n  int x;\n  int y, z;\n}\n") == 0

    def test_each_initialized_declarator_is_counted(self) -> None:
        assert _score("void f(void) {\n  int x = 1, y, z = 2;\n}\n") == 2

    def test_multi_line_initializer_counts_its_span(self) -> None:
        source = "void f(void) {\n  int x = 1 +\n    2 +\n    3;\n}\n"
        assert _score(source) == 3

    def test_if_counts_condition_and_both_branches(self) -> None:
        source = "void f(int a) {\n  if (a) {\n    g();\n  } else {\n    h();\n    h();\n  }\n}\n"
        assert _score(source) == 4

    def test_multi_line_condition_counts_true_span(self) -> None:
        source = "void f(int a, int b) {\n  if (a &&\n      b)\n    g();\n}\n"
        assert _score(source) == 3

    def test_while_and_do_while(self) -> None:
        source = "void f(int a) {\n  while (a) {\n    a--;\n  }\n  do {\n    a++;\n  } while (a < 3);\n}\n"
        assert _score(source) == 4

    def test_for_counts_header_and_body(self) -> None:
        source = "void f(void) {\n  for (int i = 0;\n       i < 10;\n       i++) {\n    g(i);\n  }\n}\n"
        _tree, body = _first_body(source)

        score, contributions = count_function_body(body, source, _FILE)

        assert score == 4
        assert contributions[0].message == "Counted for condition for 3 lines"
        assert contributions[0].range.start_point.row == 1

    def test_break_and_continue_cost_one(self) -> None:
        source = "void f(int a) {\n  while (a) {\n    if (a > 3)\n      break;\n    continue;\n  }\n}\n"
        assert _score(source) == 4

    def test_trailing_break_in_case_is_not_counted(self) -> None:
        with_break = "void f(int x) {\n  switch (x) {\n  case 0:\n    g();\n    break;\n  }\n}\n"
        without_break = "void f(int x) {\n  switch (x) {\n  case 0:\n    g();\n  }\n}\n"
        assert _score(with_break) == _score(without_break) == 2

    def test_braced_case_body_drops_trailing_break(self) -> None:
        source = "void f(int x) {\n  switch (x) {\n  case 1: {\n    g();\n    break;\n  }\n  default:\n    h();\n  }\n}\n"
        assert _score(source) == 3

    def test_debug_guarded_block_is_excluded(self) -> None:
        source = "int f(void) {\n#ifdef DEBUG\n  g();\n  g();\n#endif\n  return 0;\n}\n"
        assert _score(source) == 1

    def test_other_guarded_block_is_counted(self) -> None:
        source = "int f(void) {\n#ifdef FEATURE\n  g();\n  g();\n#endif\n  return 0;\n}\n"
        assert _score(source) == 3

    def test_contributions_add_up_to_score(self) -> None:
        source = Path(__file__).parent.parent.joinpath("data", "do_things.c").read_text(encoding="utf-8")
        _tree, body = _first_body(source)

        score, contributions = count_function_body(body, source, _FILE)

        assert score == 24
        assert sum(c.lines or 0 for c in contributions) == score
        assert all(c.sublints is None for c in contributions)


class TestCheckFunctionComplexity:
    @staticmethod
    def _function(statements: int) -> str:
        body = "".join("  x++;\n" for _ in range(statements))
        return f"// Bumps x\nvoid bump(int x)\n{{\n{body}}}\n"

    def test_flags_function_over_limit(self) -> None:
        source = self._function(12)
        tree = parse_source(source)

        lints = check_function_complexity(tree, source, _FILE)

        assert len(lints) == 1
        lint = lints[0]
        assert lint.message == "Function has more than 10 lines (12)"
        assert lint.text == "void bump(int x)"
        assert lint.range.start_point.row == 1
        assert lint.sublints is not None
        assert len(lint.sublints) == 12
        assert sum(s.lines or 0 for s in lint.sublints) == 12

    @pytest.mark.parametrize("statements", [0, 1, MAX_FUNCTION_LINES])
    def test_accepts_function_at_or_below_limit(self, statements: int) -> None:
        source = self._function(statements)
        assert check_function_complexity(parse_source(source), source, _FILE) == []

    def test_unicode_line_separator_in_literal_keeps_rows(self) -> None:
        source = 'const char *sep = "a\u2028b";\n' + self._function(12)
        tree = parse_source(source)

        lints = check_function_complexity(tree, source, _FILE)

        assert len(lints) == 1
        assert lints[0].range.start_point.row == 2
        assert lints[0].text == "void bump(int x)"
        assert lints[0].sublints is not None
        assert lints[0].sublints[0].text == "  x++;"
