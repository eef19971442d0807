"""Logical line counting for function bodies.

The score of a function is a weighted sum over the statements in its body, computed
on the realigned preprocessor output so that statements hidden behind macros are
counted. Every non-zero cost is recorded as a sublint, and the sublint costs always
add up to the score.
"""

import logging
import re
from pathlib import Path

from tree_sitter import Node, Tree

from c_lint.core.parsing import node_range, node_text, split_lines
from c_lint.models import Lint, Range

logger = logging.getLogger(__name__)

MAX_FUNCTION_LINES = 10

_DEBUG_GUARD_RE = re.compile(r"\bDEBUG\b")
_PREPROC_ALTERNATIVES = frozenset({"preproc_else", "preproc_elif", "preproc_elifdef"})


def _plural(value: int) -> str:
    return "" if value == 1 else "s"


class ComplexityCounter:
    """Visit statement nodes and accumulate their logical line cost.

    ``visit(node)`` dispatches to ``visit_<node type>``; kinds without a handler cost
    nothing. Contributions are appended to ``contributions`` in visiting order.
    """

    def __init__(self, source: str, file: Path) -> None:
        self.file = file
        self.contributions: list[Lint] = []
        self._lines = split_lines(source)

    def visit(self, node: Node) -> int:
        handler = getattr(self, f"visit_{node.type}", self.generic_visit)
        return handler(node)

    def generic_visit(self, node: Node) -> int:
        return 0

    def visit_all(self, nodes: list[Node]) -> int:
        return sum(self.visit(child) for child in nodes)

    def _count(self, what: str, range_: Range, value: int | None = None) -> int:
        value = range_.line_span if value is None else value
        row = range_.start_point.row
        self.contributions.append(
            Lint(
                message=f"Counted {what} for {value} line{_plural(value)}",
                text=self._lines[row] if row < len(self._lines) else "",
                range=range_,
                file=self.file,
                lines=value,
            )
        )
        return value

    def visit_compound_statement(self, node: Node) -> int:
        return self.visit_all(node.named_children)

    def visit_declaration(self, node: Node) -> int:
        total = 0
        for declarator in node.children_by_field_name("declarator"):
            if declarator.type == "init_declarator":
                total += self._count("definition", node_range(declarator))
        return total

    def visit_expression_statement(self, node: Node) -> int:
        if node.named_child_count == 0:
            return 0
        expression = node.named_children[0]
        return self._count("expression", node_range(expression))

    def visit_if_statement(self, node: Node) -> int:
        condition = node.child_by_field_name("condition")
        consequence = node.child_by_field_name("consequence")
        alternative = node.child_by_field_name("alternative")
        total = self._count("if condition", node_range(condition)) if condition else 0
        if consequence is not None:
            total += self.visit(consequence)
        if alternative is not None:
            total += self.visit(alternative)
        return total

    def visit_else_clause(self, node: Node) -> int:
        return self.visit_all(node.named_children)

    def visit_while_statement(self, node: Node) -> int:
        condition = node.child_by_field_name("condition")
        body = node.child_by_field_name("body")
        total = self._count("while condition", node_range(condition)) if condition else 0
        return total + (self.visit(body) if body is not None else 0)

    def visit_do_statement(self, node: Node) -> int:
        body = node.child_by_field_name("body")
        condition = node.child_by_field_name("condition")
        total = self.visit(body) if body is not None else 0
        if condition is not None:
            total += self._count("do/while condition", node_range(condition))
        return total

    def visit_for_statement(self, node: Node) -> int:
        body = node.child_by_field_name("body") or node.children[-1]
        header_end = body.prev_sibling or body
        total = self._count("for condition", node_range(node.children[0], header_end))
        return total + self.visit(body)

    def visit_switch_statement(self, node: Node) -> int:
        condition = node.child_by_field_name("condition")
        body = node.child_by_field_name("body")
        total = self._count("switch expression", node_range(condition)) if condition else 0
        return total + (self.visit(body) if body is not None else 0)

    def visit_case_statement(self, node: Node) -> int:
        value = node.child_by_field_name("value")
        statements = [c for c in node.named_children if c != value and c.type != "comment"]
        if statements and statements[-1].type == "compound_statement":
            inner = [c for c in statements[-1].named_children if c.type != "comment"]
            statements = statements[:-1] + inner
        # the closing break of a case is not held against it
        if statements and statements[-1].type == "break_statement":
            statements = statements[:-1]
        return self.visit_all(statements)

    def visit_break_statement(self, node: Node) -> int:
        return self._count("break statement", node_range(node), 1)

    def visit_continue_statement(self, node: Node) -> int:
        return self._count("continue statement", node_range(node), 1)

    def visit_return_statement(self, node: Node) -> int:
        values = [c for c in node.named_children if c.type != "comment"]
        if not values:
            return 0
        return self._count("return statement", node_range(values[0]), 1)

    def visit_preproc_ifdef(self, node: Node) -> int:
        guard = node.child_by_field_name("name")
        return self._visit_conditional_block(node, guard)

    def visit_preproc_if(self, node: Node) -> int:
        guard = node.child_by_field_name("condition")
        return self._visit_conditional_block(node, guard)

    def _visit_conditional_block(self, node: Node, guard: Node | None) -> int:
        if guard is not None and _DEBUG_GUARD_RE.search(node_text(guard)):
            return 0
        body = [
            c
            for c in node.named_children
            if c != guard and c.type not in _PREPROC_ALTERNATIVES and c.type != "comment"
        ]
        return self.visit_all(body)


def count_function_body(body: Node, source: str, file: Path) -> tuple[int, list[Lint]]:
    counter = ComplexityCounter(source, file)
    score = counter.visit(body)
    return score, counter.contributions


def check_function_complexity(tree: Tree, source: str, file: Path) -> list[Lint]:
    """Flag every top-level function whose logical line count exceeds the limit."""
    lints: list[Lint] = []
    lines = split_lines(source)
    for node in tree.root_node.children:
        if node.type != "function_definition":
            continue
        body = node.child_by_field_name("body")
        declarator = node.child_by_field_name("declarator")
        if body is None or declarator is None:
            continue
        score, contributions = count_function_body(body, source, file)
        logger.debug("%s:%d scored %d", file, declarator.start_point[0] + 1, score)
        if score <= MAX_FUNCTION_LINES:
            continue
        declarator_range = node_range(declarator)
        row = declarator_range.start_point.row
        lints.append(
            Lint(
                message=f"Function has more than {MAX_FUNCTION_LINES} lines ({score})",
                text=lines[row] if row < len(lines) else "",
                range=declarator_range,
                file=file,
                sublints=contributions,
            )
        )
    return lints
