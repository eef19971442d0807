from pathlib import Path

from tree_sitter import Tree

from c_lint.core.parsing import line_text, node_range
from c_lint.models import Lint

_GLOBAL_DECLARATORS = frozenset({"identifier", "init_declarator"})


def check_global_variables(tree: Tree, source: str, file: Path) -> list[Lint]:
    lints: list[Lint] = []
    for node in tree.root_node.children:
        if node.type != "declaration":
            continue
        declarator = node.child_by_field_name("declarator")
        if declarator is None or declarator.type not in _GLOBAL_DECLARATORS:
            continue
        decl_range = node_range(node)
        lints.append(
            Lint(
                message="Global variable",
                text=line_text(source, decl_range.start_point.row),
                range=decl_range,
                file=file,
            )
        )
    return lints


def check_function_comments(tree: Tree, source: str, file: Path) -> list[Lint]:
    """Every function definition needs a comment ending on the line right above it."""
    lints: list[Lint] = []
    for node in tree.root_node.children:
        if node.type != "function_definition":
            continue
        previous = node.prev_sibling
        if (
            previous is not None
            and previous.type == "comment"
            and previous.end_point[0] == node.start_point[0] - 1
        ):
            continue
        declarator = node.child_by_field_name("declarator") or node
        declarator_range = node_range(declarator)
        lints.append(
            Lint(
                message="Missing comment directly above function",
                text=line_text(source, declarator_range.start_point.row),
                range=declarator_range,
                file=file,
            )
        )
    return lints
