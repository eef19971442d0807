import re
from collections.abc import Iterable
from pathlib import Path

from tree_sitter import Node, QueryCursor, Tree

from c_lint.core.parsing import line_text, load_query, node_range, node_text
from c_lint.models import Identifier, IdentifierCase, Lint

_SCREAMING_SNAKE_CASE_RE = re.compile(r"^[A-Z0-9_]+$")
_LOWER_SNAKE_CASE_RE = re.compile(r"^[a-z0-9_]+_[a-z0-9_]+$")
_CAMEL_CASE_RE = re.compile(r"^[a-z]+(?:[A-Z][a-z0-9]*)+$")

_INCONSISTENCY_MESSAGES = {
    IdentifierCase.LOWER_SNAKE: "Snake case identifier contributes to case inconsistency",
    IdentifierCase.CAMEL: "Camel case identifier contributes to case inconsistency",
}


def classify_case(text: str) -> IdentifierCase | None:
    if _LOWER_SNAKE_CASE_RE.match(text):
        return IdentifierCase.LOWER_SNAKE
    if _CAMEL_CASE_RE.match(text):
        return IdentifierCase.CAMEL
    return None


def _captures(tree: Tree) -> dict[str, list[Node]]:
    captures = QueryCursor(load_query("identifiers")).captures(tree.root_node)
    if isinstance(captures, dict):
        return captures
    grouped: dict[str, list[Node]] = {}
    for node, name in captures:
        grouped.setdefault(name, []).append(node)
    return grouped


def classify_identifiers(tree: Tree, source: str, file: Path) -> tuple[list[Lint], list[Identifier]]:
    """Check macro names and collect the naming style of declared identifiers."""
    captures = _captures(tree)
    lints: list[Lint] = []
    identifiers: list[Identifier] = []

    for macro in sorted(captures.get("macro", []), key=lambda n: n.start_byte):
        name = macro.child_by_field_name("name")
        if name is None or _SCREAMING_SNAKE_CASE_RE.match(node_text(name)):
            continue
        name_range = node_range(name)
        lints.append(
            Lint(
                message="Macro is not SCREAMING_SNAKE_CASE",
                text=line_text(source, name_range.start_point.row),
                range=name_range,
                file=file,
            )
        )

    seen: set[tuple[int, int]] = set()
    for node in sorted(captures.get("name", []), key=lambda n: n.start_byte):
        if (node.start_byte, node.end_byte) in seen:
            continue
        seen.add((node.start_byte, node.end_byte))
        text = node_text(node)
        case = classify_case(text)
        if case is not None:
            identifiers.append(Identifier(file=file, range=node_range(node), case=case, text=text))

    return lints, identifiers


def check_case_consistency(identifiers: Iterable[Identifier]) -> list[Lint]:
    """Report every classified identifier when both naming styles are in use."""
    identifiers = list(identifiers)
    cases = {identifier.case for identifier in identifiers}
    if len(cases) < 2:
        return []
    return [
        Lint(
            message=_INCONSISTENCY_MESSAGES[identifier.case],
            text=identifier.text,
            range=identifier.range,
            file=identifier.file,
        )
        for identifier in identifiers
    ]
