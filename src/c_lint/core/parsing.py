import logging
from functools import lru_cache
from pathlib import Path

from tree_sitter import Node, Query, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from c_lint.errors import ParseError, ReadError
from c_lint.models import Position, Range

logger = logging.getLogger(__name__)

_LANGUAGE: SupportedLanguage = "c"


@lru_cache(maxsize=None)
def load_query(query_type: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_text = (queries_dir / f"{_LANGUAGE}_{query_type}.scm").read_text(encoding="utf-8")
    return Query(get_language(_LANGUAGE), query_text)


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(f"cannot read file ({exc})", path) from exc


def parse_source(source: str, path: Path | str | None = None) -> Tree:
    """Parse C text into a tree-sitter tree.

    tree-sitter recovers from syntax errors, so a tree containing ERROR nodes is
    still returned; only a parser that yields no tree at all is an error.
    """
    parser = get_parser(_LANGUAGE)
    tree = parser.parse(source.encode("utf-8"))
    if tree is None:
        raise ParseError("parser produced no syntax tree", path)
    if tree.root_node.has_error:
        logger.warning("%s: syntax tree contains errors, results may be incomplete", path or "<source>")
    return tree


def node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def node_range(start: Node, end: Node | None = None) -> Range:
    """Range covering ``start`` through ``end`` (defaults to ``start`` alone)."""
    end = end or start
    return Range(
        start_byte=start.start_byte,
        end_byte=end.end_byte,
        start_point=Position(row=start.start_point[0], column=start.start_point[1]),
        end_point=Position(row=end.end_point[0], column=end.end_point[1]),
    )


def split_lines(text: str) -> list[str]:
    """Split on "\n" only, the sole row separator tree-sitter knows."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def line_text(source: str, row: int) -> str:
    lines = split_lines(source)
    return lines[row] if 0 <= row < len(lines) else ""
