import logging
from pathlib import Path

from c_lint.core.parsing import node_text, parse_source, read_source
from c_lint.errors import CircularIncludeError

logger = logging.getLogger(__name__)


def local_includes(source: str, path: Path | None = None) -> list[str]:
    """Return the quoted ``#include`` paths at the top level of ``source``.

    Angle-bracket (system) includes are ignored.
    """
    tree = parse_source(source, path)
    includes: list[str] = []
    for node in tree.root_node.children:
        if node.type != "preproc_include":
            continue
        path_node = node.child_by_field_name("path")
        if path_node is None or path_node.type != "string_literal":
            continue
        includes.append(node_text(path_node)[1:-1])
    return includes


def resolve_includes(root: Path | str, base_dir: Path | str | None = None) -> frozenset[Path]:
    """Collect ``root`` and every file reachable from it through local includes.

    ``root`` is taken relative to ``base_dir`` (the current directory when omitted);
    each include is taken relative to the directory of the file that includes it.
    Paths are canonicalised, so a file reached twice is listed once.
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    start = (base / root).resolve()
    visited: set[Path] = set()
    _visit(start, visited, [])
    logger.debug("Resolved %d file(s) from %s", len(visited), start)
    return frozenset(visited)


def _visit(path: Path, visited: set[Path], chain: list[Path]) -> None:
    if path in chain:
        raise CircularIncludeError([*chain[chain.index(path) :], path])
    if path in visited:
        return
    visited.add(path)
    chain.append(path)
    source = read_source(path)
    for include in local_includes(source, path):
        _visit((path.parent / include).resolve(), visited, chain)
    chain.pop()
