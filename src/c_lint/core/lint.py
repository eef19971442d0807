import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from c_lint.config import Settings, get_settings
from c_lint.core.checks import check_function_comments, check_global_variables
from c_lint.core.complexity import check_function_complexity
from c_lint.core.identifiers import check_case_consistency, classify_identifiers
from c_lint.core.includes import resolve_includes
from c_lint.core.parsing import parse_source, read_source
from c_lint.core.ports.preprocessor import Preprocessor
from c_lint.core.preprocess import CommandPreprocessor
from c_lint.core.realign import realign
from c_lint.errors import ParseError, PreprocessError
from c_lint.models import FileError, Identifier, Lint, LintResult

logger = logging.getLogger(__name__)

PreprocessorFactory = Callable[[Path], Preprocessor]


@dataclass
class _FileReport:
    lints: list[Lint] = field(default_factory=list)
    identifiers: list[Identifier] = field(default_factory=list)
    error: FileError | None = None


def discover_files(paths: Iterable[Path | str], base_dir: Path | str | None = None) -> list[Path]:
    files: set[Path] = set()
    for path in paths:
        files |= resolve_includes(path, base_dir)
    return sorted(files)


def _command_preprocessor_factory(settings: Settings) -> PreprocessorFactory:
    def _factory(path: Path) -> Preprocessor:
        return CommandPreprocessor(
            settings.preprocessor,
            base_dir=path.parent,
            timeout=settings.preprocess_timeout,
            path=path,
        )

    return _factory


def lint_file(path: Path, preprocessor: Preprocessor) -> _FileReport:
    report = _FileReport()
    source = read_source(path)
    tree = parse_source(source, path)
    report.lints.extend(check_global_variables(tree, source, path))
    report.lints.extend(check_function_comments(tree, source, path))
    macro_lints, identifiers = classify_identifiers(tree, source, path)
    report.lints.extend(macro_lints)
    report.identifiers.extend(identifiers)

    try:
        virtual_source = realign(preprocessor.expand(source))
        virtual_tree = parse_source(virtual_source, path)
    except (PreprocessError, ParseError) as exc:
        logger.warning("Skipping complexity check: %s", exc)
        report.error = FileError(file=path, message=f"complexity check skipped: {exc.message}")
        return report
    report.lints.extend(check_function_complexity(virtual_tree, virtual_source, path))
    return report


def _sort_key(lint: Lint) -> tuple[str, int, int]:
    return (str(lint.file), lint.range.start_point.row, lint.range.start_point.column)


def run_lint(
    paths: Iterable[Path | str],
    settings: Settings | None = None,
    preprocessor_factory: PreprocessorFactory | None = None,
    base_dir: Path | str | None = None,
) -> LintResult:
    """Lint the translation units rooted at ``paths``.

    Errors while building the file set propagate and abort the run. Preprocessing
    failures only drop the complexity check of the affected file and are listed in
    ``LintResult.errors``.
    """
    settings = settings or get_settings()
    factory = preprocessor_factory or _command_preprocessor_factory(settings)
    files = discover_files(paths, base_dir)
    logger.debug("Linting %d file(s) with %d job(s)", len(files), settings.jobs)

    def _lint(path: Path) -> _FileReport:
        return lint_file(path, factory(path))

    if settings.jobs > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=settings.jobs) as executor:
            reports = list(executor.map(_lint, files))
    else:
        reports = [_lint(path) for path in files]

    lints = [lint for report in reports for lint in report.lints]
    lints.extend(check_case_consistency(i for report in reports for i in report.identifiers))
    lints.sort(key=_sort_key)
    errors = [report.error for report in reports if report.error is not None]
    return LintResult(lints=lints, errors=errors, files=files)
