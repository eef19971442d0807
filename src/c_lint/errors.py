"""Error taxonomy for a linting run.

``ReadError``, ``ParseError`` and ``CircularIncludeError`` raised while building the
file set abort the run. ``PreprocessError`` only affects the complexity pass of the
file being preprocessed. ``MalformedDirectiveError`` never leaves the realigner.
``ConfigError`` is raised before any file is read.
"""

from pathlib import Path


class LintError(Exception):
    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(f"{path}: {message}" if path is not None else message)


class ReadError(LintError):
    pass


class ParseError(LintError):
    pass


class CircularIncludeError(LintError):
    def __init__(self, chain: list[Path]) -> None:
        self.chain = chain
        cycle = " -> ".join(str(p) for p in chain)
        super().__init__(f"circular include: {cycle}", chain[-1])


class PreprocessError(LintError):
    pass


class PreprocessTimeoutError(PreprocessError):
    pass


class ConfigError(LintError):
    pass


class MalformedDirectiveError(LintError):
    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"malformed line marker: {line!r}")
