import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from c_lint.errors import PreprocessError, PreprocessTimeoutError

logger = logging.getLogger(__name__)

DEBUG_MACRO = "DEBUG"


class CommandPreprocessor:
    """Macro-expand C text by piping it through an external preprocessor.

    Implements the ``Preprocessor`` protocol. The text is fed on stdin, so line
    markers for it name the ``<stdin>`` pseudo-file. Quoted includes are looked up
    relative to ``base_dir``.
    """

    def __init__(
        self,
        command: Sequence[str] = ("cpp",),
        base_dir: Path | str | None = None,
        timeout: float | None = 30.0,
        path: Path | None = None,
    ) -> None:
        if not command:
            raise ValueError("Preprocessor command must not be empty.")
        self._command = list(command)
        self._base_dir = Path(base_dir) if base_dir is not None else None
        self._timeout = timeout
        self._path = path

    def build_command(self, debug_mode: bool = False) -> list[str]:
        args = list(self._command)
        if debug_mode:
            args.append(f"-D{DEBUG_MACRO}")
        if self._base_dir is not None:
            args.extend(["-I", str(self._base_dir)])
        args.append("-")
        return args

    def expand(self, source_text: str, debug_mode: bool = False) -> str:
        args = self.build_command(debug_mode)
        logger.debug("Running %s", " ".join(args))
        try:
            result = subprocess.run(
                args,
                input=source_text,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=False,
                cwd=str(self._base_dir) if self._base_dir is not None else None,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise PreprocessTimeoutError(
                f"preprocessor did not finish within {self._timeout} seconds", self._path
            ) from exc
        except OSError as exc:
            raise PreprocessError(f"cannot run preprocessor {args[0]!r} ({exc})", self._path) from exc
        if result.returncode != 0:
            stderr = result.stderr.strip().splitlines()
            detail = stderr[0] if stderr else f"exit status {result.returncode}"
            raise PreprocessError(f"preprocessor failed: {detail}", self._path)
        return result.stdout
