from typing import Protocol


class Preprocessor(Protocol):
    def expand(self, source_text: str, debug_mode: bool = False) -> str: ...
