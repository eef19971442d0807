import shutil

import pytest


@pytest.fixture(autouse=True)
def _require_cpp() -> None:
    if shutil.which("cpp") is None:
        pytest.skip("no C preprocessor (cpp) on PATH")
