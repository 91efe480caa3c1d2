"""
In-place text surgery on files generated by upstream tools.

A patch that changes nothing is always an error: it means the anchor text
the patch expects is gone from the upstream output.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Union

from loguru import logger

from appforge.errors import ExecutionError, NoMatchError

Pattern = Union[str, re.Pattern]
Replacement = Union[str, Callable[[re.Match], str]]


def replace(path: Path | str, pattern: Pattern, replacement: Replacement, *, count: int = 0) -> int:
    """
    Substitute pattern in the file at path and write it back.

    A str pattern is matched literally and its replacement is inserted
    verbatim; a compiled pattern is a regex and a str replacement may use
    backreferences. count=0 replaces every match, count=1 only the first.
    Returns the number of substitutions; raises NoMatchError if there were none.
    """
    path = Path(path)
    try:
        src = path.read_text()
    except OSError as e:
        raise ExecutionError(f"Could not read {path}: {e}") from e

    if isinstance(pattern, str):
        regex = re.compile(re.escape(pattern))
        if isinstance(replacement, str):
            literal = replacement
            replacement = lambda _m: literal  # noqa: E731
    else:
        regex = pattern

    patched, n = regex.subn(replacement, src, count=count)
    if n == 0:
        raise NoMatchError(path, pattern)

    try:
        path.write_text(patched)
    except OSError as e:
        raise ExecutionError(f"Could not write {path}: {e}") from e
    logger.debug(f"[PATCH] {path}: {n} substitution(s)")
    return n
