"""
Intcode VM — Program Loader

Program text is a comma-separated list of signed decimal integers:

    1,9,10,3,2,3,11,0,99,30,40,50

Whitespace around each token (including the trailing newline of an
input file) is ignored. Anything else (empty tokens, floats, hex,
underscores) is a LoadError raised before the program runs.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from .faults import LoadError

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r'[+-]?[0-9]+')


def parse_program(text: str) -> List[int]:
    """Parse program text into a list of integers."""
    if not text.strip():
        raise LoadError("Program text is empty")

    program = []
    for index, raw in enumerate(text.split(',')):
        token = raw.strip()
        if not _INT_RE.fullmatch(token):
            raise LoadError("not a signed decimal integer", index, token)
        program.append(int(token))
    return program


def read_program_file(path: Union[str, Path]) -> List[int]:
    """Read and parse a program file."""
    text = Path(path).read_text(encoding='utf-8')
    program = parse_program(text)
    logger.debug(f"Loaded {path}: {len(program)} words")
    return program


def format_program(program: Iterable[int]) -> str:
    """Inverse of parse_program."""
    return ','.join(str(v) for v in program)
