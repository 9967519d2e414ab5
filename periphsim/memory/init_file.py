"""Loader for $readmemh-style memory initialization files.

Format:
  - One hex word per whitespace-separated token ("_" separators allowed)
  - "//" starts a comment running to end of line
  - "@<hex>" moves the load address
Cells the file never writes stay zero.
"""

from __future__ import annotations

from pathlib import Path

from periphsim.core.bitvec import check_width
from periphsim.core.exceptions import InvalidConfig


def parse_init_text(text: str, depth: int, word_width: int, source: str = "<init>") -> list[int]:
    cells = [0] * depth
    address = 0
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.split("//", 1)[0]
        for token in line.split():
            where = f"{source}:{lineno}"
            if token.startswith("@"):
                address = _parse_hex(token[1:], where)
                continue
            if address >= depth:
                raise InvalidConfig(
                    "init_file", f"{where}: address {address} beyond depth {depth}"
                )
            cells[address] = check_width(
                _parse_hex(token, where), word_width, f"{where} word"
            )
            address += 1
    return cells


def _parse_hex(token: str, where: str) -> int:
    try:
        return int(token.replace("_", ""), 16)
    except ValueError as exc:
        raise InvalidConfig("init_file", f"{where}: bad hex token {token!r}") from exc


def load_init_file(path: str | Path, depth: int, word_width: int) -> list[int]:
    """Read an init file and return depth cell values.

    Raises:
        InvalidConfig: If the file cannot be read or parsed
        WidthMismatch: If a word is wider than word_width
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfig("init_file", f"cannot read {p}: {exc}") from exc
    return parse_init_text(text, depth, word_width, source=p.name)
