"""registry/writer.py - Serialize the function list back to CSV.

Always a full rewrite: the new contents go to a temporary sibling file that
replaces the original only once everything has been written.
"""

import contextlib
import csv
import io
import os
from pathlib import Path

from funcdb.errors import FormatError
from funcdb.registry.records import ADDRESS_BASE, CSV_HEADER, FunctionInfo, encode_record


def format_functions(functions: list[FunctionInfo], base: int = ADDRESS_BASE) -> str:
    """Return the CSV text for *functions*, header included."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONE, quotechar=None, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for info in functions:
        try:
            writer.writerow(encode_record(info, base))
        except csv.Error as exc:
            # Quoting is disabled, so delimiters and newlines cannot be escaped.
            raise FormatError(f"cannot write function name {info.name!r}: {exc}") from exc
    return buf.getvalue()


def write_functions(
    csv_path: Path, functions: list[FunctionInfo], base: int = ADDRESS_BASE
) -> None:
    """Replace *csv_path* with the serialized *functions*."""
    text = format_functions(functions, base)
    tmp_path = csv_path.with_suffix(csv_path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.replace(tmp_path, csv_path)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise
