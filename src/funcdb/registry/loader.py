"""registry/loader.py - Read and validate the function list CSV.

The whole file is parsed before anything is returned: a bad row, a decompiled
function without a name, or a duplicated name aborts the load.
"""

import csv
from pathlib import Path

from funcdb.errors import DuplicateNames, FormatError, MissingName, RegistryError
from funcdb.registry.records import (
    ADDRESS_BASE,
    CSV_HEADER,
    FunctionInfo,
    decode_record,
    to_absolute,
)


def _check_header(row: list[str]) -> None:
    if len(row) != len(CSV_HEADER):
        raise FormatError("invalid record; expected 4 fields", line=1)
    if tuple(row) != CSV_HEADER:
        raise FormatError(
            "wrong CSV format; expected the 'Address,Quality,Size,Name' function list "
            "format (the legacy headerless format is not supported)",
            line=1,
        )


def validate_functions(functions: list[FunctionInfo], base: int = ADDRESS_BASE) -> None:
    """Check registry-wide invariants.

    Raises :class:`MissingName` for the first decompiled function without a
    name, then :class:`DuplicateNames` listing every repeated name.
    """
    known_names: set[str] = set()
    duplicates: dict[str, None] = {}
    for info in functions:
        if not info.name:
            if info.is_decompiled:
                raise MissingName(to_absolute(info.addr, base))
            continue
        if info.name in known_names:
            duplicates[info.name] = None
        else:
            known_names.add(info.name)

    if duplicates:
        raise DuplicateNames(list(duplicates))


def load_functions(csv_path: Path, base: int = ADDRESS_BASE) -> list[FunctionInfo]:
    """Return all functions listed in *csv_path*, in file order.

    An empty file has no header to check and yields no functions.
    """
    result: list[FunctionInfo] = []
    append = result.append

    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.reader(f, quoting=csv.QUOTE_NONE)

        try:
            header = next(reader, None)
            if header is None:
                return result
            _check_header(header)

            for row in reader:
                if not row:
                    continue
                append(decode_record(row, base))
        except RegistryError as exc:
            exc.line = reader.line_num
            raise
        except csv.Error as exc:
            raise FormatError(str(exc), line=reader.line_num) from exc
        except UnicodeDecodeError as exc:
            # Decoding runs ahead of the reader in chunks, so no reliable line number.
            raise FormatError(f"file is not valid UTF-8: {exc}") from exc

    validate_functions(result, base)
    return result
