"""registry/lookup.py - Address and name lookups over a loaded function list.

Name resolution tries an exact match first and falls back to a substring
search in demangled names. Both passes are parallel scans where the first
worker to hit wins, so with several qualifying functions the one returned is
not necessarily the first in file order.
"""

import os
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

from itanium_demangler import parse as _parse_mangled

from funcdb.errors import DemangleError
from funcdb.registry.records import FunctionInfo

# Slices handed out per worker thread.
_SLICES_PER_JOB = 4


def make_known_function_map(functions: list[FunctionInfo]) -> dict[int, FunctionInfo]:
    """Map relative address -> function, for named functions only."""
    return {info.addr: info for info in functions if info.name}


def demangle(name: str) -> str:
    """Demangle an Itanium C++ symbol."""
    if not name.startswith("_Z"):
        raise DemangleError("not an external mangled name")
    # The parser has no error type of its own and fails in arbitrary ways on bad input.
    try:
        node = _parse_mangled(name)
    except Exception as exc:
        raise DemangleError(f"cannot demangle {name!r}: {exc}") from exc
    if node is None:
        raise DemangleError(f"cannot demangle {name!r}")
    return str(node)


def _demangled_or_empty(name: str) -> str:
    try:
        return demangle(name)
    except DemangleError:
        return ""


def _default_jobs() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


def _par_find_any(
    functions: list[FunctionInfo],
    predicate: Callable[[FunctionInfo], bool],
    jobs: int | None = None,
) -> FunctionInfo | None:
    """Return some function satisfying *predicate*, or None.

    The list is split into disjoint slices scanned on a thread pool. A hit
    sets a stop flag that other workers check before each element.
    """
    count = len(functions)
    if count == 0:
        return None
    jobs = jobs or _default_jobs()
    chunk = max(1, -(-count // (jobs * _SLICES_PER_JOB)))
    stop = threading.Event()

    def scan(start: int, end: int) -> FunctionInfo | None:
        for i in range(start, end):
            if stop.is_set():
                return None
            info = functions[i]
            if predicate(info):
                stop.set()
                return info
        return None

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        futures = [
            executor.submit(scan, start, min(start + chunk, count))
            for start in range(0, count, chunk)
        ]
        for fut in as_completed(futures):
            found = fut.result()
            if found is not None:
                stop.set()
                for pending in futures:
                    pending.cancel()
                return found
    return None


def find_function_fuzzy(
    functions: list[FunctionInfo], name: str, jobs: int | None = None
) -> FunctionInfo | None:
    """Find a function by exact name, else by substring of its demangled name."""
    found = _par_find_any(functions, lambda info: info.name == name, jobs)
    if found is not None:
        return found
    # Demangling is the slow path; only taken when no name matches exactly.
    return _par_find_any(functions, lambda info: name in _demangled_or_empty(info.name), jobs)
