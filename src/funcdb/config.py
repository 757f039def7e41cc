"""Project configuration loader for funcdb.

Reads ``funcdb.toml`` from the project root.  Each target names its function
list CSV and the address base that on-disk addresses are relative to::

    [targets.main]
    functions_csv = "data/data_functions.csv"
    address_base = 0x7100000000

Usage::

    from funcdb.config import load_config

    cfg = load_config(target="main")
    functions = load_functions(cfg.functions_csv, cfg.address_base)

Nothing is loaded at import time: commands load the
config and pass the path and base to the registry functions.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from funcdb.registry.records import ADDRESS_BASE

CONFIG_NAME = "funcdb.toml"


@dataclass
class ProjectConfig:
    """Parsed project configuration with resolved paths."""

    # Directory containing funcdb.toml
    root: Path

    # Key under [targets]
    target_name: str = ""

    functions_csv: Path = field(default_factory=lambda: Path())
    address_base: int = ADDRESS_BASE

    all_targets: List[str] = field(default_factory=list)


def _resolve(root: Path, rel: str) -> Path:
    """Resolve a path relative to project root."""
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _parse_base(value: object) -> int:
    """Accept an integer or a hex string such as ``"0x7100000000"``."""
    if isinstance(value, bool):
        raise ValueError(f"address_base must be an integer, got {value!r}")
    if isinstance(value, int):
        base = value
    elif isinstance(value, str):
        try:
            base = int(value, 16) if value.lower().startswith("0x") else int(value)
        except ValueError:
            raise ValueError(f"address_base is not a number: {value!r}") from None
    else:
        raise ValueError(f"address_base must be an integer, got {value!r}")
    if base < 0:
        raise ValueError(f"address_base must not be negative, got {value!r}")
    return base


def _find_root(start: Optional[Path] = None) -> Path:
    """Walk up from *start* (or cwd) to find funcdb.toml, like git finds .git/."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_NAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_NAME} in any parent of the current directory. "
        f"Run funcdb commands from within a project that contains {CONFIG_NAME}."
    )


def load_config(
    root: Optional[Path] = None,
    target: Optional[str] = None,
) -> ProjectConfig:
    """Load funcdb.toml.

    Args:
        root: Project root directory.  Auto-detected if ``None``.
        target: Name of the target to load (key under ``[targets]``).
                Defaults to the first target defined in the file.
    """
    root = _find_root(root)
    toml_path = root / CONFIG_NAME
    if not toml_path.exists():
        raise FileNotFoundError(f"Config not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    targets_dict = raw.get("targets", {})
    if not targets_dict:
        raise KeyError(f"{CONFIG_NAME} has no [targets] section")
    all_target_names = list(targets_dict.keys())

    if target is None:
        target = all_target_names[0]
    if target not in targets_dict:
        raise KeyError(
            f"Target '{target}' not found in {CONFIG_NAME}.  "
            f"Available targets: {all_target_names}"
        )
    tgt = targets_dict[target]

    return ProjectConfig(
        root=root,
        target_name=target,
        functions_csv=_resolve(root, tgt.get("functions_csv", "data/data_functions.csv")),
        address_base=_parse_base(tgt.get("address_base", ADDRESS_BASE)),
        all_targets=all_target_names,
    )
