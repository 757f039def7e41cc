"""Tests for the funcdb.toml config loader."""

import os
from pathlib import Path

import pytest

from funcdb.config import ProjectConfig, _find_root, _parse_base, _resolve, load_config
from funcdb.registry import ADDRESS_BASE

# ---------------------------------------------------------------------------
# Helper: create a temp funcdb.toml and return the root dir
# ---------------------------------------------------------------------------


def _make_project(tmp_path: Path, toml_content: str) -> Path:
    """Write a funcdb.toml and return the directory."""
    (tmp_path / "funcdb.toml").write_text(toml_content)
    return tmp_path


# ---------------------------------------------------------------------------
# _resolve() / _parse_base()
# ---------------------------------------------------------------------------


class TestResolve:
    def test_relative_path(self, tmp_path: Path):
        assert _resolve(tmp_path, "data/functions.csv") == tmp_path / "data" / "functions.csv"

    def test_absolute_path(self, tmp_path: Path):
        assert _resolve(tmp_path, "/abs/functions.csv") == Path("/abs/functions.csv")


class TestParseBase:
    def test_int(self):
        assert _parse_base(0x7100000000) == 0x7100000000

    def test_hex_string(self):
        assert _parse_base("0x7100000000") == 0x7100000000

    def test_decimal_string(self):
        assert _parse_base("4096") == 4096

    @pytest.mark.parametrize("value", ["0xzz", "abc", -1, 1.5, True, [1]])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            _parse_base(value)


# ---------------------------------------------------------------------------
# _find_root()
# ---------------------------------------------------------------------------


class TestFindRoot:
    def test_explicit_root(self, tmp_path: Path):
        assert _find_root(tmp_path) == tmp_path

    def test_auto_detect_from_subdir(self, tmp_path: Path):
        _make_project(tmp_path, "[targets.main]\n")
        sub = tmp_path / "src" / "deep"
        sub.mkdir(parents=True)
        old_cwd = os.getcwd()
        try:
            os.chdir(sub)
            assert _find_root() == tmp_path.resolve()
        finally:
            os.chdir(old_cwd)


# ---------------------------------------------------------------------------
# load_config()
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path):
        root = _make_project(tmp_path, "[targets.main]\n")
        cfg = load_config(root=root)
        assert isinstance(cfg, ProjectConfig)
        assert cfg.target_name == "main"
        assert cfg.functions_csv == root / "data" / "data_functions.csv"
        assert cfg.address_base == ADDRESS_BASE
        assert cfg.all_targets == ["main"]

    def test_explicit_values(self, tmp_path: Path):
        root = _make_project(
            tmp_path,
            '[targets.game]\nfunctions_csv = "lists/game.csv"\naddress_base = 0x10000000\n',
        )
        cfg = load_config(root=root)
        assert cfg.functions_csv == root / "lists" / "game.csv"
        assert cfg.address_base == 0x10000000

    def test_hex_string_base(self, tmp_path: Path):
        root = _make_project(tmp_path, '[targets.main]\naddress_base = "0x7100000000"\n')
        assert load_config(root=root).address_base == 0x7100000000

    def test_select_target(self, tmp_path: Path):
        root = _make_project(
            tmp_path,
            '[targets.a]\nfunctions_csv = "a.csv"\n\n[targets.b]\nfunctions_csv = "b.csv"\n',
        )
        assert load_config(root=root).target_name == "a"
        cfg = load_config(root=root, target="b")
        assert cfg.target_name == "b"
        assert cfg.functions_csv == root / "b.csv"
        assert cfg.all_targets == ["a", "b"]

    def test_unknown_target(self, tmp_path: Path):
        root = _make_project(tmp_path, "[targets.main]\n")
        with pytest.raises(KeyError, match="nope"):
            load_config(root=root, target="nope")

    def test_no_targets(self, tmp_path: Path):
        root = _make_project(tmp_path, "[other]\nkey = 1\n")
        with pytest.raises(KeyError, match="targets"):
            load_config(root=root)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(root=tmp_path)

    def test_bad_base(self, tmp_path: Path):
        root = _make_project(tmp_path, '[targets.main]\naddress_base = "nothex"\n')
        with pytest.raises(ValueError):
            load_config(root=root)
