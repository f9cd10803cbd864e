"""Tests for CLI integration (subprocess-based)."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
CLI_PATH = PROJECT_ROOT / "cli.py"
PRESET_PATH = PROJECT_ROOT / "data" / "parties" / "megamon_buffed.yaml"


def _run_cli(*args, timeout=30):
    """Run CLI command and return CompletedProcess."""
    cmd = [sys.executable, str(CLI_PATH)] + list(args)
    return subprocess.run(
        cmd, capture_output=True, text=True, timeout=timeout, cwd=str(PROJECT_ROOT)
    )


def test_calc_defaults_exits_0():
    result = _run_cli("calc")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "876" in result.stdout


def test_calc_with_flags():
    result = _run_cli("calc", "--battle", "megamon", "--slot", "1", "--speed", "1000")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    for value in ("832", "692", "575"):
        assert value in result.stdout


def test_calc_single_buff_flag():
    result = _run_cli("calc", "--battle", "megamon", "--slot", "2", "--speed", "777",
                      "--buff", "1=150", "--buff", "3=200", "--buff", "4=80")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "Slot 4 (80%)" in result.stdout
    assert "671" in result.stdout


@pytest.mark.skipif(not PRESET_PATH.exists(), reason="megamon_buffed.yaml not found")
def test_calc_from_config_and_export(tmp_path):
    out = tmp_path / "out.json"
    result = _run_cli("calc", "--config", str(PRESET_PATH), "--export-json", str(out))
    assert result.returncode == 0, f"stderr: {result.stderr}"
    data = json.loads(out.read_text())
    assert data["result"]["raw_speeds"] == [622, 777, 323, 671]


def test_calc_save(tmp_path):
    out = tmp_path / "party.yaml"
    result = _run_cli("calc", "--speed", "900", "--save", str(out))
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "anchor_speed: 900" in out.read_text()


def test_invalid_speed_exits_1():
    result = _run_cli("calc", "--speed", "0")
    assert result.returncode == 1
    assert "Error:" in result.stdout


def test_invalid_buff_exits_1():
    result = _run_cli("calc", "--buffs", "100,100,400,100")
    assert result.returncode == 1
    assert "Buff for slot 3" in result.stdout


def test_table_shows_every_anchor():
    result = _run_cli("table", "--battle", "megamon")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    for slot in range(1, 5):
        assert f"anchor {slot}" in result.stdout


def test_presets_lists_bundled_files():
    result = _run_cli("presets")
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "default.yaml" in result.stdout


def test_no_command_prints_help():
    result = _run_cli()
    assert result.returncode == 0
    assert "usage" in result.stdout.lower()


def test_huge_factor_exits_1():
    result = _run_cli("calc", "--factor", "1e308")
    assert result.returncode == 1
    assert "Error:" in result.stdout
    assert "Traceback" not in result.stderr


@pytest.mark.parametrize("content", ["name: [unclosed\n", "- 100\n- 200\n",
                                     "buffs: [fast, 100, 100, 100]\n"])
def test_bad_config_file_exits_1(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    result = _run_cli("calc", "--config", str(path))
    assert result.returncode == 1
    assert "Error:" in result.stdout
    assert "Traceback" not in result.stderr


def test_config_directory_exits_1(tmp_path):
    result = _run_cli("calc", "--config", str(tmp_path))
    assert result.returncode == 1
    assert "Error:" in result.stdout


def test_config_buffs_with_percent_strings(tmp_path):
    path = tmp_path / "pct.yaml"
    path.write_text("buffs: ['100%', 100, 100, 100]\n")
    result = _run_cli("calc", "--config", str(path))
    assert result.returncode == 0, f"stderr: {result.stderr}"
    assert "876" in result.stdout
