import subprocess
import sys


def test_cli_help_runs():
    # 'python -m reorganizer' works whether or not the console script is installed
    cmd = [sys.executable, "-m", "reorganizer", "--help"]
    res = subprocess.run(cmd, capture_output=True, text=True)
    assert res.returncode == 0
    assert "--keep-going" in res.stdout


def test_cli_module_organizes(tmp_path):
    (tmp_path / "notes.txt").write_text("n")
    cmd = [sys.executable, "-m", "reorganizer", str(tmp_path), "--no-progress"]
    res = subprocess.run(cmd, capture_output=True, text=True)
    assert res.returncode == 0
    assert (tmp_path / "others" / "notes.txt").exists()
