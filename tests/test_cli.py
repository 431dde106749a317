import pytest

from reorganizer import cli, exiftool


def _run(argv):
    with pytest.raises(SystemExit) as info:
        cli.main(argv)
    return info.value.code


@pytest.mark.parametrize("argv", [[], ["a", "b"]])
def test_wrong_argument_count_prints_usage_and_exits_zero(argv, capsys):
    assert _run(argv) == 0
    out = capsys.readouterr().out
    assert "Needed only the input of the directory" in out


def test_organizes_directory(tmp_path, make_jpeg, capsys):
    make_jpeg(tmp_path / "a.JPG", date="2020:01:15 08:30:00")
    (tmp_path / "c.txt").write_text("c")

    assert _run([str(tmp_path), "--no-progress"]) == 0

    out = capsys.readouterr().out
    assert "Starting to organize. 2 files to organize." in out
    assert "Organized 2 files (0 skipped)." in out
    assert "  by_date: 1" in out
    assert "  others: 1" in out
    assert (tmp_path / "2020" / "1" / "15" / "a.JPG").exists()
    assert (tmp_path / "others" / "c.txt").exists()


def test_missing_directory_exits_nonzero(tmp_path, capsys):
    assert _run([str(tmp_path / "nope"), "--no-progress"]) == 1
    assert "ERROR:" in capsys.readouterr().err


def test_exiftool_reader_requires_binary(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(exiftool, "has_exiftool", lambda: False)
    assert _run([str(tmp_path), "--reader", "exiftool", "--no-progress"]) == 1
    assert "exiftool not found" in capsys.readouterr().err


def test_skipped_files_are_listed(tmp_path, monkeypatch, capsys):
    (tmp_path / "a.txt").write_text("a")

    def failing_move(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(cli.organize_mod.shutil, "move", failing_move)
    assert _run([str(tmp_path), "--no-progress"]) == 0
    out = capsys.readouterr().out
    assert "Organized 0 files (1 skipped)." in out
    assert "SKIPPED" in out and "a.txt" in out
