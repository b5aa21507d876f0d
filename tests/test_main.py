"""Test the command-line entry point."""

import io
from unittest.mock import patch

import pytest
from evilined.__main__ import main


def run_main(argv, stdin_text="Q\n"):
    stdout = io.StringIO()
    with patch('sys.stdin', io.StringIO(stdin_text)), patch('sys.stdout', stdout):
        with pytest.raises(SystemExit) as exc:
            main(argv)
    return exc.value.code, stdout.getvalue()


def test_version(capsys):
    """Test the --version flag."""
    main(["--version"])
    assert capsys.readouterr().out.startswith("evilined ")


def test_missing_file_starts_empty(tmp_path):
    """Test starting with a file that does not exist yet."""
    missing = tmp_path / "new.txt"
    settings = tmp_path / "settings.json"
    code, output = run_main(["--config", str(settings), str(missing)])
    assert code == 0
    assert f"! couldn't open '{missing}' (starting empty)" in output
    assert f"Lines: 0  File: {missing}" in output


def test_loads_file(tmp_path):
    """Test starting with an existing file."""
    doc = tmp_path / "doc.txt"
    doc.write_text("one\ntwo\n")
    code, output = run_main(["--config", str(tmp_path / "s.json"), str(doc)], "L\nQ\n")
    assert code == 0
    assert "EXISTING FILE (2 LINES)" in output
    assert "00001: two" in output


def test_bad_option():
    """Test that an unknown option exits with usage."""
    with pytest.raises(SystemExit) as exc:
        main(["--bogus"])
    assert exc.value.code == 2


def test_oversized_file_is_not_made_current(tmp_path):
    """Test that a file too large to load is not the target of a bare W."""
    settings = tmp_path / "settings.json"
    settings.write_text('{"max_lines": 3}')
    big = tmp_path / "big.txt"
    big.write_text("1\n2\n3\n4\n5\n")
    code, output = run_main(["--config", str(settings), str(big)], "W\nQ\n")
    assert code == 0
    assert f"! couldn't open '{big}'" in output
    assert "Lines: 0  File: (none)" in output
    assert "! W needs filename (no current file)" in output
    assert big.read_text() == "1\n2\n3\n4\n5\n"
