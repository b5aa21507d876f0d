"""Test the line-mode read-eval-print loop."""

import io

from evilined.repl import Repl, banner
from evilined.session import EditorSession


def run_repl(input_text, lines=None, show_banner=False):
    session = EditorSession(lines=lines)
    stdout = io.StringIO()
    repl = Repl(session, stdin=io.StringIO(input_text), stdout=stdout)
    code = repl.run(show_banner=show_banner)
    return code, stdout.getvalue(), session


def test_quit_returns_zero():
    """Test that Q ends the loop with status 0."""
    code, output, _ = run_repl("Q\n")
    assert code == 0
    assert output.startswith("Lines: 0  File: (none)\n* ")


def test_end_of_input_ends_loop():
    """Test that end of input ends the loop."""
    code, output, _ = run_repl("")
    assert code == 0


def test_status_after_each_command():
    """Test that the status line follows every command."""
    _, output, _ = run_repl("L\nQ\n", lines=["a"])
    assert output.count("Lines: 1  File: (none)") == 2
    assert "00000: a" in output


def test_insert_session():
    """Test an insert followed by a listing."""
    _, output, session = run_repl("I\nfirst\nsecond\n.\nL\nQ\n")
    assert session.store.lines == ["first", "second"]
    assert "-- Insert at  Line 00000  --" in output
    assert "00001: " in output
    assert "-- inserted 2 line(s)" in output
    assert "00001: second" in output


def test_errors_are_reported_and_loop_continues():
    """Test that a failed command does not end the loop."""
    _, output, session = run_repl("E 5\nI\nx\n.\nQ\n")
    assert "! bad line" in output
    assert session.store.lines == ["x"]


def test_unknown_command_prints_question_mark():
    """Test the reply to an unknown command."""
    _, output, _ = run_repl("Z\nQ\n")
    assert "* ?\n" in output


def test_status_command_shows_last_range():
    """Test that P shows the last range."""
    _, output, _ = run_repl("L 1,2\nP\nQ\n", lines=["a", "b", "c"])
    assert "Range: 1,2" in output


def test_read_line_end_of_input():
    """Test that read_line returns None at end of input."""
    repl = Repl(EditorSession(), stdin=io.StringIO(""), stdout=io.StringIO())
    assert repl.read_line("> ") is None


def test_banner_new_file():
    """Test the banner for a file that does not exist."""
    lines = banner(EditorSession(), "notes.txt")
    text = "\n".join(lines)
    assert "NOTES.TXT" in text
    assert "NEW FILE" in text


def test_banner_existing_file(tmp_path):
    """Test the banner for an existing file."""
    path = tmp_path / "doc.txt"
    path.write_text("a\nb\n")
    session = EditorSession(lines=["a", "b"])
    text = "\n".join(banner(session, str(path)))
    assert "EXISTING FILE (2 LINES)" in text


def test_banner_without_file():
    """Test the banner without a file name."""
    text = "\n".join(banner(EditorSession(), None))
    assert "(NONE)" in text
    assert "NEW FILE" in text


def test_quit_with_unsaved_changes_warns_once():
    """Test that Q after an edit warns and a second Q quits."""
    _, output, session = run_repl("I\nx\n.\nQ\nQ\nL\n")
    assert "! unsaved changes (W to save, Q again to quit)" in output
    assert "00000: x" not in output


def test_quit_warning_is_reset_by_other_commands():
    """Test that a command between two Qs brings the warning back."""
    _, output, _ = run_repl("I\nx\n.\nQ\nP\nQ\nQ\nL\n")
    assert output.count("! unsaved changes") == 2
    assert "00000: x" not in output


def test_quit_after_save(tmp_path):
    """Test that Q quits at once after the buffer is written."""
    path = tmp_path / "out.txt"
    _, output, _ = run_repl(f"I\nx\n.\nW {path}\nQ\nL\n")
    assert "! unsaved changes" not in output
    assert "00000: x" not in output
