import pytest
from typer.testing import CliRunner

from capl_format.cli import app

runner = CliRunner()

NEEDS_FORMATTING = 'on start\n{\nwrite("a");\n}\n'
ALREADY_FORMATTED = 'on start\n{\n  write("b");\n}\n'


@pytest.fixture
def project(tmp_path, monkeypatch):
    (tmp_path / "a.can").write_text(NEEDS_FORMATTING)
    (tmp_path / "b.can").write_text(ALREADY_FORMATTED)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "--list-different" in result.stdout


def test_cli_requires_input(project):
    result = runner.invoke(app, [])
    assert result.exit_code == 2
    assert "Provide files or use --stdin" in result.output


def test_list_different(project):
    result = runner.invoke(app, ["--list-different", "a.can", "b.can"])
    assert result.exit_code == 1
    assert result.stdout == "a.can\n"
    assert (project / "a.can").read_text() == NEEDS_FORMATTING


def test_list_different_all_formatted(project):
    result = runner.invoke(app, ["-l", "b.can"])
    assert result.exit_code == 0
    assert result.stdout == ""


def test_write(project):
    b_mtime = (project / "b.can").stat().st_mtime_ns
    result = runner.invoke(app, ["--write", "*.can"])

    assert result.exit_code == 0
    assert (project / "a.can").read_text() == 'on start\n{\n  write("a");\n}\n'
    assert (project / "b.can").read_text() == ALREADY_FORMATTED
    assert (project / "b.can").stat().st_mtime_ns == b_mtime
    lines = result.stdout.splitlines()
    assert lines[0].startswith("a.can ") and lines[0].endswith("ms")
    assert lines[1].startswith("b.can ") and lines[1].endswith("ms")


def test_write_with_debug_check_is_fatal(project):
    result = runner.invoke(app, ["--write", "--debug-check", "a.can"])
    assert result.exit_code == 3
    assert "Cannot use --write and --debug-check together." in result.output
    assert (project / "a.can").read_text() == NEEDS_FORMATTING


def test_glob_without_matches(project):
    result = runner.invoke(app, ["*.nothing"])
    assert result.exit_code == 0
    assert result.output == ""


def test_prints_formatted_output(project):
    result = runner.invoke(app, ["a.can"])
    assert result.exit_code == 0
    assert result.stdout == 'on start\n{\n  write("a");\n}\n'


def test_format_options_from_flags(project):
    result = runner.invoke(app, ["--indent-size", "4", "a.can"])
    assert result.stdout == 'on start\n{\n    write("a");\n}\n'


def test_format_options_from_config_file(project):
    (project / ".capl-format.toml").write_text("use_tabs = true\n")
    result = runner.invoke(app, ["a.can"])
    assert result.stdout == 'on start\n{\n\twrite("a");\n}\n'


def test_malformed_config_is_fatal(project):
    (project / ".capl-format.toml").write_text("use_tabs = = true\n")
    result = runner.invoke(app, ["a.can"])
    assert result.exit_code == 3
    assert "Unable to load config file" in result.output


def test_invalid_option_is_fatal_and_stops_the_run(project):
    result = runner.invoke(app, ["--write", "--parser", "python", "a.can", "b.can"])
    assert result.exit_code == 3
    assert result.output.count("Validation Error") == 1
    assert "a.can:" not in result.output
    assert (project / "a.can").read_text() == NEEDS_FORMATTING


def test_parse_error_exit_code(project):
    (project / "bad.c").write_text("int main( {\n")
    result = runner.invoke(app, ["--write", "bad.c", "a.can"])
    assert result.exit_code == 2
    assert "bad.c: " in result.output
    assert (project / "a.can").read_text() == 'on start\n{\n  write("a");\n}\n'


def test_missing_file(project):
    result = runner.invoke(app, ["missing.can"])
    assert result.exit_code == 2
    assert "Unable to read file: missing.can" in result.output


def test_dependency_dirs_are_skipped(project):
    (project / "node_modules").mkdir()
    (project / "node_modules" / "c.can").write_text(NEEDS_FORMATTING)

    result = runner.invoke(app, ["-l", "**/*.can"])
    assert result.stdout == "a.can\n"

    result = runner.invoke(app, ["-l", "--with-dependency-dirs", "**/*.can"])
    assert result.stdout.splitlines() == ["a.can", "node_modules/c.can"]


def test_debug_check(project):
    (project / "f.can").write_text("void f()\n{\nx();\n}\n")
    (project / "g.c").write_text("int g(void)\n{\n  return 1;\n}\n")
    result = runner.invoke(app, ["--debug-check", "f.can", "g.c"])
    assert result.exit_code == 0
    assert result.stdout == "f.can\ng.c\n"


def test_debug_print_doc(project):
    result = runner.invoke(app, ["--debug-print-doc", "a.can"])
    assert result.exit_code == 0
    assert result.stdout == '[\n  "on start",\n  "{",\n  indent(1, "write(\\"a\\");"),\n  "}",\n]\n'


def test_stdin(project):
    result = runner.invoke(app, ["--stdin"], input=NEEDS_FORMATTING)
    assert result.exit_code == 0
    assert result.stdout == 'on start\n{\n  write("a");\n}\n'


def test_stdin_parse_error_uses_stdin_label(project):
    result = runner.invoke(app, ["--stdin", "--stdin-filepath", "x.c"], input="int main( {\n")
    assert result.exit_code == 2
    assert "stdin: " in result.output


def test_stdin_that_is_not_utf8(project):
    result = runner.invoke(app, ["--stdin"], input=b"int x;\xff\n")
    assert result.exit_code == 2
    assert "Unable to read file: stdin" in result.output
