import logging
from pathlib import Path
from typing import Optional

import typer

from .config import DEFAULT_CONFIG_FILE, ConfigError, FormatConfig
from .errors import RunAborted
from .exit_codes import ExitCode
from .options import FormatOptions, RunOptions, merge_options
from .runner import RunController

app = typer.Typer(help="CAPL Formatter - Format CAPL and C source files")


@app.command()
def main(
    patterns: list[str] = typer.Argument(None, help="Files or glob patterns to format"),
    write: bool = typer.Option(False, "--write", help="Edit files in place"),
    list_different: bool = typer.Option(
        False, "--list-different", "-l", help="Print the names of files that are not formatted"
    ),
    stdin: bool = typer.Option(False, "--stdin", help="Read input from stdin"),
    stdin_filepath: Optional[str] = typer.Option(
        None, "--stdin-filepath", help="Path used to pick the parser for stdin input"
    ),
    debug_check: bool = typer.Option(
        False, "--debug-check", help="Check that formatting is stable and keeps the syntax tree"
    ),
    debug_print_doc: bool = typer.Option(False, "--debug-print-doc", help="Print the intermediate layout"),
    with_dependency_dirs: bool = typer.Option(
        False, "--with-dependency-dirs", help="Also process files inside dependency directories"
    ),
    config_file: Path = typer.Option(DEFAULT_CONFIG_FILE, "--config", help="Path to config file"),
    print_width: Optional[int] = typer.Option(None, "--print-width", help="Preferred line length"),
    indent_size: Optional[int] = typer.Option(None, "--indent-size", help="Spaces per indentation level"),
    use_tabs: Optional[bool] = typer.Option(None, "--use-tabs/--no-use-tabs", help="Indent with tabs"),
    quote_style: Optional[str] = typer.Option(None, "--quote-style", help="double or single"),
    parser: Optional[str] = typer.Option(None, "--parser", help="capl or c (default: inferred)"),
    cursor_offset: Optional[int] = typer.Option(
        None, "--cursor-offset", help="Print the adjusted cursor offset to stderr"
    ),
    range_start: Optional[int] = typer.Option(None, "--range-start", help="Format from this offset"),
    range_end: Optional[int] = typer.Option(None, "--range-end", help="Format up to this offset"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Format CAPL files, check them, or rewrite them in place"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s: %(message)s"
    )

    if not patterns and not stdin:
        typer.echo("Error: Provide files or use --stdin", err=True)
        raise typer.Exit(code=int(ExitCode.FAILURE))

    try:
        config = FormatConfig(config_file)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=int(ExitCode.FATAL))

    cli_values = {
        "print_width": print_width,
        "indent_size": indent_size,
        "use_tabs": use_tabs,
        "quote_style": quote_style,
        "parser": parser,
        "cursor_offset": cursor_offset,
        "range_start": range_start,
        "range_end": range_end,
        "filepath": stdin_filepath if stdin else None,
    }
    format_options = FormatOptions(merge_options(config.options, cli_values))
    run_options = RunOptions(
        patterns=tuple(patterns or ()),
        write=write,
        list_different=list_different,
        ignore_dependency_dirs=not with_dependency_dirs,
        dependency_dirs=config.ignore_dirs,
        stdin=stdin,
        debug_check=debug_check,
        debug_print_doc=debug_print_doc,
    )

    try:
        code = RunController(run_options, format_options).run()
    except RunAborted as e:
        raise typer.Exit(code=int(e.exit_code))
    raise typer.Exit(code=int(code))


if __name__ == "__main__":
    app()
