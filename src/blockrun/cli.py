"""blockrun command-line interface.

Commands:
    list     Show the runnable blocks of a file
    run      Run the block under a line (or by listing index)
    runners  Show the effective language runners
"""

import logging
from pathlib import Path

import typer
from rich.table import Table

from blockrun.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_SIGINT,
    EXIT_SUCCESS,
    _error,
    _info,
    _setup_logging,
    _success,
    _validate_file_path,
    _warning,
    console,
    format_duration_cli,
)
from blockrun.config import BlockRunConfig, load_config
from blockrun.core.exceptions import (
    ConfigError,
    ConfigValidationError,
    DocumentError,
    ExecutorError,
)
from blockrun.detection import (
    Block,
    Document,
    DocumentKind,
    block_at_line,
    block_title,
    find_blocks,
)
from blockrun.documents import load_document
from blockrun.executor import close_executor, get_executor

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="blockrun",
    help="Find and run code blocks in markdown and source files",
    no_args_is_help=True,
)


def _load_config_or_exit(config_path: str | None) -> BlockRunConfig:
    """Load configuration, mapping errors to EXIT_CONFIG_ERROR."""
    try:
        return load_config(Path(config_path) if config_path else None)
    except ConfigValidationError as e:
        _error(str(e))
        for err in e.errors:
            path = ".".join(str(x) for x in err["loc"])
            _error(f"  {path}: {err['msg']}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None


def _load_document_or_exit(
    file: str,
    language: str | None,
    kind: DocumentKind | None,
) -> Document:
    """Load a document, mapping errors to EXIT_ERROR."""
    path = _validate_file_path(file)
    try:
        return load_document(path, language=language, kind=kind)
    except DocumentError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None


def _render_blocks(blocks: list[Block], document: Document) -> Table:
    """Build a table with one row per block (1-indexed lines)."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Action", no_wrap=True)
    table.add_column("Language", no_wrap=True)
    table.add_column("Lines", no_wrap=True)
    table.add_column("Anchor", justify="right")
    for index, block in enumerate(blocks, start=1):
        table.add_row(
            str(index),
            block_title(block, document),
            block.language_id,
            f"{block.start_line + 1}-{block.end_line + 1}",
            str(block.anchor_line + 1),
        )
    return table


@app.command("list")
def list_blocks(
    file: str = typer.Argument(..., help="Markdown or source file"),
    language: str | None = typer.Option(
        None,
        "--language",
        "-l",
        help="Override the document language (aliases like 'py' allowed)",
    ),
    kind: DocumentKind | None = typer.Option(
        None,
        "--kind",
        "-k",
        help="Override detection strategy: tagged or plain",
        case_sensitive=False,
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to .blockrun.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """List runnable blocks in a file."""
    _setup_logging(verbose, quiet)
    cfg = _load_config_or_exit(config)
    document = _load_document_or_exit(file, language, kind)

    if not cfg.show_affordance:
        _info("Block listing disabled (show_affordance: false)")
        raise typer.Exit(code=EXIT_SUCCESS)

    blocks = find_blocks(document, cfg.registry())
    if not blocks:
        _info(f"No runnable blocks found in {file}")
        raise typer.Exit(code=EXIT_SUCCESS)

    console.print(_render_blocks(blocks, document))


@app.command("run")
def run_block(
    file: str = typer.Argument(..., help="Markdown or source file"),
    line: int | None = typer.Option(
        None,
        "--line",
        "-n",
        min=1,
        help="1-indexed cursor line; runs the first block containing it",
    ),
    index: int | None = typer.Option(
        None,
        "--index",
        "-i",
        min=1,
        help="1-indexed block number as shown by 'blockrun list'",
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        "-l",
        help="Override the document language (aliases like 'py' allowed)",
    ),
    kind: DocumentKind | None = typer.Option(
        None,
        "--kind",
        "-k",
        help="Override detection strategy: tagged or plain",
        case_sensitive=False,
    ),
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to .blockrun.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """Run one block; exits with the block's exit status."""
    _setup_logging(verbose, quiet)

    if (line is None) == (index is None):
        _error("Specify exactly one of --line or --index")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    cfg = _load_config_or_exit(config)
    document = _load_document_or_exit(file, language, kind)
    blocks = find_blocks(document, cfg.registry())

    block: Block | None
    if line is not None:
        block = block_at_line(blocks, line - 1)
        if block is None:
            _info(f"No runnable code block found at line {line}")
            raise typer.Exit(code=EXIT_ERROR)
    else:
        assert index is not None
        if index > len(blocks):
            _error(f"Block #{index} does not exist ({len(blocks)} block(s) found)")
            raise typer.Exit(code=EXIT_ERROR)
        block = blocks[index - 1]

    if not quiet:
        _info(f"{block_title(block, document)} ({block.language_id})")

    executor = get_executor(cfg)
    try:
        result = executor.run(block)
    except ExecutorError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_ERROR) from None
    except KeyboardInterrupt:
        _warning("Interrupted")
        raise typer.Exit(code=EXIT_SIGINT) from None
    finally:
        # Let a shell session drain its queued commands before exiting
        if cfg.reuse_executor:
            close_executor(timeout=None)
        else:
            executor.close(timeout=None)

    if result.returncode is None:
        raise typer.Exit(code=EXIT_SUCCESS)

    if result.succeeded:
        if not quiet:
            _success(f"Finished in {format_duration_cli(result.duration)}")
    else:
        _warning(
            f"Exited with status {result.returncode} after "
            f"{format_duration_cli(result.duration)}"
        )
    raise typer.Exit(code=result.returncode)


@app.command("runners")
def show_runners(
    config: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to .blockrun.yaml",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show errors"),
) -> None:
    """Show the effective runner for every language."""
    _setup_logging(verbose, quiet)
    cfg = _load_config_or_exit(config)
    registry = cfg.registry()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Language", no_wrap=True)
    table.add_column("Command")
    table.add_column("Ext", no_wrap=True)
    table.add_column("Source", no_wrap=True)
    for language_id in sorted(registry):
        runner = registry[language_id]
        source = "config" if language_id in cfg.runners else "built-in"
        table.add_row(language_id, runner.command, runner.ext, source)
    console.print(table)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
