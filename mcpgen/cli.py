"""
mcpgen.cli
==========

`mcpgen`: turn a contract ABI into a runnable MCP server project.

Commands
--------
- `generate`  ABI → IR → validate → render → write files
- `ir`        ABI → IR JSON (stdout or --out)
- `validate`  check a serialized IR document and print its findings

Examples
--------
    $ mcpgen generate ./abis/ERC20.json -o ./erc20-server
    $ mcpgen generate ./abis/Vault.json -n Vault -d 0x1234... --with-tests --overwrite
    $ mcpgen ir ./abis/ERC20.json --out erc20.ir.json
    $ mcpgen validate erc20.ir.json
    $ mcpgen --log-level DEBUG --log-json generate ./abis/ERC20.json

Configuration
-------------
Flags win over `MCPGEN_*` environment variables, which win over the config
file (`--config` or env `MCPGEN_CONFIG`), which wins over built-in defaults.
See :mod:`mcpgen.config`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import logging as mlog
from .config import Config, load_config
from .errors import McpGenError
from .ir import ContractIR, ContractMetadata, load_ir, validate_contract
from .normalize import get_normalizer
from .render import is_exposed, render_project
from .version import RENDERER_VERSION, __version__
from .writer import write_files

log = logging.getLogger(__name__)

app = typer.Typer(
    name="mcpgen",
    help="Generate MCP (Model Context Protocol) servers from smart-contract ABIs.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main"]


def _out() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _err() -> Console:
    return Console(stderr=True, highlight=False, soft_wrap=True)


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Print any pipeline error in red on stderr and exit 1."""
    try:
        yield
    except McpGenError as e:
        log.debug("command failed: %s", e.code, exc_info=True)
        _err().print(f"[bold red]error[/bold red] [red]{escape(e.message)}[/red]")
        raise typer.Exit(1) from e


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"mcpgen {__version__} (renderer {RENDERER_VERSION})")
        raise typer.Exit(0)


@app.callback()
def _root(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", help="Config file (JSON or YAML). Defaults to env MCPGEN_CONFIG."
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ERROR or CRITICAL."
    ),
    log_json: Optional[bool] = typer.Option(
        None, "--log-json/--log-text", help="Emit logs as JSON lines."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Print version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Resolve the effective configuration once and configure logging for the run.
    """
    with _handle_errors():
        cfg = load_config(config).merged(log_level=log_level, log_json=log_json)
    mlog.configure(json=cfg.log_json, level=cfg.log_level)
    ctx.obj = cfg


def _config(ctx: typer.Context) -> Config:
    cfg = ctx.obj
    return cfg if isinstance(cfg, Config) else load_config()


def _normalize(artifact: Path, chain: str, name: Optional[str], address: str) -> ContractIR:
    try:
        data = artifact.read_bytes()
    except OSError as e:
        raise McpGenError(f"cannot read artifact {artifact}: {e}") from e
    metadata = ContractMetadata(name=name or artifact.stem, chain=chain, address=address)
    with mlog.scope(contract=metadata.name, chain=chain):
        return get_normalizer(chain).normalize(data, metadata)


def _print_findings(console: Console, findings: list) -> None:
    for f in findings:
        console.print(f"  [yellow]-[/yellow] {escape(str(f))}")


# --- Commands ------------------------------------------------------------------


@app.command("generate")
def generate_cmd(
    ctx: typer.Context,
    artifact: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to the ABI JSON file."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory."),
    lang: Optional[str] = typer.Option(None, "--lang", "-l", help="Target language (ts)."),
    chain: Optional[str] = typer.Option(None, "--chain", "-c", help="Chain type (ethereum, evm)."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Contract name (default: file stem)."),
    address: str = typer.Option("", "--address", "-d", help="Deployed contract address."),
    template_dir: Optional[Path] = typer.Option(
        None, "--template-dir", file_okay=False, help="Directory of <file>.tmpl template overrides."
    ),
    with_tests: Optional[bool] = typer.Option(
        None, "--with-tests/--no-tests", help="Also generate the Playwright e2e harness."
    ),
    overwrite: bool = typer.Option(False, "--overwrite/--no-overwrite", help="Replace existing files."),
) -> None:
    """
    Generate an MCP server project from an ABI.
    """
    with _handle_errors(), mlog.scope(command="generate"):
        cfg = _config(ctx).merged(
            output_dir=str(output) if output is not None else None,
            lang=lang,
            chain=chain,
            template_dir=str(template_dir) if template_dir is not None else None,
            include_tests=with_tests,
        )
        ir = _normalize(artifact, cfg.chain, name, address)

        report = validate_contract(ir)
        if not report.ok:
            err = _err()
            err.print(f"[bold red]error[/bold red] [red]IR validation failed: {escape(report.summarize())}[/red]")
            _print_findings(err, report.findings)
            raise typer.Exit(1)

        files = render_project(
            ir,
            cfg.lang,
            template_dir=cfg.template_dir,
            include_tests=cfg.include_tests,
            entry=cfg.entry,
        )
        plan = write_files(files, cfg.output_dir, overwrite=overwrite)

    tools = [fn for fn in ir.functions if is_exposed(fn)]
    console = _out()
    console.print(
        f"[green]Generated MCP server for {escape(ir.metadata.name)} in {escape(str(plan.out_dir))}[/green]"
    )
    console.print(f"Functions: {len(ir.functions)}")
    console.print(f"Tools: {len(tools)}")
    console.print(f"Events: {len(ir.events)}")

    table = Table(box=box.SIMPLE, show_header=True)
    table.add_column("File")
    table.add_column("Action")
    table.add_column("Bytes", justify="right")
    for act in plan.actions:
        table.add_row(act.rel, act.reason, str(act.size))
    console.print(table)


@app.command("ir")
def ir_cmd(
    ctx: typer.Context,
    artifact: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to the ABI JSON file."),
    chain: Optional[str] = typer.Option(None, "--chain", "-c", help="Chain type (ethereum, evm)."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Contract name (default: file stem)."),
    address: str = typer.Option("", "--address", "-d", help="Deployed contract address."),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the IR JSON here instead of stdout."),
) -> None:
    """
    Print (or write) the normalized IR of an ABI.
    """
    with _handle_errors(), mlog.scope(command="ir"):
        cfg = _config(ctx).merged(chain=chain)
        ir = _normalize(artifact, cfg.chain, name, address)
    text = ir.to_json(indent=2) + "\n"
    if out is None:
        typer.echo(text, nl=False)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    _out().print(f"[green]Wrote IR for {escape(ir.metadata.name)} to {escape(str(out))}[/green]")


@app.command("validate")
def validate_cmd(
    ir_json: Path = typer.Argument(..., exists=True, dir_okay=False, help="Path to an IR JSON document."),
) -> None:
    """
    Validate an IR document; exit 1 when it has findings.
    """
    with _handle_errors(), mlog.scope(command="validate"):
        try:
            text = ir_json.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise McpGenError(f"cannot read {ir_json}: {e}") from e
        report = validate_contract(load_ir(text))

    if report.ok:
        _out().print(f"[green]{escape(str(ir_json))}: IR is valid[/green]")
        return
    err = _err()
    err.print(f"[bold red]{escape(str(ir_json))}: {len(report)} finding(s)[/bold red]")
    _print_findings(err, report.findings)
    raise typer.Exit(1)


def main() -> None:
    app(prog_name="mcpgen")


if __name__ == "__main__":  # pragma: no cover
    main()
