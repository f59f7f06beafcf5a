from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import CONF_NAME, Settings, load_settings, write_default_config
from .errors import DecodeError, UnknownVersionError
from .model import BinaryProperty
from .reader import ParseResult, read_html, read_properties
from .writer import convert as convert_text, write_properties
from .versions import VCardVersion

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="vcard-codec: read, convert and inspect vCard binary properties (LOGO, PHOTO).",
)
console = Console()
err_console = Console(stderr=True)

_state: dict[str, Settings] = {}


def _settings() -> Settings:
    return _state.get("settings") or Settings()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _version(text: str | None) -> VCardVersion:
    if text is None:
        return _settings().default_version
    try:
        return VCardVersion.parse(text)
    except UnknownVersionError as exc:
        err_console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=2)


def _read(path: Path) -> str:
    if not path.is_file():
        err_console.print(f"[bold red]No such file: {path}[/bold red]")
        raise typer.Exit(code=2)
    return path.read_text(encoding="utf-8", errors="replace")


def _print_warnings(warnings: list[str]) -> None:
    for w in warnings:
        err_console.print(f"  [yellow]![/yellow] {w}")


def _describe(prop: BinaryProperty) -> tuple[str, str, str]:
    ct = prop.content_type
    kind = ct.media_type if ct is not None else "[dim]unknown[/dim]"
    if prop.is_remote:
        return "url", kind, prop.url or ""
    if prop.is_inline:
        return "inline", kind, f"{len(prop.data)} bytes"
    return "empty", kind, ""


def _table(result: ParseResult, title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("Property")
    table.add_column("Storage")
    table.add_column("Content type")
    table.add_column("Value")
    for prop in result.properties:
        if isinstance(prop, BinaryProperty):
            table.add_row(prop.name, *_describe(prop))
    return table


# ── Global options ─────────────────────────────────────────────────────────────

@app.callback()
def main(
    config: Path | None = typer.Option(None, "--config", "-c", help=f"Settings file (default: ./{CONF_NAME})"),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR"),
) -> None:
    try:
        settings = load_settings(config)
    except UnknownVersionError as exc:
        err_console.print(f"[bold red]{config or CONF_NAME}: {exc}[/bold red]")
        raise typer.Exit(code=2)
    _state["settings"] = settings
    _setup_logging(log_level or settings.log_level)


# ── Commands ───────────────────────────────────────────────────────────────────

@app.command()
def inspect(file: Path = typer.Argument(..., help=".vcf file to read")) -> None:
    """List the LOGO / PHOTO properties of a vCard file."""
    try:
        result = read_properties(_read(file))
    except DecodeError as exc:
        err_console.print(f"[bold red]{file}: {exc}[/bold red]")
        raise typer.Exit(code=2)
    console.print(_table(result, f"{file.name} (vCard {result.version})"))
    _print_warnings(result.warnings)


@app.command()
def convert(
    file: Path = typer.Argument(..., help=".vcf file to read"),
    to: str | None = typer.Option(None, "--to", "-t", help="Target version (2.1, 3.0 or 4.0)"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
) -> None:
    """Re-encode a vCard for another version."""
    version = _version(to)
    try:
        result = convert_text(_read(file), version, _settings().fold_width)
    except DecodeError as exc:
        err_console.print(f"[bold red]{file}: {exc}[/bold red]")
        raise typer.Exit(code=2)
    if output is None:
        typer.echo(result.text, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result.text, encoding="utf-8", newline="")
        err_console.print(f"[bold green]✓ Wrote {result.written} propert(ies) → {output}[/bold green]")
    _print_warnings(result.warnings)


@app.command()
def html(
    file: Path = typer.Argument(..., help="HTML page containing hCard markup"),
    base_url: str | None = typer.Option(None, "--base-url", help="Resolve relative src/href against this"),
    to: str | None = typer.Option(None, "--to", "-t", help="Target version (2.1, 3.0 or 4.0)"),
) -> None:
    """Extract logos and photos from an HTML page and print them as a vCard."""
    version = _version(to)
    try:
        parsed = read_html(_read(file), base_url or _settings().base_url)
    except DecodeError as exc:
        err_console.print(f"[bold red]{file}: {exc}[/bold red]")
        raise typer.Exit(code=2)
    result = write_properties(parsed.properties, version, _settings().fold_width)
    typer.echo(result.text, nl=False)
    _print_warnings(parsed.warnings + result.warnings)


@app.command()
def extract(
    file: Path = typer.Argument(..., help=".vcf file to read"),
    out_dir: Path = typer.Option(Path("."), "--dir", "-d", help="Folder to write payloads into"),
) -> None:
    """Save every inline LOGO / PHOTO payload as a file."""
    try:
        result = read_properties(_read(file))
    except DecodeError as exc:
        err_console.print(f"[bold red]{file}: {exc}[/bold red]")
        raise typer.Exit(code=2)

    out_dir.mkdir(parents=True, exist_ok=True)
    counts: dict[str, int] = {}
    written = 0
    for prop in result.properties:
        if not (isinstance(prop, BinaryProperty) and prop.is_inline):
            continue
        n = counts.get(prop.name, 0)
        counts[prop.name] = n + 1
        ext = prop.content_type.extension if prop.content_type and prop.content_type.extension else "bin"
        target = out_dir / f"{prop.name.lower()}{n}.{ext}"
        target.write_bytes(prop.data)
        console.print(f"  [dim]{target}[/dim]")
        written += 1

    if not written:
        console.print(Panel(f"No inline LOGO or PHOTO data in {file.name}", border_style="yellow"))
    else:
        console.print(f"[bold green]✓ Wrote {written} file(s) → {out_dir}[/bold green]")
    _print_warnings(result.warnings)


@app.command()
def init(path: Path = typer.Argument(Path(CONF_NAME), help="Where to write the settings file")) -> None:
    """Write a default settings file (existing files are left alone)."""
    write_default_config(path)
    console.print(f"[dim]Settings → {path}[/dim]")


if __name__ == "__main__":
    app()
