"""
Command-line interface for sigillum.
"""

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from sigillum import __version__
from sigillum.core.model import SignatureInfo
from sigillum.core.utils import set_verbosity
from sigillum.exceptions import SigillumError
from sigillum.tools import load_builtin_plugins
from sigillum.tools.common.interfaces import ToolContext
from sigillum.tools.common.pipeline import registry

console = Console()


def _run_tool(ctx: click.Context, tool_name: str, **kwargs):
    context = ToolContext(key_path=ctx.obj.get("key_file"), **kwargs)
    try:
        return registry.create(tool_name, context).run()
    except SigillumError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


def _signature_table(title: str, info: SignatureInfo, show_missing_extra: bool = True) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_row("Signer", info.signer)
    table.add_row("Timestamp", info.timestamp)
    if info.extra.recovered or show_missing_extra:
        table.add_row("Extra", info.extra.text)
    table.add_row("Signature", info.digest.text)
    return table


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--key-file', '-k',
    default=None,
    help='Key pair file (defaults to the per-user data directory)',
    type=click.Path(dir_okay=False)
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, key_file, verbose):
    """
    Sigillum - stamp PDFs with a visible signature watermark and read it back.
    """
    load_builtin_plugins()
    set_verbosity(verbose)
    ctx.ensure_object(dict)
    ctx.obj["key_file"] = key_file


@cli.command(name="keygen")
@click.pass_context
def keygen(ctx):
    """
    Generate a new RSA key pair, replacing any stored one.
    """
    public_key = _run_tool(ctx, "keygen")
    console.print("[bold green]✓ Keypair generated and saved successfully![/bold green]")
    click.echo(public_key)


@cli.command(name="import-key")
@click.option(
    '--private-key',
    required=True,
    help='PKCS#8 PEM file holding the private key',
    type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.option(
    '--public-key',
    required=True,
    help='PEM file holding the public key',
    type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_context
def import_key(ctx, private_key, public_key):
    """
    Import an existing key pair from PEM files.
    """
    _run_tool(
        ctx,
        "import-key",
        config={
            "private_key": private_key.read_text(encoding="utf-8"),
            "public_key": public_key.read_text(encoding="utf-8"),
        },
    )
    console.print("[bold green]✓ Keypair imported and saved[/bold green]")


@cli.command(name="export")
@click.pass_context
def export(ctx):
    """
    Print the stored private key.
    """
    click.echo(_run_tool(ctx, "export-key"))


@cli.command(name="public-key")
@click.pass_context
def public_key(ctx):
    """
    Print the stored public key.
    """
    click.echo(_run_tool(ctx, "public-key"))


@cli.command(name="sign")
@click.option('--name', '-n', required=True, help='Signer name', type=str)
@click.option('--extra', '-e', default='', help='Optional note added under the timestamp', type=str)
@click.option(
    '--input', '-i', 'input_pdf',
    required=True,
    help='PDF to sign',
    type=click.Path(exists=True, dir_okay=False)
)
@click.option(
    '--output', '-o', 'output_pdf',
    required=True,
    help='Destination of the signed PDF',
    type=click.Path(dir_okay=False)
)
@click.pass_context
def sign(ctx, name, extra, input_pdf, output_pdf):
    """
    Stamp every page of a PDF with a signature watermark.

    Examples:

        sigillum sign --name Alice --input in.pdf --output signed.pdf

        sigillum sign -n Bob -e "dept:legal" -i in.pdf -o signed.pdf
    """
    result = _run_tool(
        ctx,
        "sign",
        input_path=input_pdf,
        output_path=output_pdf,
        config={"name": name, "extra": extra},
    )
    console.print("\n[bold green]✓ PDF signed successfully![/bold green]")
    console.print(f"[dim]Output: {Path(output_pdf).resolve()}[/dim]")
    console.print(_signature_table("Signature", result.info, show_missing_extra=False))


@cli.command(name="verify")
@click.option(
    '--file', '-f', 'pdf_file',
    required=True,
    help='PDF to inspect',
    type=click.Path(exists=True, dir_okay=False)
)
@click.pass_context
def verify(ctx, pdf_file):
    """
    Look for a signature watermark and print its fields.
    """
    result = _run_tool(ctx, "verify", input_path=pdf_file)
    if not result.is_signed:
        console.print(f"[bold red]✗ {result.message}[/bold red]")
        sys.exit(1)

    console.print(f"[bold green]✓ {result.message}[/bold green]")
    console.print(_signature_table("Signature", result.info))


if __name__ == "__main__":  # pragma: no cover
    cli()
