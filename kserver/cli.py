import json
import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from kserver.config import get_config
from kserver.constants import (
    ALL_FLAGS,
    GENERATOR_INFO,
    LIBRARY,
    LIBRARY_DESCRIPTIONS,
    OPTION_HELP,
    SUPPORT_MATRIX,
)
from kserver.exceptions import KServerError, OptionSyntaxError
from kserver.resolve import ConfigResolver, DiagnosticLevel

console = Console()
app = typer.Typer(
    name='kserver',
    help='Resolve Kotlin server generator options into an artifact plan',
    no_args_is_help=True,
)


def parse_overrides(values: list[str] | None) -> dict[str, str]:
    """Turn repeated KEY=VALUE command line arguments into an option map."""
    overrides = {}
    for text in values or []:
        key, sep, value = text.partition('=')
        if not sep or not key.strip():
            raise OptionSyntaxError(text)
        overrides[key.strip()] = value
    return overrides


@app.command()
def plan(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    option: Annotated[
        list[str] | None,
        typer.Option('--option', '-o', help='Generator option override, KEY=VALUE'),
    ] = None,
    library: Annotated[
        str | None, typer.Option('--library', '-l', help='Target library')
    ] = None,
    as_json: Annotated[
        bool, typer.Option('--json', help='Print the resolution as JSON')
    ] = False,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Log resolution details')
    ] = False,
) -> None:
    """Show the supporting files a configuration would generate.

    Options from the configuration file are overridden by --option values,
    and --library overrides both.

    Examples:
        kserver plan
        kserver plan --library jaxrs-spec -o interfaceOnly=true
        kserver plan -c kserver.yaml --json
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(message)s',
            handlers=[RichHandler(console=console, show_path=False)],
        )

    try:
        settings = get_config(config)
        raw = {**settings.options, **parse_overrides(option)}
    except KServerError as e:
        console.print(f'[red]Error:[/red] {escape(str(e))}')
        raise typer.Exit(1)

    if library is not None:
        raw[LIBRARY] = library

    resolution = ConfigResolver().resolve(raw)

    if as_json:
        typer.echo(json.dumps(resolution.to_dict(), indent=2, default=str))
        return

    table = Table(title=f'Artifact plan ({settings.output})')
    table.add_column('#', justify='right', style='dim')
    table.add_column('Template')
    table.add_column('Path', style='cyan')
    for index, entry in enumerate(resolution.plan, start=1):
        table.add_row(str(index), entry.template, entry.path)
    console.print(table)

    for diagnostic in resolution.diagnostics:
        color = 'yellow' if diagnostic.level is DiagnosticLevel.WARNING else 'blue'
        console.print(
            f'[{color}]{diagnostic.level.value}:[/{color}] {escape(diagnostic.message)}'
        )

    console.print(
        f'[green]Resolved {len(resolution.plan)} files for library '
        f'{resolution.configuration.library.value}[/green]'
    )


@app.command()
def options() -> None:
    """List the recognized generator options."""
    table = Table(title=f'{GENERATOR_INFO.name} options')
    table.add_column('Option', style='cyan')
    table.add_column('Default')
    table.add_column('Libraries')
    table.add_column('Description')

    for key, (default, description) in OPTION_HELP.items():
        table.add_row(key, str(default), 'all', description)

    for flag in ALL_FLAGS:
        libraries = ', '.join(
            library.value for library, keys in SUPPORT_MATRIX.items() if flag.key in keys
        )
        table.add_row(flag.key, str(flag.default).lower(), libraries, flag.description)

    console.print(table)


def _template_files(files: dict[str, str]) -> str:
    return ', '.join(f'{template} -> *{suffix}' for template, suffix in files.items())


@app.command()
def info() -> None:
    """Show generator metadata."""
    console.print(f'[bold]{GENERATOR_INFO.name}[/bold] ({GENERATOR_INFO.tag})')
    console.print(GENERATOR_INFO.help)
    console.print('[dim]Libraries:[/dim]')
    for library, description in LIBRARY_DESCRIPTIONS.items():
        console.print(f'  - {library.value}: {description}')
    console.print(f'[dim]Templates:[/dim] {GENERATOR_INFO.template_dir}')
    console.print(f'[dim]Default output:[/dim] {GENERATOR_INFO.output_folder}')
    console.print(
        f'[dim]Model templates:[/dim] '
        f'{_template_files(GENERATOR_INFO.model_template_files)}'
    )
    console.print(
        f'[dim]API templates:[/dim] {_template_files(GENERATOR_INFO.api_template_files)}'
    )
    console.print(
        f'[dim]Documentation:[/dim] {", ".join(GENERATOR_INFO.documentation_features)}'
    )
    console.print(f'[dim]Wire formats:[/dim] {", ".join(GENERATOR_INFO.wire_formats)}')
    console.print(f'[dim]Security:[/dim] {", ".join(GENERATOR_INFO.security_features)}')
    console.print(
        f'[dim]Not supported:[/dim] {", ".join(GENERATOR_INFO.excluded_features)}'
    )


@app.command()
def version() -> None:
    """Show the version of kserver."""
    from kserver._version import version

    console.print(f'kserver version: {version}')


if __name__ == '__main__':
    app()
