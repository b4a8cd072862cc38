"""
Renders Backlog wiki markup as HTML.
The result goes to stdout, to an explicit output file, or next to the source;
watch mode keeps the output in sync with the source while it is being edited.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import ConfigError, PreviewConfig, build_config
from .constants import STDIN_PATH
from .exceptions import RenderFileError
from .filesystem import default_output_path, resolve_source, write_output
from .renderer import render_config, render_file
from .watch import watch_file

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="backlog-preview")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the HTML to this file",
)
@click.option("--write", is_flag=True, help="Write the HTML next to the source file")
@click.option(
    "--standalone/--fragment",
    default=None,
    help="Wrap the output in a full HTML page",
)
@click.option("--title", help="Page title for standalone output")
@click.option("--container-class", help="CSS class of the standalone wrapper")
@click.option("--watch", is_flag=True, help="Re-render whenever the source changes")
@click.argument("filepath", type=click.Path(dir_okay=False, allow_dash=True))
def cli(
    filepath: str,
    output: str | None = None,
    write: bool = False,
    standalone: bool | None = None,
    title: str | None = None,
    container_class: str | None = None,
    watch: bool = False,
):
    """
    Entry point for rendering a wiki markup file as HTML.

    Args:
        filepath: Path to the wiki source file, or ``-`` to read stdin.
        output: Destination file for the rendered HTML.
        write: Write next to the source using the configured suffix.
        standalone: Override for wrapping the output in a full page.
        title: Override for the standalone page title.
        container_class: Override for the standalone wrapper class.
        watch: Keep re-rendering the source until interrupted.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or option combination is invalid, or
            the configuration contains unsupported values.
        click.ClickException: If the source cannot be read or rendered, or the
            output cannot be written.

    Examples:
        backlog-preview notes.txt --standalone -o notes.html
        backlog-preview notes.txt --write --watch
    """
    if output is not None and write:
        raise click.BadParameter("--output and --write are mutually exclusive")

    from_stdin = filepath == STDIN_PATH
    if from_stdin:
        if write or watch:
            raise click.BadParameter("--write and --watch need a source file, not stdin")
        source = None
    else:
        try:
            source = resolve_source(filepath)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            source.parent if source is not None else Path.cwd(),
            standalone=standalone,
            title=title,
            container_class=container_class,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if source is None:
        with click.open_file(STDIN_PATH) as stream:
            html = render_config(stream.read(), config)
        _emit(html, Path(output) if output is not None else None)
        return

    destination: Path | None = None
    if output is not None:
        destination = Path(output)
    elif write:
        destination = default_output_path(source, config.output_suffix)
    if destination is not None and destination.resolve() == source:
        raise click.BadParameter(f"Output {destination} would overwrite the source file")

    if watch:
        if destination is None:
            raise click.BadParameter("--watch needs --output or --write")
        _watch(source, destination, config)
        return

    try:
        html = render_file(source, config)
    except RenderFileError as error:
        raise click.ClickException(str(error)) from error
    _emit(html, destination)


def _emit(html: str, destination: Path | None) -> None:
    if destination is None:
        print(html, end="")
        return
    try:
        write_output(destination, html)
    except IOError as error:
        raise click.ClickException(str(error)) from error


def _watch(source: Path, destination: Path, config: PreviewConfig) -> None:
    def _render(path: Path) -> None:
        write_output(destination, render_file(path, config))
        click.echo(f"Rendered {path.name} -> {destination}", err=True)

    click.echo(f"Watching {source} (Ctrl+C to stop)", err=True)
    try:
        watch_file(
            source,
            _render,
            debounce=config.debounce,
            on_error=lambda error: click.echo(f"Error: {error}", err=True),
        )
    except KeyboardInterrupt:
        click.echo("Stopped watching.", err=True)


if __name__ == "__main__":
    cli()
