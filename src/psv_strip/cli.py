"""PSV Strip - command line entry point."""
from __future__ import annotations

from pathlib import Path

import click

from psv_strip import __version__
from .const import PsvError
from .files import restore_file, strip_file

EPILOG = "Note: the save/restore options store data in a file named Game.psv-lic"


@click.command(context_settings={"help_option_names": ["-h", "--help"]}, epilog=EPILOG)
@click.argument("psvfile", type=click.Path(path_type=Path))
@click.option("-q", "--quiet", is_flag=True, help="Quiet output")
@click.option("-r", "--restore", is_flag=True, help="Restore header/license content, if previously saved")
@click.option("-s", "--save", is_flag=True, help="Save header/license content that is stripped")
@click.option(
    "-l", "--lic-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Header/license file to save to or restore from [default: <PSVFILE>-lic]",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file [default: <name>.stripped.psv or <name>.restored.psv]",
)
@click.version_option(__version__, "-V", "--version", prog_name="psv-strip", message="%(prog)s %(version)s")
def main(
    psvfile: Path,
    quiet: bool,
    restore: bool,
    save: bool,
    lic_file: Path | None,
    output: Path | None,
) -> None:
    """Strip (or restore) PSV header and license information for Vita games."""
    if restore and save:
        raise click.UsageError("The save and restore options may not be both enabled")

    def progress(msg: str) -> None:
        if not quiet:
            click.echo(msg)

    try:
        if restore:
            restore_file(psvfile, out=output, lic=lic_file, progress=progress)
        else:
            strip_file(psvfile, out=output, lic=lic_file, save=save, progress=progress)
    except PsvError as e:
        # Fail closed with a single-line reason, no traceback.
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(e.exit_code)


if __name__ == "__main__":
    main()
