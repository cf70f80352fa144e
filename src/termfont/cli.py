import typer
from pathlib import Path
from typing import Dict, List, Optional, Type

from termfont.config.settings import BASE_URL, FontSettings, check_font_name, resolve_prefix
from termfont.installation.pipeline import download_fonts
from termfont.registry.operations import list_fonts, remove_all_fonts, remove_fonts, set_font
from termfont.utils import exceptions as errors
from termfont.utils.log_config import get_logger, setup_logging

log = get_logger(__name__)

app = typer.Typer(help="Nerd Font manager for the terminal", no_args_is_help=True)

GUIDES: Dict[Type[errors.FontError], str] = {
    errors.OpenPrefixDirectoryError: "does the prefix directory (~/.termux) exist?",
    errors.InvalidHttpResponseError: f"is the font available at {BASE_URL}?",
    errors.FontNotFoundError: "this archive doesn't contain a regular Nerd Font file for that name",
    errors.FailedZipExtractionError: "the downloaded archive looks corrupt, try again",
    errors.SetFontFileError: "is the font saved? check `termfont list`",
    errors.DeleteFontFileError: "does the font file exist?",
    errors.OpenFontDirectoryError: "no fonts downloaded yet? try `termfont download <name>`",
    errors.CreateFontDirectoryError: "is the prefix directory writable?",
    errors.SaveFontFileError: "is the font directory writable?",
}


def guide(error: errors.FontError) -> str:
    for kind in type(error).__mro__:
        hint = GUIDES.get(kind)
        if hint:
            return hint
    return ""


def _fail(error: errors.FontError) -> None:
    hint = guide(error)
    log.error("%s%s", error, f", {hint}" if hint else "")
    raise typer.Exit(code=1)


def _prefix(ctx: typer.Context) -> Path:
    return ctx.obj["prefix"]


def _font_names(value):
    if value is None:
        return value
    names = [value] if isinstance(value, str) else value
    for name in names:
        try:
            check_font_name(name)
        except ValueError as e:
            raise typer.BadParameter(str(e))
    return value


@app.callback()
def main(
    ctx: typer.Context,
    prefix: Optional[Path] = typer.Option(
        None, "--prefix", envvar="TERMFONT_PREFIX", help="Prefix directory (default: ~/.termux)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
):
    """
    Download, activate and remove Nerd Fonts.
    """
    setup_logging(verbose)
    ctx.obj = {"prefix": resolve_prefix(prefix), "settings": FontSettings()}


@app.command()
def download(
    ctx: typer.Context,
    fonts: List[str] = typer.Argument(
        ..., help="Fonts to download, e.g. 0xProto FiraCode", callback=_font_names
    ),
):
    """
    Download fonts into the font directory.
    """
    def _installed(font: str, destination: Path) -> None:
        typer.echo(f"installed {font} at {destination}")

    try:
        download_fonts(fonts, _prefix(ctx), ctx.obj["settings"], callback=_installed)
    except errors.FontError as e:
        _fail(e)


@app.command("set")
def set_command(
    ctx: typer.Context,
    font: str = typer.Argument(..., help="Font to set as the current font", callback=_font_names),
):
    """
    Make an installed font the current font.
    """
    try:
        set_font(font, _prefix(ctx))
    except errors.FontError as e:
        _fail(e)


@app.command("list")
def list_command(ctx: typer.Context):
    """
    List installed fonts.
    """
    try:
        fonts = list_fonts(_prefix(ctx))
    except errors.FontError as e:
        _fail(e)
    for font in fonts:
        typer.echo(font)


@app.command()
def remove(
    ctx: typer.Context,
    fonts: Optional[List[str]] = typer.Argument(None, help="Fonts to remove", callback=_font_names),
    all_fonts: bool = typer.Option(
        False, "--all", "-a", help="Remove all fonts including the current font"
    ),
    except_current: bool = typer.Option(
        False, "--except-current", help="Keep the current font file"
    ),
):
    """
    Remove fonts, and the current font unless --except-current is given.
    """
    try:
        if all_fonts:
            remove_all_fonts(_prefix(ctx), exclude_current=except_current)
            return

        if not fonts:
            raise typer.BadParameter("give at least one font or --all", param_hint="FONTS")

        remove_fonts(fonts, _prefix(ctx), remove_current=not except_current)
    except errors.FontError as e:
        _fail(e)


if __name__ == "__main__":
    app()
