from __future__ import annotations

import sys
from datetime import date

import click
import typer

from . import __version__
from .cli_shared import (
    DEFAULT_MAIN_BRANCH,
    MODE_HELP,
    MODE_HOTFIX,
    MODE_MONTH_START,
    MODE_NEXT_VERSION,
    GlobalOpts,
    OpError,
    UsageError,
    _eprint,
    _last_arg,
    _print_json,
    _print_lines,
    _require_mode,
    _rich_error,
)
from .guidance import (
    HOTFIX_MISSING_VERSION,
    Guidance,
    error_doc,
    hotfix_guidance,
    month_start_guidance,
    next_version_guidance,
    usage_doc,
    usage_text,
)
from .revision import Revision, RevisionError

PROG_NAME = "calver"

# typer releases that bundle their own click raise errors outside click.ClickException
_CLI_ERRORS: tuple[type[Exception], ...] = tuple(
    e for e in (click.ClickException, getattr(typer, "TyperException", None)) if e is not None
)

app = typer.Typer(
    name=PROG_NAME,
    help="CalVer revisions and git reconciliation guidance.",
    add_completion=False,
)


def _today() -> date:
    return date.today()


def _prog(ctx: typer.Context) -> str:
    return str(ctx.find_root().info_name or PROG_NAME)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit(code=0)


def _help_callback(ctx: typer.Context, value: bool) -> None:
    if value:
        typer.echo(usage_text(_prog(ctx), _today()), nl=False)
        raise typer.Exit(code=0)


def _mode_callback(value: str | None) -> str:
    return _require_mode(value)


def _input_revision(g: GlobalOpts) -> Revision:
    if g.version_arg:
        return Revision.parse(g.version_arg)
    v = Revision.for_date(_today())
    if not g.quiet:
        _eprint(f"no previous version given, using {v}")
    return v


def _emit(g: GlobalOpts, guidance: Guidance) -> None:
    if g.plain_json:
        _print_json(guidance.to_doc())
    else:
        _print_lines(guidance.lines)


def dispatch(g: GlobalOpts, *, prog: str = PROG_NAME) -> int:
    if g.mode == MODE_HELP:
        text = usage_text(prog, _today())
        if g.plain_json:
            _print_json(usage_doc(text))
        else:
            sys.stdout.write(text)
        return 0

    if g.mode == MODE_HOTFIX:
        if not g.version_arg:
            if g.plain_json:
                _print_json(error_doc(MODE_HOTFIX, HOTFIX_MISSING_VERSION))
            else:
                sys.stdout.write(HOTFIX_MISSING_VERSION + "\n")
            return 1
        _emit(g, hotfix_guidance(Revision.parse(g.version_arg)))
        return 0

    v = _input_revision(g)
    if g.mode == MODE_NEXT_VERSION:
        _emit(g, next_version_guidance(v))
        return 0
    if g.mode == MODE_MONTH_START:
        try:
            guidance = month_start_guidance(v, main_branch=g.main_branch)
        except RevisionError as e:
            raise OpError(str(e)) from e
        _emit(g, guidance)
        return 0
    raise UsageError(f"unhandled mode {g.mode!r}")


@app.command(context_settings={"help_option_names": []})
def run(
    ctx: typer.Context,
    versions: list[str] | None = typer.Argument(
        None,
        metavar="[PREVIOUS_VERSION]",
        help="Dotted version YY.MM.REV[.HOTFIX]; the last one given is used",
        show_default=False,
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        callback=_mode_callback,
        help="One of help, nextVersion, hotfix, monthStart",
    ),
    main_branch: str = typer.Option(
        DEFAULT_MAIN_BRANCH,
        "--main-branch",
        help="Integration branch named in monthStart guidance",
    ),
    plain_json: bool = typer.Option(False, "--json", help="Emit compact JSON output"),
    quiet: bool = typer.Option(False, "--quiet", help="Reduce stderr logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    help_: bool = typer.Option(
        False,
        "--help",
        callback=_help_callback,
        is_eager=True,
        help="Show usage and exit",
    ),
) -> None:
    del version, help_
    main_branch = str(main_branch or "").strip()
    if not main_branch:
        raise UsageError("--main-branch must not be empty")
    g = GlobalOpts(
        mode=str(mode),
        version_arg=_last_arg(versions),
        main_branch=main_branch,
        plain_json=plain_json,
        quiet=quiet,
    )
    code = dispatch(g, prog=_prog(ctx))
    if code:
        raise typer.Exit(code=code)


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        result = app(args=argv, prog_name=PROG_NAME, standalone_mode=False)
        if result is None:
            return 0
        return int(result)
    except typer.Exit as e:
        return int(e.exit_code)
    except _CLI_ERRORS as e:
        format_message = getattr(e, "format_message", None)
        _rich_error(format_message() if callable(format_message) else str(e))
        return int(getattr(e, "exit_code", 2))
    except UsageError as e:
        _rich_error(str(e))
        return 2
    except OpError as e:
        _rich_error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
