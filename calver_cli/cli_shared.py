from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console


class CalverError(Exception):
    pass


class UsageError(CalverError):
    pass


class OpError(CalverError):
    pass


MODE_HELP = "help"
MODE_NEXT_VERSION = "nextVersion"
MODE_HOTFIX = "hotfix"
MODE_MONTH_START = "monthStart"
MODES = (MODE_HELP, MODE_NEXT_VERSION, MODE_HOTFIX, MODE_MONTH_START)

DEFAULT_MAIN_BRANCH = "master"


def _eprint(msg: str) -> None:
    print(msg, file=sys.stderr)


_ERROR_CONSOLE = Console(stderr=True)


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {msg}")


@dataclass(frozen=True)
class GlobalOpts:
    mode: str
    version_arg: str | None = None
    main_branch: str = DEFAULT_MAIN_BRANCH
    plain_json: bool = False
    quiet: bool = False


def _require_mode(raw: str | None) -> str:
    v = (raw or "").strip()
    if not v:
        raise UsageError(f"missing --mode (expecting one of {', '.join(MODES)})")
    if v not in MODES:
        raise UsageError(f"invalid mode {v!r}, expecting one of {', '.join(MODES)}")
    return v


def _last_arg(args: list[str] | None) -> str | None:
    items = [a for a in (args or []) if str(a).strip()]
    if not items:
        return None
    return str(items[-1]).strip()


def _print_json(obj: Any) -> None:
    sys.stdout.write(json.dumps(obj, separators=(",", ":"), sort_keys=True) + "\n")


def _print_lines(lines: list[str]) -> None:
    for line in lines:
        sys.stdout.write(line + "\n")
