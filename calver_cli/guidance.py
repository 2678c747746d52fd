"""Branch reconciliation guidance for each calver mode.

Builders are pure: they take revisions and return a ``Guidance`` value. The
CLI decides whether to print it as prose or JSON. Nothing here runs git.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .cli_shared import (
    DEFAULT_MAIN_BRANCH,
    MODE_HELP,
    MODE_HOTFIX,
    MODE_MONTH_START,
    MODE_NEXT_VERSION,
)
from .revision import Revision

KIND_NEXT_VERSION = "calver.next-version.v1"
KIND_HOTFIX = "calver.hotfix.v1"
KIND_MONTH_START = "calver.month-start.v1"
KIND_USAGE = "calver.usage.v1"
KIND_ERROR = "calver.error.v1"

HOTFIX_MISSING_VERSION = "Need to specify the version to hotfix on the command line"


@dataclass(frozen=True)
class Guidance:
    kind: str
    mode: str
    input: Revision
    lines: list[str]
    revisions: dict[str, str] = field(default_factory=dict)
    branches: dict[str, str] = field(default_factory=dict)

    def to_doc(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "mode": self.mode,
            "input": str(self.input),
            "revisions": dict(self.revisions),
            "branches": dict(self.branches),
            "steps": list(self.lines),
        }


def usage_text(prog: str, today: date) -> str:
    example = Revision.for_date(today)
    return f"""CalVer for Git
Usage: {prog} --mode=<help|nextVersion|hotfix|monthStart> [previous version]

Generating the next version: {prog} --mode=nextVersion [previous version]

If the [previous version] is omitted, the first revision for the year and
month are used (eg {example})

Add one to the revision count and prints how to reconcile git, with special
instructions if the [previous version] was from a hotfix.

Prepare a hotfix: {prog} --mode=hotfix <previous version>

Generates the next version in which to do development to complete the hotfix,
and prints git reconciliation instructions.

Prepare for next month: {prog} --mode=monthStart [previous version]

Generates the next head branch for the next month, and git reconciliation
instructions.

Options:
  --main-branch NAME  integration branch for monthStart (default: {DEFAULT_MAIN_BRANCH})
  --json              emit compact JSON instead of prose (usage and errors included)
  --quiet             suppress informational notes on stderr
  --version           show version and exit
  --help              show this message and exit
"""


def next_version_guidance(v: Revision) -> Guidance:
    nxt = v.next_version()
    parent = v.parent_branch()
    branches = {"parent": parent}
    if v.is_hotfix():
        grandparent = Revision.parse(parent).parent_branch()
        branches["grandparent"] = grandparent
        lines = [
            f"Before starting coding work on {nxt}, tag {v} and merge it to {parent}, "
            f"and to {grandparent} (and its descendants), then branch off {parent} to {nxt}",
            f"(But be mindful that {nxt} might already exist, and it could be something else, "
            "or it could even be a different month!)",
        ]
    else:
        lines = [
            f"Before starting coding work on {nxt}, tag {v} and merge it to {parent}, "
            f"then branch off {parent} to {nxt}",
        ]
    return Guidance(
        kind=KIND_NEXT_VERSION,
        mode=MODE_NEXT_VERSION,
        input=v,
        lines=lines,
        revisions={"nextVersion": str(nxt)},
        branches=branches,
    )


def hotfix_guidance(v: Revision) -> Guidance:
    fix = v.hotfix()
    parent = v.parent_branch(force_hotfix=True)
    return Guidance(
        kind=KIND_HOTFIX,
        mode=MODE_HOTFIX,
        input=v,
        lines=[f"Before starting work on {fix}, branch off {parent} to {fix}"],
        revisions={"hotfix": str(fix)},
        branches={"parent": parent},
    )


def month_start_guidance(v: Revision, *, main_branch: str = DEFAULT_MAIN_BRANCH) -> Guidance:
    month = v.current_month()
    start = v.month_start()
    return Guidance(
        kind=KIND_MONTH_START,
        mode=MODE_MONTH_START,
        input=v,
        lines=[
            f"Merge outstanding branches for the month into {month}, "
            f"and {month} to {main_branch} and from {main_branch} to {start}",
        ],
        revisions={"monthStart": str(start)},
        branches={"currentMonth": month, "main": main_branch},
    )


def usage_doc(text: str) -> dict[str, Any]:
    return {"kind": KIND_USAGE, "mode": MODE_HELP, "usage": text}


def error_doc(mode: str, message: str) -> dict[str, Any]:
    return {"kind": KIND_ERROR, "mode": mode, "error": message}
