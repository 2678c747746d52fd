from __future__ import annotations

from datetime import date

import pytest

from calver_cli.guidance import (
    KIND_ERROR,
    KIND_HOTFIX,
    KIND_MONTH_START,
    KIND_NEXT_VERSION,
    KIND_USAGE,
    error_doc,
    hotfix_guidance,
    month_start_guidance,
    next_version_guidance,
    usage_doc,
    usage_text,
)
from calver_cli.revision import Revision, RevisionError


def test_next_version_for_release_has_single_step():
    g = next_version_guidance(Revision.parse("24.03.1"))
    assert g.kind == KIND_NEXT_VERSION
    assert g.lines == [
        "Before starting coding work on 24.03.2, tag 24.03.1 and merge it to 24.03, "
        "then branch off 24.03 to 24.03.2"
    ]
    assert g.revisions == {"nextVersion": "24.03.2"}
    assert g.branches == {"parent": "24.03"}


def test_next_version_for_hotfix_merges_to_grandparent_and_warns():
    g = next_version_guidance(Revision.parse("24.03.2.1"))
    assert g.lines == [
        "Before starting coding work on 24.03.3, tag 24.03.2.1 and merge it to 24.03.2, "
        "and to 24.03 (and its descendants), then branch off 24.03.2 to 24.03.3",
        "(But be mindful that 24.03.3 might already exist, and it could be something else, "
        "or it could even be a different month!)",
    ]
    assert g.branches == {"parent": "24.03.2", "grandparent": "24.03"}


def test_hotfix_branches_off_release():
    g = hotfix_guidance(Revision.parse("24.03.2"))
    assert g.kind == KIND_HOTFIX
    assert g.lines == ["Before starting work on 24.03.2.1, branch off 24.03.2 to 24.03.2.1"]


def test_hotfix_of_hotfix_keeps_release_parent():
    g = hotfix_guidance(Revision.parse("24.03.2.1"))
    assert g.lines == ["Before starting work on 24.03.2.2, branch off 24.03.2 to 24.03.2.2"]


def test_month_start_uses_main_branch():
    g = month_start_guidance(Revision.parse("24.12.4"), main_branch="main")
    assert g.kind == KIND_MONTH_START
    assert g.lines == [
        "Merge outstanding branches for the month into 24.12, and 24.12 to main "
        "and from main to 25.01.1"
    ]
    assert g.revisions == {"monthStart": "25.01.1"}


def test_month_start_defaults_to_master():
    g = month_start_guidance(Revision.parse("24.03.1"))
    assert "24.03 to master and from master to 24.04.1" in g.lines[0]


def test_month_start_propagates_invalid_month():
    with pytest.raises(RevisionError):
        month_start_guidance(Revision.parse("24.00.1"))


def test_to_doc_shape():
    doc = next_version_guidance(Revision.parse("24.03.1")).to_doc()
    assert doc["kind"] == KIND_NEXT_VERSION
    assert doc["mode"] == "nextVersion"
    assert doc["input"] == "24.03.1"
    assert doc["steps"] and isinstance(doc["steps"], list)


def test_usage_text_shows_todays_default():
    text = usage_text("calver", date(2026, 10, 18))
    assert text.startswith("CalVer for Git\n")
    assert "(eg 26.10.1)" in text
    assert "calver --mode=hotfix <previous version>" in text


def test_usage_and_error_docs():
    assert usage_doc("text") == {"kind": KIND_USAGE, "mode": "help", "usage": "text"}
    assert error_doc("hotfix", "boom") == {"kind": KIND_ERROR, "mode": "hotfix", "error": "boom"}
