import pytest

from changelogger.conftest import raw
from changelogger.parser import is_release_message, parse_commit, parse_commits
from changelogger.version_bump import Version


@pytest.mark.parametrize("subject", ["-> v1.2.3", "-> 1.2.3", "  -> v0.1.0  "])
def test_release_markers_are_dropped(subject):
    assert is_release_message(subject)
    assert parse_commit(raw(subject)) is None


@pytest.mark.parametrize("subject", ["-> invalid", "->", "not a release", "-> v1.2"])
def test_not_release_markers(subject):
    assert is_release_message(subject) is None
    assert parse_commit(raw(subject)) is not None


def test_release_marker_version():
    assert is_release_message("-> v1.2.3") == Version(1, 2, 3)


def test_parse_type_and_subject():
    parsed = parse_commit(raw("feat: add new feature"))
    assert parsed
    assert parsed.type_token == "feat"
    assert parsed.scope is None
    assert parsed.subject_text == "add new feature"
    assert parsed.issue_refs == []
    assert parsed.short_hash == "abc1234"


def test_parse_scope():
    parsed = parse_commit(raw("fix(parser): handle edge case"))
    assert parsed
    assert parsed.type_token == "fix"
    assert parsed.scope == "parser"
    assert parsed.subject_text == "handle edge case"


def test_parse_keeps_case_and_trims_token():
    parsed = parse_commit(raw("  FEAT : uppercase  "))
    assert parsed
    assert parsed.type_token == "FEAT"
    assert parsed.subject_text == "uppercase"


def test_parse_no_colon():
    parsed = parse_commit(raw("just a regular commit message"))
    assert parsed
    assert parsed.type_token is None
    assert parsed.subject_text == "just a regular commit message"


def test_parse_multiple_colons_split_on_first():
    parsed = parse_commit(raw("fix: handle error: invalid input"))
    assert parsed
    assert parsed.type_token == "fix"
    assert parsed.subject_text == "handle error: invalid input"


def test_parse_prose_before_colon_is_not_a_type():
    parsed = parse_commit(raw("Merge branch 'main': sync"))
    assert parsed
    assert parsed.type_token is None
    assert parsed.subject_text == "Merge branch 'main': sync"


def test_parse_issue_refs_in_order_with_duplicates():
    parsed = parse_commit(raw("fix: leak (#38) see #12 and #38"))
    assert parsed
    assert parsed.issue_refs == [38, 12, 38]


def test_parse_issue_refs_only_from_subject_text():
    parsed = parse_commit(raw("fix(#5): leak"))
    assert parsed
    assert parsed.scope == "#5"
    assert parsed.issue_refs == []


@pytest.mark.parametrize("subject", ["", ":", "(", "feat(: x", "::::", "   "])
def test_parse_never_fails(subject):
    assert parse_commit(raw(subject)) is not None


def test_parse_commits_preserves_order_and_drops_markers():
    commits = [
        raw("feat: one", sha="1" * 10),
        raw("-> v1.0.0", sha="2" * 10),
        raw("fix: two", sha="3" * 10),
    ]
    assert [parsed.hash for parsed in parse_commits(commits)] == ["1" * 10, "3" * 10]
