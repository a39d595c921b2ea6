from pathlib import Path
import textwrap

import pytest

from uiquery.core import failures
from uiquery.core.classifier import evaluate
from uiquery.core.conditions import ANY
from uiquery.core.errors import BadMetadata
from uiquery.core.query import build_query
from uiquery.core.query_loader import find_query_files, load_query_file
from uiquery.selectors.locator import Locator
from uiquery.selectors.snapshot import ElementSnapshot, MatchSnapshot


def write(tmp_path: Path, body: str, name: str = "checks.yaml") -> Path:
    p = tmp_path / name
    p.write_text(textwrap.dedent(body), encoding="utf-8")
    return p


def test_load_query_file_multiple_docs(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: header
        url: /dashboard
        checks:
          - locator: "css:.user"
            conditions: {count: 1, text: alice}
          - locator: {strategy: button, value: Sign out}
        ---
        name: footer
        url: https://example.com/
        checks:
          - locator: [link, About]
            conditions: {count: any, visible: false}
            timeout_ms: 500
        """,
    )
    specs = load_query_file(f)

    assert [s.name for s in specs] == ["header", "footer"]
    header, footer = specs
    assert header.checks[0].locator == Locator.css(".user")
    assert header.checks[0].conditions == {"count": 1, "text": "alice"}
    assert header.checks[1].locator == Locator.button("Sign out")
    assert footer.checks[0].locator == Locator.link("About")
    assert footer.checks[0].conditions == {"count": ANY, "visible": False}
    assert footer.checks[0].timeout_ms == 500


def test_env_substitution(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("LOGIN_PATH", "/session/new")
    f = write(
        tmp_path,
        """
        name: login
        url: ${LOGIN_PATH}
        checks:
          - locator: "fillable_field:Email"
        """,
    )
    assert load_query_file(f)[0].url == "/session/new"


def test_invalid_document_raises_bad_metadata(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: broken
        url: /x
        checks:
          - locator: "css:.a"
            conditions: {count: -2}
        """,
    )
    with pytest.raises(BadMetadata) as exc:
        load_query_file(f)
    assert "document 1" in str(exc.value)
    assert "count must be a non-negative integer" in str(exc.value)


def test_unknown_strategy_is_rejected(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: broken
        url: /x
        checks:
          - locator: {strategy: option, value: Blue}
        """,
    )
    with pytest.raises(BadMetadata):
        load_query_file(f)


def test_missing_checks_is_rejected(tmp_path: Path):
    f = write(tmp_path, "name: empty\nurl: /x\nchecks: []\n")
    with pytest.raises(BadMetadata):
        load_query_file(f)


def test_non_mapping_document(tmp_path: Path):
    f = write(tmp_path, "- just\n- a list\n")
    with pytest.raises(BadMetadata) as exc:
        load_query_file(f)
    assert "must be a mapping" in str(exc.value)


def test_yaml_syntax_error(tmp_path: Path):
    f = write(tmp_path, "name: [unclosed\n")
    with pytest.raises(BadMetadata) as exc:
        load_query_file(f)
    assert "YAML parse error" in str(exc.value)


def test_empty_file(tmp_path: Path):
    f = write(tmp_path, "")
    with pytest.raises(BadMetadata):
        load_query_file(f)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_query_file(tmp_path / "nope.yaml")


def test_find_query_files(tmp_path: Path):
    write(tmp_path, "x: 1\n", "a.yaml")
    (tmp_path / "sub").mkdir()
    write(tmp_path / "sub", "x: 1\n", "b.yml")
    assert [p.name for p in find_query_files(tmp_path)] == ["a.yaml", "b.yml"]
    assert [p.name for p in find_query_files(tmp_path, recursive=False)] == ["a.yaml"]


def test_numeric_text_is_read_as_a_string(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: copyright
        url: /
        checks:
          - locator: "css:footer"
            conditions: {text: 2024}
        """,
    )
    check = load_query_file(f)[0].checks[0]
    assert check.conditions == {"text": "2024"}

    snap = MatchSnapshot(elements=(ElementSnapshot(handle=None, visible=True, text="(c) 1999"),))
    query = evaluate(build_query(None, check.locator, check.conditions), snap)
    assert query.errors == (failures.NOT_FOUND,)


def test_non_string_text_is_rejected(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: broken
        url: /x
        checks:
          - locator: "css:.a"
            conditions: {text: [a, b]}
        """,
    )
    with pytest.raises(BadMetadata) as exc:
        load_query_file(f)
    assert "text must be a string" in str(exc.value)


def test_visible_must_be_a_boolean(tmp_path: Path):
    f = write(
        tmp_path,
        """
        name: broken
        url: /x
        checks:
          - locator: "css:.a"
            conditions: {visible: sometimes}
        """,
    )
    with pytest.raises(BadMetadata) as exc:
        load_query_file(f)
    assert "visible must be true or false" in str(exc.value)
