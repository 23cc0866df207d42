"""Tests for utils/output.py — JSON/CSV/table output routing."""
import json

from ppc_advisor.models.analysis import ActionType
from ppc_advisor.utils.output import OutputFormat, print_csv, print_json, print_output


# ── print_json ───────────────────────────────────────────────────────

def test_print_json_list(capsys):
    print_json([{"id": "1"}, {"id": "2"}])
    assert len(json.loads(capsys.readouterr().out)) == 2


def test_print_json_dict(capsys):
    print_json({"key": "value"})
    assert json.loads(capsys.readouterr().out) == {"key": "value"}


# ── print_csv ────────────────────────────────────────────────────────

def test_print_csv_columns(capsys):
    print_csv([{"a": 1, "b": 2.5, "c": "x"}], columns=["a", "b"])
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["a,b", "1,2.50"]


def test_print_csv_lists_and_enums(capsys):
    print_csv([{"flags": [ActionType.REVIEW_PREVIEW, ActionType.REVIEW_DETAIL_PAGE], "n": None}])
    lines = capsys.readouterr().out.splitlines()
    assert lines[1] == "REVIEW_PREVIEW; REVIEW_DETAIL_PAGE,"


def test_print_csv_empty(capsys):
    print_csv([])
    assert capsys.readouterr().out == ""


# ── print_output routing ─────────────────────────────────────────────

def test_print_output_json(capsys):
    print_output([{"x": 1}], OutputFormat.JSON)
    assert json.loads(capsys.readouterr().out) == [{"x": 1}]


def test_print_output_table_goes_to_stderr(capsys):
    print_output([{"x": 1}], OutputFormat.TABLE, title="T")
    captured = capsys.readouterr()
    assert captured.out == ""
