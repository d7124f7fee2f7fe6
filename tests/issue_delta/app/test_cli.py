import json

import pytest
from typer.testing import CliRunner

from issue_delta.app.cli import app


runner = CliRunner()


@pytest.fixture
def reports(tmp_path, make_report):
    before = tmp_path / "before.json"
    after = tmp_path / "after.md"
    before.write_text(make_report(("NESTED_LOOP", "high", "O_n2"), ("MAGIC_NUMBER", "low", "O_1")), encoding="utf-8")
    after.write_text(
        "Analysis finished.\n```json\n" + make_report(("MAGIC_NUMBER", "medium", "O_1")) + "\n```\n",
        encoding="utf-8",
    )
    return before, after


def _ingest_both(reports):
    before, after = reports
    r1 = runner.invoke(app, ["ingest", "v1", str(before), "--uploaded-at", "2024-03-01T09:00:00+00:00"])
    r2 = runner.invoke(app, ["ingest", "v2", str(after), "--uploaded-at", "2024-03-02T09:00:00+00:00"])
    assert r1.exit_code == 0, r1.output
    assert r2.exit_code == 0, r2.output


def _compare_json(*args):
    result = runner.invoke(app, ["compare", *args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_ingest_prints_snapshot(reports):
    before, _ = reports

    result = runner.invoke(app, ["ingest", "v1", str(before)])

    assert result.exit_code == 0
    assert "ANALYSIS" in result.stdout
    assert "Version: v1" in result.stdout
    assert "NESTED_LOOP" in result.stdout


def test_ingest_twice_fails(reports):
    before, _ = reports
    runner.invoke(app, ["ingest", "v1", str(before)])

    result = runner.invoke(app, ["ingest", "v1", str(before)])

    assert result.exit_code == 1
    assert "Analysis already exists for version: v1" in result.output


def test_ingest_rejects_bad_timestamp(reports):
    before, _ = reports

    result = runner.invoke(app, ["ingest", "v1", str(before), "--uploaded-at", "yesterday"])

    assert result.exit_code == 2


def test_ingest_rejects_unsafe_version_id(reports):
    before, _ = reports

    result = runner.invoke(app, ["ingest", "../v1", str(before)])

    assert result.exit_code == 1
    assert "Invalid version id" in result.output


def test_internal_value_error_is_not_reported_as_request_error(reports, monkeypatch):
    import issue_delta.app.cli as cli_module

    def broken_format(snapshot):
        raise ValueError("formatter bug")

    monkeypatch.setattr(cli_module, "format_snapshot", broken_format)
    before, _ = reports

    result = runner.invoke(app, ["ingest", "v1", str(before)])

    assert isinstance(result.exception, ValueError)
    assert "Error: formatter bug" not in result.output


def test_analysis_json(reports):
    _ingest_both(reports)

    result = runner.invoke(app, ["analysis", "v2", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["versionId"] == "v2"
    assert data["issues"][0]["issueCode"] == "MAGIC_NUMBER"


def test_compare_json_wire_shape(reports):
    _ingest_both(reports)

    data = _compare_json("v1", "v2")

    assert set(data) == {"id", "fromVersionId", "toVersionId", "createdAt", "results"}
    assert data["results"] == [
        {
            "issueCode": "NESTED_LOOP",
            "changeType": "IMPROVED",
            "beforeSeverity": "high",
            "afterSeverity": None,
            "beforeComplexity": "O_n2",
            "afterComplexity": None,
        },
        {
            "issueCode": "MAGIC_NUMBER",
            "changeType": "WORSENED",
            "beforeSeverity": "low",
            "afterSeverity": "medium",
            "beforeComplexity": "O_1",
            "afterComplexity": "O_1",
        },
    ]


def test_compare_twice_returns_same_id(reports):
    _ingest_both(reports)

    assert _compare_json("v1", "v2")["id"] == _compare_json("v1", "v2")["id"]


def test_compare_reversed_needs_auto_order(reports):
    _ingest_both(reports)

    result = runner.invoke(app, ["compare", "v2", "v1"])
    assert result.exit_code == 1
    assert "strictly before" in result.output

    data = _compare_json("v2", "v1", "--auto-order")
    assert (data["fromVersionId"], data["toVersionId"]) == ("v1", "v2")


def test_compare_missing_version(reports):
    _ingest_both(reports)

    result = runner.invoke(app, ["compare", "v1", "v9"])

    assert result.exit_code == 1
    assert "No analysis found for version: v9" in result.output


def test_compare_human_output(reports):
    _ingest_both(reports)

    result = runner.invoke(app, ["compare", "v1", "v2"])

    assert result.exit_code == 0
    assert "COMPARISON" in result.stdout
    assert "IMPROVED: 1 | UNCHANGED: 0 | WORSENED: 1" in result.stdout


def test_explain_and_show(reports):
    _ingest_both(reports)
    comparison_id = _compare_json("v1", "v2")["id"]

    shown = runner.invoke(app, ["show", comparison_id, "--json"])
    assert shown.exit_code == 0
    assert json.loads(shown.stdout)["explanation"] is None

    explained = runner.invoke(app, ["explain", comparison_id, "--json"])
    assert explained.exit_code == 0
    explanation = json.loads(explained.stdout)
    assert explanation["comparisonId"] == comparison_id
    assert explanation["polished"] is False
    assert "### Regressions (1)" in explanation["content"]
    assert "Severity increased from low to medium." in explanation["content"]

    again = runner.invoke(app, ["explain", comparison_id, "--json"])
    assert json.loads(again.stdout) == explanation

    shown = runner.invoke(app, ["show", comparison_id])
    assert shown.exit_code == 0
    assert "EXPLANATION" in shown.stdout


def test_explain_unknown_comparison():
    result = runner.invoke(app, ["explain", "deadbeef"])

    assert result.exit_code == 1
    assert "Comparison not found: deadbeef" in result.output


def test_invalid_configuration_exit_code(monkeypatch):
    monkeypatch.setenv("ISSUE_DELTA_EXPLANATION__TIMEOUT_SECONDS", "-1")

    result = runner.invoke(app, ["analysis", "v1"])

    assert result.exit_code == 2
    assert "invalid configuration" in result.output
