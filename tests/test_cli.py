"""Tests for the typer CLI commands that run offline."""

import json

import pytest
from typer.testing import CliRunner

from prompt_qc import cli
from prompt_qc.cli import app
from prompt_qc.models.report import AgentTestReport, QualityMetrics, TestResult

runner = CliRunner()


def _rules(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text(
        "forbidden_phrases: [game changer, synergy]\n"
        "style_guide: Short sentences.\n"
    )
    return path


class TestValidateCommand:
    def test_clean_content(self, tmp_path):
        content = tmp_path / "content.txt"
        content.write_text("A calm and useful prompt.")
        result = runner.invoke(app, ["validate", str(_rules(tmp_path)), str(content)])
        assert result.exit_code == 0
        assert "0.90" in result.output

    def test_issues_exit_code(self, tmp_path):
        content = tmp_path / "content.txt"
        content.write_text("A real game changer.")
        result = runner.invoke(app, ["validate", str(_rules(tmp_path)), str(content)])
        assert result.exit_code == 2
        assert "game changer" in result.output

    def test_missing_rules_file(self, tmp_path):
        content = tmp_path / "content.txt"
        content.write_text("x")
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml"), str(content)])
        assert result.exit_code == 1


class TestInstructionsCommand:
    def test_prints_block(self, tmp_path):
        result = runner.invoke(app, ["instructions", str(_rules(tmp_path))])
        assert result.exit_code == 0
        assert "FORBIDDEN PHRASES (never use): game changer, synergy" in result.output
        assert "STYLE GUIDE:" in result.output


class TestEvaluateCommand:
    def test_scores_record(self, tmp_path):
        record = tmp_path / "prompt.json"
        record.write_text(json.dumps({
            "id": "p1",
            "topic": "blog",
            "keyword": "seo",
            "raw_output": json.dumps({"name": "SEO tool", "tags": ["a", "b", "c"]}),
        }))
        result = runner.invoke(app, ["evaluate", str(record)])
        assert result.exit_code == 0
        assert "Overall" in result.output

    def test_invalid_record(self, tmp_path):
        record = tmp_path / "prompt.json"
        record.write_text("not json")
        result = runner.invoke(app, ["evaluate", str(record)])
        assert result.exit_code == 1


class _OfflineClient:
    def __init__(self, *args, **kwargs):
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None


def _report(*statuses):
    results = [TestResult(test=f"Step {i}", status=s, message=s) for i, s in enumerate(statuses)]
    return AgentTestReport(
        agent_id="agent-1",
        tests_run=len(results),
        passed=statuses.count("pass"),
        failed=statuses.count("fail"),
        warnings=statuses.count("warning"),
        results=results,
        quality_metrics=QualityMetrics(overall=80),
    )


@pytest.fixture
def fake_report(monkeypatch):
    """Patch the CLI so `report` returns a canned AgentTestReport."""
    holder = {}

    class _Harness:
        def __init__(self, client, settings=None, **kwargs):
            pass

        async def generate_test_report(self, agent_id):
            return holder["report"]

    monkeypatch.setattr(cli, "AgentServiceClient", _OfflineClient)
    monkeypatch.setattr(cli, "AgentTestHarness", _Harness)
    return holder


class TestReportCommand:
    def test_failures_exit_code(self, fake_report):
        fake_report["report"] = _report("pass", "fail")
        result = runner.invoke(app, ["report", "agent-1"])
        assert result.exit_code == 2
        assert "Overall: 80.0" in result.output

    def test_failures_still_save_report(self, fake_report, tmp_path):
        fake_report["report"] = _report("fail")
        out = tmp_path / "report.md"
        result = runner.invoke(app, ["report", "agent-1", "--output", str(out)])
        assert result.exit_code == 2
        assert out.exists()

    def test_warnings_only_exit_zero(self, fake_report):
        fake_report["report"] = _report("pass", "warning")
        result = runner.invoke(app, ["report", "agent-1"])
        assert result.exit_code == 0
