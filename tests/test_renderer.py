"""Tests for Markdown report rendering."""

from prompt_qc.models.report import AgentTestReport, QualityMetrics, TestResult
from prompt_qc.report.renderer import render_report_markdown, save_report


def _report(**kwargs) -> AgentTestReport:
    defaults = dict(
        timestamp="2026-01-01T00:00:00+00:00",
        agent_id="agent-1",
        tests_run=2,
        passed=1,
        failed=0,
        warnings=1,
        results=[
            TestResult(test="Agent Exists", status="pass", message='Agent "A" found and active'),
            TestResult(test="Prompt Storage", status="warning", message="No prompts found in database"),
        ],
        quality_metrics=QualityMetrics(
            clarity=75, usefulness=50, uniqueness=100, seo_optimization=33, overall=64.1
        ),
        recommendations=["Add use cases and example outputs to improve usefulness"],
    )
    defaults.update(kwargs)
    return AgentTestReport(**defaults)


class TestRenderReport:
    def test_contains_sections(self):
        text = render_report_markdown(_report())
        assert text.startswith("# Agent Test Report: agent-1")
        assert "| PASS | Agent Exists |" in text
        assert "| WARN | Prompt Storage | No prompts found in database |" in text
        assert "| SEO Optimization | 33.0 |" in text
        assert "| **Overall** | **64.1** |" in text
        assert "- Add use cases and example outputs to improve usefulness" in text

    def test_no_recommendations(self):
        text = render_report_markdown(_report(recommendations=[]))
        assert "No recommendations." in text

    def test_without_metrics(self):
        text = render_report_markdown(_report(quality_metrics=None))
        assert "## Quality Metrics" not in text

    def test_save_report(self, tmp_path):
        path = save_report("# hi\n", str(tmp_path / "out" / "report.md"))
        assert path.read_text(encoding="utf-8") == "# hi\n"
