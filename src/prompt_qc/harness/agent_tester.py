"""Black-box test harness for content-generation agents."""

from __future__ import annotations

import logging
from typing import Callable

from prompt_qc.clients.agent_client import AgentServiceClient, AgentServiceError
from prompt_qc.config import HarnessConfig
from prompt_qc.models.agent import AgentPrompt
from prompt_qc.models.report import AgentTestReport, QualityMetrics, TestResult
from prompt_qc.quality.evaluator import average_metrics, evaluate_prompt_quality

logger = logging.getLogger(__name__)

# Fixed for every agent; an agent's own quality_threshold is only reported
PASS_SCORE = 75
WARNING_SCORE = 60

REC_DEDUPLICATE = "Implement deduplication logic to prevent similar prompt generation"
REC_OVERALL = "Improve prompt generation templates for higher quality scores"
REC_CLARITY = "Enhance clarity by ensuring all prompts have titles, descriptions, and tags"
REC_USEFULNESS = "Add use cases and example outputs to improve usefulness"
REC_SEO = "Optimize SEO by ensuring keywords appear in titles and descriptions"


def is_metadata_complete(prompt: AgentPrompt) -> bool:
    return bool(
        prompt.topic
        and prompt.keyword
        and prompt.quality_score is not None
        and prompt.status
        and prompt.raw_input
        and prompt.raw_output
    )


def duplicate_rate(prompts: list[AgentPrompt]) -> float:
    """Share of non-empty topics that repeat an earlier topic."""
    titles = [p.topic for p in prompts if p.topic]
    if not titles:
        return 0.0
    return (len(titles) - len(set(titles))) / len(titles)


class AgentTestHarness:
    """Runs a sequential battery of checks against an agent service.

    Steps depend on the side effects of earlier ones (generated prompts must
    be stored before they can be sampled), so nothing runs in parallel.
    """

    def __init__(
        self,
        client: AgentServiceClient,
        settings: HarnessConfig | None = None,
        *,
        on_result: Callable[[TestResult], None] | None = None,
    ):
        self.client = client
        self.settings = settings or HarnessConfig()
        self.on_result = on_result

    def _record(self, results: list[TestResult], result: TestResult) -> None:
        log = logger.info if result.status == "pass" else logger.warning
        log("[%s] %s: %s", result.status.upper(), result.test, result.message)
        results.append(result)
        if self.on_result:
            self.on_result(result)

    async def test_agent_generation(
        self,
        agent_id: str,
        keywords: list[str],
    ) -> list[TestResult]:
        """Run the generation battery. Never raises; errors become failing results."""
        cfg = self.settings
        results: list[TestResult] = []

        try:
            # 1. Agent exists
            try:
                agent = await self.client.get_agent(agent_id)
                lookup_error = None
            except AgentServiceError as exc:
                agent, lookup_error = None, str(exc)

            if agent is None:
                message = "Agent not found"
                if lookup_error:
                    message = f"Agent lookup failed: {lookup_error}"
                self._record(results, TestResult(test="Agent Exists", status="fail", message=message))
                return results

            self._record(results, TestResult(
                test="Agent Exists",
                status="pass",
                message=f'Agent "{agent.name}" found and active',
            ))

            # 2. Generation
            topics = [{"keyword": k, "topic": k} for k in keywords[: cfg.generation_batch_size]]
            try:
                generated = await self.client.generate(
                    agent_id, topics, batch_size=cfg.generation_batch_size,
                )
            except AgentServiceError as exc:
                generated = {"success": False, "error": str(exc)}

            if not generated.get("success"):
                self._record(results, TestResult(
                    test="Prompt Generation",
                    status="fail",
                    message=f"Generation failed: {generated.get('error')}",
                ))
                return results

            self._record(results, TestResult(
                test="Prompt Generation",
                status="pass",
                message=f"Generated {generated.get('generated')} prompts successfully",
                details=generated.get("results"),
            ))

            # 3. Storage
            prompts = await self.client.list_prompts(agent_id, limit=cfg.storage_limit)
            if not prompts:
                self._record(results, TestResult(
                    test="Prompt Storage",
                    status="warning",
                    message="No prompts found in database",
                ))
            else:
                self._record(results, TestResult(
                    test="Prompt Storage",
                    status="pass",
                    message=f"Found {len(prompts)} prompts in database",
                    details={"statuses": [p.status for p in prompts]},
                ))

            # 4. Metadata completeness
            sample = prompts[: cfg.metadata_sample_size]
            complete = sum(1 for p in sample if is_metadata_complete(p))
            all_complete = complete == len(sample)
            self._record(results, TestResult(
                test="Metadata Completeness",
                status="pass" if all_complete else "warning",
                message=(
                    "All prompts have complete metadata"
                    if all_complete
                    else "Some prompts missing metadata fields"
                ),
                details={"checked": len(sample), "complete": complete},
            ))

            # 5. Quality scores; the agent's own threshold is reported, not applied
            average = sum(p.quality_score or 0 for p in sample) / (len(sample) or 1)
            if average >= PASS_SCORE:
                status = "pass"
            elif average >= WARNING_SCORE:
                status = "warning"
            else:
                status = "fail"
            self._record(results, TestResult(
                test="Quality Scores",
                status=status,
                message=f"Average quality score: {average:.1f}/100",
                details={
                    "average": average,
                    "threshold": agent.quality_threshold,
                    "samples": [
                        {"keyword": p.keyword, "score": p.quality_score} for p in sample
                    ],
                },
            ))
            return results
        except Exception as exc:
            logger.error("Agent test run failed", exc_info=True)
            self._record(results, TestResult(
                test="Test Execution",
                status="fail",
                message=f"Test failed with error: {str(exc) or type(exc).__name__}",
                details={"error": repr(exc)},
            ))
            return results

    async def generate_test_report(self, agent_id: str) -> AgentTestReport:
        """Run the battery, sample recent output, and build a recommendation report."""
        cfg = self.settings
        logger.info("Generating test report for agent %s", agent_id)

        results = await self.test_agent_generation(agent_id, list(cfg.test_keywords))
        recommendations: list[str] = []
        metrics = QualityMetrics()

        try:
            recent = await self.client.list_prompts(agent_id, limit=cfg.report_sample_size)
        except Exception as exc:
            logger.error("Could not fetch prompt sample", exc_info=True)
            self._record(results, TestResult(
                test="Quality Sample",
                status="fail",
                message=f"Could not fetch recent prompts: {exc}",
            ))
            recent = []

        if recent:
            metrics = average_metrics([evaluate_prompt_quality(p) for p in recent])

            rate = duplicate_rate(recent)
            if rate > cfg.duplicate_rate_threshold:
                self._record(results, TestResult(
                    test="Duplicate Detection",
                    status="warning",
                    message=f"{rate * 100:.1f}% duplicate titles detected",
                    details={"duplicate_rate": rate},
                ))
                recommendations.append(REC_DEDUPLICATE)
            else:
                self._record(results, TestResult(
                    test="Duplicate Detection",
                    status="pass",
                    message="Low duplicate rate detected",
                ))

        threshold = cfg.recommendation_threshold
        if metrics.overall < threshold:
            recommendations.append(REC_OVERALL)
        if metrics.clarity < threshold:
            recommendations.append(REC_CLARITY)
        if metrics.usefulness < threshold:
            recommendations.append(REC_USEFULNESS)
        if metrics.seo_optimization < threshold:
            recommendations.append(REC_SEO)

        report = AgentTestReport(
            agent_id=agent_id,
            tests_run=len(results),
            passed=sum(1 for r in results if r.status == "pass"),
            failed=sum(1 for r in results if r.status == "fail"),
            warnings=sum(1 for r in results if r.status == "warning"),
            results=results,
            quality_metrics=metrics,
            recommendations=recommendations,
        )
        logger.info(
            "Report for %s: %d passed, %d failed, %d warnings",
            agent_id, report.passed, report.failed, report.warnings,
        )
        return report
