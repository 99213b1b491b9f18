from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from prompt_qc.models.report import AgentTestReport

REPORT_TEMPLATES_DIR = Path(__file__).parent / "templates"

STATUS_ICONS = {"pass": "PASS", "fail": "FAIL", "warning": "WARN"}


def render_report_markdown(report: AgentTestReport) -> str:
    """Render an agent test report as Markdown."""
    env = Environment(
        loader=FileSystemLoader(str(REPORT_TEMPLATES_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    template = env.get_template("report.md.j2")
    return template.render(report=report, icons=STATUS_ICONS)


def save_report(content: str, output_path: str) -> Path:
    """Save rendered report content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
