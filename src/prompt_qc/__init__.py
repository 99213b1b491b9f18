"""Prompt quality control and agent testing."""

from prompt_qc.quality.evaluator import evaluate_prompt_quality
from prompt_qc.quality.validator import QualityValidator

__version__ = "0.1.0"

__all__ = ["QualityValidator", "evaluate_prompt_quality"]
