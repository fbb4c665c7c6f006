from .classifier import DomainClassifier, fallback_classify
from .extractor import EmptyResumeError, ProfileExtractor, fallback_extract
from .generator import OptimizationGenerator, fallback_generate, render_optimized_resume, resolve_target_domain
from .service import AnalysisPipeline, PipelineOutcome
from .stage import StageResult, parse_model_output, run_stage

__all__ = [
    "StageResult",
    "parse_model_output",
    "run_stage",
    "EmptyResumeError",
    "ProfileExtractor",
    "fallback_extract",
    "DomainClassifier",
    "fallback_classify",
    "OptimizationGenerator",
    "fallback_generate",
    "render_optimized_resume",
    "resolve_target_domain",
    "AnalysisPipeline",
    "PipelineOutcome",
]
