from __future__ import annotations

import logging
from dataclasses import dataclass

from resume_optimizer.ai.types import ModelClient
from resume_optimizer.schemas import CandidateProfile, DomainClassification, OptimizationResult

from .classifier import DomainClassifier
from .extractor import ProfileExtractor
from .generator import OptimizationGenerator
from .stage import StageResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineOutcome:
    extraction: StageResult[CandidateProfile]
    classification_result: StageResult[DomainClassification]
    optimization_result: StageResult[OptimizationResult]

    @property
    def profile(self) -> CandidateProfile:
        return self.extraction.value

    @property
    def classification(self) -> DomainClassification:
        return self.classification_result.value

    @property
    def optimization(self) -> OptimizationResult:
        return self.optimization_result.value

    @property
    def stages(self) -> tuple[StageResult, ...]:
        return (self.extraction, self.classification_result, self.optimization_result)

    @property
    def provenance(self) -> dict[str, str]:
        return {stage.stage: stage.provenance for stage in self.stages}


class AnalysisPipeline:
    """Runs extract, classify and generate in order for one resume.

    Holds no per-request state; one instance is shared by all requests.
    Without ``max_output_tokens`` each call uses the client's own limit.
    """

    def __init__(self, client: ModelClient, *, max_output_tokens: int | None = None):
        self.client = client
        self.extractor = ProfileExtractor(client, max_output_tokens=max_output_tokens)
        self.classifier = DomainClassifier(client, max_output_tokens=max_output_tokens)
        self.generator = OptimizationGenerator(client, max_output_tokens=max_output_tokens)

    def run(self, resume_text: str, target_domain: str | None = None) -> PipelineOutcome:
        extraction = self.extractor.extract(resume_text)
        classification = self.classifier.classify(extraction.value)
        optimization = self.generator.generate(extraction.value, classification.value, target_domain)
        outcome = PipelineOutcome(
            extraction=extraction,
            classification_result=classification,
            optimization_result=optimization,
        )
        logger.info("pipeline_completed model=%s provenance=%s", self.client.model, outcome.provenance)
        return outcome
