"""Customer persona estimation, synthesis, and orchestration."""

from personalens.personas.config import PipelineConfig
from personalens.personas.estimator import KEstimator
from personalens.personas.models import AnalysisResult, KEstimate, Persona
from personalens.personas.pipeline import PersonaPipeline, PipelineStage
from personalens.personas.synthesizer import PersonaSynthesizer

__all__ = [
    "KEstimate",
    "Persona",
    "AnalysisResult",
    "PipelineConfig",
    "KEstimator",
    "PersonaSynthesizer",
    "PersonaPipeline",
    "PipelineStage",
]
