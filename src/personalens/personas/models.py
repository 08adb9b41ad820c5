"""Persona analysis models and data structures."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class KEstimate:
    """LLM-estimated cluster count with its rationale."""

    k: int
    reasoning: str

    def to_dict(self) -> dict[str, Any]:
        """Convert estimate to dictionary for serialization."""
        return {"k": self.k, "reasoning": self.reasoning}


@dataclass(frozen=True)
class Persona:
    """Synthesized persona for one cluster.

    ``cluster_id`` is None until the orchestrator tags the persona with the
    index of the cluster it was generated for.
    """

    persona_name: str
    description: str
    marketing_strategy: str
    cluster_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert persona to dictionary for serialization."""
        return {
            "cluster_id": self.cluster_id,
            "persona_name": self.persona_name,
            "description": self.description,
            "marketing_strategy": self.marketing_strategy,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Final output of one pipeline run."""

    k_estimation: KEstimate
    personas: list[Persona]

    def to_dict(self) -> dict[str, Any]:
        """Convert result to the response shape."""
        return {
            "k_estimation": self.k_estimation.to_dict(),
            "personas": [p.to_dict() for p in self.personas],
        }
