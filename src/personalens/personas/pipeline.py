"""Persona analysis pipeline.

Sequences k estimation, vectorization, k-means and aggregation, then fans
persona synthesis out across clusters and assembles one result.
"""

import asyncio
from dataclasses import replace
from enum import Enum
from typing import Sequence

from rich.console import Console

from personalens.clustering.aggregation import ClusterGroup, aggregate_clusters
from personalens.clustering.engine import ClusterEngine, KMeansClusterEngine
from personalens.clustering.features import FeatureVectorizer, Record
from personalens.errors import InputError, InsufficientDataError
from personalens.llm.client import TextGenerator
from personalens.personas.config import PipelineConfig
from personalens.personas.estimator import KEstimator
from personalens.personas.models import AnalysisResult, Persona
from personalens.personas.synthesizer import PersonaSynthesizer

console = Console()


class PipelineStage(str, Enum):
    """Stages of one pipeline run, in order."""

    RECEIVED = "received"
    SAMPLED = "sampled"
    K_ESTIMATED = "k_estimated"
    VECTORIZED = "vectorized"
    CLUSTERED = "clustered"
    AGGREGATED = "aggregated"
    PERSONAS_SYNTHESIZING = "personas_synthesizing"
    ASSEMBLED = "assembled"
    DONE = "done"
    FAILED = "failed"


class PersonaPipeline:
    """Run one persona analysis request end to end."""

    def __init__(
        self,
        llm: TextGenerator,
        config: PipelineConfig | None = None,
        cluster_engine: ClusterEngine | None = None,
        estimator: KEstimator | None = None,
        synthesizer: PersonaSynthesizer | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            llm: Text generator shared by the estimator and synthesizer
            config: Pipeline configuration (uses defaults if None)
            cluster_engine: Clustering backend (k-means if None)
            estimator: K estimator (built from ``llm`` if None)
            synthesizer: Persona synthesizer (built from ``llm`` if None)
        """
        self.config = config or PipelineConfig()
        self.estimator = estimator or KEstimator(llm, sample_size=self.config.sample_size)
        self.synthesizer = synthesizer or PersonaSynthesizer(llm)
        self.cluster_engine = cluster_engine or KMeansClusterEngine(
            random_state=self.config.random_state,
            n_init=self.config.n_init,
            max_iter=self.config.max_iter,
        )
        self.vectorizer = FeatureVectorizer(id_field=self.config.id_field)
        self.stage = PipelineStage.RECEIVED

    async def run(self, records: Sequence[Record]) -> AnalysisResult:
        """Analyze a record set.

        On failure the pipeline moves to ``PipelineStage.FAILED`` and the
        error propagates unchanged.

        Raises:
            InputError: Missing records or fewer records than the estimated k
            MalformedResponseError: Unusable LLM reply
            UpstreamError: LLM call failure
            ClusteringError: k-means failure
        """
        self.stage = PipelineStage.RECEIVED
        try:
            result = await self._run(list(records))
        except BaseException:
            self.stage = PipelineStage.FAILED
            raise
        self._advance(PipelineStage.DONE)
        return result

    async def _run(self, records: list[Record]) -> AnalysisResult:
        if not records:
            raise InputError("No valid customer records found.")

        sample = self.estimator.sample(records)
        self._advance(PipelineStage.SAMPLED)

        console.print(f"  [1/5] Estimating k from {len(sample)} sampled rows...")
        estimate = await self.estimator.estimate_sample(sample)
        self._advance(PipelineStage.K_ESTIMATED)
        console.print(f"    Estimated k={estimate.k}")

        if len(records) < estimate.k:
            raise InsufficientDataError(record_count=len(records), k=estimate.k)

        console.print(f"  [2/5] Vectorizing {len(records):,} records...")
        schema, vectors = self.vectorizer.fit_transform(records)
        self._advance(PipelineStage.VECTORIZED)
        if schema.dropped:
            console.print(f"    Skipping non-numeric columns: {', '.join(schema.dropped)}")

        console.print(f"  [3/5] Running k-means over {schema.dimension} features...")
        assignments = await asyncio.to_thread(self.cluster_engine.assign, vectors, estimate.k)
        self._advance(PipelineStage.CLUSTERED)

        console.print("  [4/5] Aggregating clusters...")
        groups = aggregate_clusters(records, assignments, estimate.k, id_field=self.config.id_field)
        self._advance(PipelineStage.AGGREGATED)

        non_empty = [g for g in groups if not g.is_empty]
        console.print(f"  [5/5] Synthesizing personas for {len(non_empty)} clusters...")
        self._advance(PipelineStage.PERSONAS_SYNTHESIZING)
        personas = await self._synthesize_personas(non_empty)

        result = AnalysisResult(k_estimation=estimate, personas=personas)
        self._advance(PipelineStage.ASSEMBLED)
        return result

    async def _synthesize_personas(self, groups: list[ClusterGroup]) -> list[Persona]:
        """Fan synthesis out across groups with bounded concurrency.

        Every task settles before the first failure (in cluster order) is
        raised. Personas come back sorted by cluster id.
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrent_personas)

        async def synthesize_group(group: ClusterGroup) -> Persona | None:
            async with semaphore:
                persona = await self.synthesizer.synthesize(group)
            if persona is None:
                return None
            return replace(persona, cluster_id=group.cluster_id)

        outcomes = await asyncio.gather(
            *(synthesize_group(g) for g in groups),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        personas = [p for p in outcomes if p is not None]
        personas.sort(key=lambda p: p.cluster_id)
        return personas

    def _advance(self, stage: PipelineStage) -> None:
        self.stage = stage
