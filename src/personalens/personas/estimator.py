"""Ask the LLM for a cluster-count estimate from a data sample."""

import json
import math
from typing import Sequence

from personalens.clustering.features import Record, is_numeric
from personalens.errors import MalformedResponseError
from personalens.llm.client import TextGenerator
from personalens.llm.extraction import extract_json_object, require_string_fields
from personalens.personas.models import KEstimate

K_ESTIMATION_PROMPT = """You are an expert data scientist. I am about to perform K-Means clustering on a dataset of customers. Here is a sample of the data (in JSON format):

DATA SAMPLE:
{sample}

Based on this sample, your task is to make an educated guess for the optimal number of clusters (k). Consider the ranges and potential groupings in the data. Briefly explain your reasoning.

Respond ONLY with a JSON object with the keys "estimated_k" (a number) and "reasoning" (a string).

Example Response: {{"estimated_k": 3, "reasoning": "The 'total_spent' data seems to fall into three distinct groups: low, medium, and high, making k=3 a logical starting point."}}"""


class KEstimator:
    """Estimate k by showing the LLM a prefix sample of the dataset."""

    def __init__(self, llm: TextGenerator, sample_size: int = 20) -> None:
        """Initialize estimator.

        Args:
            llm: Text generator used for the estimate
            sample_size: Maximum number of leading records sent in the prompt
        """
        self.llm = llm
        self.sample_size = sample_size

    def sample(self, records: Sequence[Record]) -> list[dict]:
        """First ``sample_size`` records, as plain dicts."""
        return [dict(r) for r in records[: self.sample_size]]

    def build_prompt(self, sample: list[dict]) -> str:
        return K_ESTIMATION_PROMPT.format(sample=json.dumps(sample, indent=2, default=str))

    async def estimate(self, records: Sequence[Record]) -> KEstimate:
        """Estimate the cluster count for a record set.

        Raises:
            MalformedResponseError: If the reply lacks a usable estimate
            UpstreamError: If the LLM call fails
        """
        return await self.estimate_sample(self.sample(records))

    async def estimate_sample(self, sample: list[dict]) -> KEstimate:
        """Estimate the cluster count from an already drawn sample."""
        raw_text = await self.llm.generate(self.build_prompt(sample))
        return parse_k_estimate(raw_text)


def parse_k_estimate(raw_text: str) -> KEstimate:
    """Validate an ``{"estimated_k", "reasoning"}`` reply.

    ``estimated_k`` must be a JSON number with an integral value of at least 1.
    """
    payload = extract_json_object(raw_text)
    raw_k = payload.get("estimated_k")
    if not is_numeric(raw_k):
        raise MalformedResponseError("Response field 'estimated_k' is missing or not a number.")
    if not math.isfinite(raw_k) or raw_k != int(raw_k) or raw_k < 1:
        raise MalformedResponseError(
            f"Response field 'estimated_k' must be a positive integer, got {raw_k}."
        )

    reasoning = require_string_fields(payload, ("reasoning",))["reasoning"]
    return KEstimate(k=int(raw_k), reasoning=reasoning)
