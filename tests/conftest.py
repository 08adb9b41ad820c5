"""Shared fixtures and test doubles."""

import asyncio
import json

import numpy as np
import pytest

from personalens.clustering.engine import ClusterEngine
from personalens.llm.client import TextGenerator

SAMPLE_CSV = """customer_id,age,visits_per_month,total_spent
1,24,1,50.50
2,45,15,850.75
3,31,3,120.00
4,65,2,75.20
5,22,12,650.00
6,50,16,950.50
7,29,2,90.80
8,38,10,550.00
9,58,4,210.00
10,21,1,45.00
11,48,14,890.25
12,33,4,150.70
13,61,3,110.00
14,25,11,720.50
15,55,18,1100.00
16,28,1,60.00
17,36,9,480.30
18,42,13,780.00
19,68,2,95.50
20,23,10,610.00
"""


class ScriptedLLM(TextGenerator):
    """Text generator returning canned replies by prompt type."""

    def __init__(
        self,
        k: int | str = 3,
        reasoning: str = "Spend splits into low, medium and high groups.",
        persona_reply: str | None = None,
        k_reply: str | None = None,
    ) -> None:
        self.k_reply = k_reply or json.dumps({"estimated_k": k, "reasoning": reasoning})
        self.persona_reply = persona_reply or (
            "Here is the persona:\n```json\n"
            + json.dumps(
                {
                    "persona_name": "Steady Spender",
                    "description": "Visits regularly and spends moderately.",
                    "marketing_strategy": "Offer a loyalty tier upgrade.",
                }
            )
            + "\n```"
        )
        self.prompts: list[str] = []

    @property
    def persona_calls(self) -> int:
        return sum(1 for p in self.prompts if "persona_name" in p)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        await asyncio.sleep(0)
        if "estimated_k" in prompt:
            return self.k_reply
        return self.persona_reply


class FixedClusterEngine(ClusterEngine):
    """Cluster engine returning a preset assignment and counting calls."""

    def __init__(self, assignments: list[int]) -> None:
        self.assignments = assignments
        self.calls = 0

    def assign(self, vectors: np.ndarray, k: int) -> list[int]:
        self.calls += 1
        return list(self.assignments)


@pytest.fixture
def sample_csv() -> str:
    """The 20-row customer CSV."""
    return SAMPLE_CSV


@pytest.fixture
def sample_records() -> list[dict]:
    """The 20-row customer CSV as records."""
    lines = SAMPLE_CSV.strip().splitlines()
    header = lines[0].split(",")
    records = []
    for line in lines[1:]:
        cid, age, visits, spent = line.split(",")
        records.append(dict(zip(header, [int(cid), int(age), int(visits), float(spent)])))
    return records


@pytest.fixture
def scripted_llm() -> ScriptedLLM:
    return ScriptedLLM()


@pytest.fixture
def make_llm() -> type[ScriptedLLM]:
    """Factory for scripted text generators."""
    return ScriptedLLM


@pytest.fixture
def make_engine() -> type[FixedClusterEngine]:
    """Factory for preset cluster engines."""
    return FixedClusterEngine
