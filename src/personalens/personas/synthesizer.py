"""Generate a marketing persona from one cluster's statistics."""

import json

from personalens.clustering.aggregation import ClusterGroup
from personalens.llm.client import TextGenerator
from personalens.llm.extraction import extract_json_object, require_string_fields
from personalens.personas.models import Persona

PERSONA_PROMPT = """You are an expert marketing analyst. A customer cluster has these average stats:
{stats}
- Number of customers in this segment: {size}

Create a persona for this segment. Respond ONLY as a JSON object with keys: "persona_name", "description", and "marketing_strategy". The value of "marketing_strategy" must be a single plain string, not a list or nested object."""

PERSONA_FIELDS = ("persona_name", "description", "marketing_strategy")


class PersonaSynthesizer:
    """Turn cluster statistics into a persona via the LLM.

    The synthesizer only sees a group's size and means; the caller tags the
    returned persona with its cluster id.
    """

    def __init__(self, llm: TextGenerator) -> None:
        self.llm = llm

    def build_prompt(self, group: ClusterGroup) -> str:
        return PERSONA_PROMPT.format(
            stats=json.dumps(group.means, indent=2),
            size=group.size,
        )

    async def synthesize(self, group: ClusterGroup) -> Persona | None:
        """Synthesize a persona for a cluster group.

        Args:
            group: Cluster group with members and means

        Returns:
            Untagged persona, or None for an empty group (no LLM call)

        Raises:
            MalformedResponseError: If the reply lacks a persona field
            UpstreamError: If the LLM call fails
        """
        if group.is_empty:
            return None

        raw_text = await self.llm.generate(self.build_prompt(group))
        fields = require_string_fields(extract_json_object(raw_text), PERSONA_FIELDS)
        return Persona(**fields)
