"""LLM access and structured-response extraction."""

from personalens.llm.client import GeminiClient, GeminiConfig, TextGenerator
from personalens.llm.extraction import extract_json_object

__all__ = ["TextGenerator", "GeminiClient", "GeminiConfig", "extract_json_object"]
