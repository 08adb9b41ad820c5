"""PersonaLens: LLM-assisted customer segmentation and persona synthesis."""

__version__ = "0.1.0"
