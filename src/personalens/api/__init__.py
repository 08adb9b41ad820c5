"""HTTP API for persona analysis."""
