"""FastAPI application with health and persona analysis endpoints."""

from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from rich.console import Console

from personalens import __version__
from personalens.errors import InputError, PipelineError
from personalens.etl import load_records
from personalens.llm import GeminiClient, GeminiConfig, TextGenerator
from personalens.personas import PersonaPipeline, PipelineConfig

console = Console()

app = FastAPI(
    title="PersonaLens API",
    description="LLM-assisted customer segmentation and persona synthesis",
    version=__version__,
)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    services: dict[str, bool]


class AnalyzeRequest(BaseModel):
    """Analysis request carrying raw CSV text."""

    csv_data: str | None = None


class KEstimationModel(BaseModel):
    """Cluster-count estimate with rationale."""

    k: int
    reasoning: str


class PersonaModel(BaseModel):
    """Persona synthesized for one cluster."""

    cluster_id: int
    persona_name: str
    description: str
    marketing_strategy: str


class AnalysisResponse(BaseModel):
    """Successful analysis response."""

    k_estimation: KEstimationModel
    personas: list[PersonaModel]


class ErrorResponse(BaseModel):
    """Failed analysis response."""

    error: str
    code: str


def get_text_generator() -> TextGenerator:
    """Provide an unopened Gemini client; the route opens it once the input is valid."""
    return GeminiClient()


def get_pipeline_config() -> PipelineConfig:
    return PipelineConfig()


def error_response(error: Exception) -> JSONResponse:
    """Convert an exception to the ``{"error", "code"}`` response shape."""
    if isinstance(error, PipelineError):
        body = ErrorResponse(error=str(error), code=error.code)
        status_code = error.status_code
    else:
        body = ErrorResponse(
            error=str(error) or "An internal server error occurred.",
            code="internal_error",
        )
        status_code = 500
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get("/api/v1/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Reports whether an LLM credential is configured.
    """
    llm_configured = bool(GeminiConfig().google_api_key)
    return HealthResponse(
        status="ok" if llm_configured else "degraded",
        version=__version__,
        services={"llm_configured": llm_configured},
    )


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "name": "PersonaLens API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
        "analyze": "/api/v1/analyze",
    }


@app.post(
    "/api/v1/analyze",
    response_model=AnalysisResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
@app.post("/api/analyze", response_model=None, include_in_schema=False)
async def analyze(
    request: AnalyzeRequest,
    llm: Annotated[TextGenerator, Depends(get_text_generator)],
    config: Annotated[PipelineConfig, Depends(get_pipeline_config)],
) -> AnalysisResponse | JSONResponse:
    """
    Cluster customer rows and synthesize a persona per cluster.

    Args:
        request: Body with ``csv_data`` (header row, one identifier column)

    Returns:
        k estimate and personas ordered by cluster id, or an error body
    """
    pipeline = PersonaPipeline(llm=llm, config=config)
    try:
        if not request.csv_data:
            raise InputError("CSV data is required.")
        records = load_records(request.csv_data, id_field=config.id_field)
        async with llm:
            result = await pipeline.run(records)
    except Exception as e:
        console.print(
            f"[bold red]Error in analysis API[/bold red] (stage={pipeline.stage.value}): "
            f"{type(e).__name__}: {e}"
        )
        return error_response(e)

    return AnalysisResponse.model_validate(result.to_dict())
