from dotenv import load_dotenv

# Load environment variables before config is read
load_dotenv()

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from palette_studio import __version__
from palette_studio.api.v1 import router as v1_router
from palette_studio.config import config
from palette_studio.schemas import HealthResponse
from palette_studio.services.colors.errors import InvalidInputError
from palette_studio.utils.logging import get_logger
from palette_studio.utils.metrics import get_metrics

logger = get_logger()

app = FastAPI(
    title="Palette Studio",
    description="Dominant-color extraction and color harmony generation",
    version=__version__
)

if config.allowed_origins():
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"]
    )

app.include_router(v1_router)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    """Precondition violations from the color core are client errors."""
    logger.warning(f"Invalid input: {exc}", extra={"path": request.url.path})
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Palette service health check."""
    return HealthResponse(
        ok=True,
        version=f"v{__version__}",
        service="palette-studio"
    )


@app.get("/metrics")
def metrics():
    """Get in-process palette service metrics."""
    if not config.METRICS_ENABLED:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return get_metrics().get_summary()


@app.get("/")
def root():
    return {"message": "Palette Studio API", "version": __version__}
