"""
GreenTrack India: FastAPI Main Application
Location enrichment (carbon intensity, renewable potential, footprint) and
AI sustainability advisor for Indian states.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from advisor_service import generate_reply
from config import Settings, get_settings
from enrichment import carbon_intensity_for_location, enrich, renewable_potential_for_location
from errors import LocationResolutionError
from footprint import calculate_footprint
from generation_simulator import simulate_realtime_generation
from models import (
    CarbonSection,
    ChatRequest,
    ChatResponse,
    EnrichmentResult,
    EnrichRequest,
    FootprintRequest,
    FootprintResult,
    GenerationSnapshot,
    HealthResponse,
    RenewableSection,
)

load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

# ── Rate Limiter ──────────────────────────────────────────────────────────────
limiter = Limiter(key_func=get_remote_address)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("GreenTrack India backend starting up...")
    app.state.http_client = httpx.AsyncClient(timeout=settings.http_timeout)
    yield
    await app.state.http_client.aclose()
    logger.info("GreenTrack India backend shutting down...")


# ── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="GreenTrack India API",
    description="Renewable energy & carbon emissions intelligence for Indian states",
    version=VERSION,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Dependencies ──────────────────────────────────────────────────────────────
def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    """Shared client opened in lifespan; None means each call opens its own."""
    return getattr(request.app.state, "http_client", None)


# ── Health Check ──────────────────────────────────────────────────────────────
@app.get("/api/health", response_model=HealthResponse, tags=["System"])
async def health_check(settings: Settings = Depends(get_settings)):
    return HealthResponse(
        status="healthy",
        version=VERSION,
        services={
            "geocoder": "nominatim",
            "weather": "open-meteo",
            "air_quality": "open-meteo",
            "advisor": "openrouter" if settings.llm_configured else "template",
        },
    )


# =========================================================================
#   LOCATION ENRICHMENT PIPELINE
#   Geocode → Weather + Air quality → Carbon / Renewable / Footprint
# =========================================================================
@app.post("/api/enrich", response_model=EnrichmentResult, tags=["Pipeline"])
@limiter.limit("20/minute")
async def enrich_location(
    request: Request,
    body: EnrichRequest,
    client: Optional[httpx.AsyncClient] = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """Carbon intensity, renewable potential and footprint for one place."""
    return await enrich(body.location, body.monthly_kwh, client=client, settings=settings)


@app.get("/api/carbon-intensity", response_model=CarbonSection, tags=["Carbon"])
@limiter.limit("30/minute")
async def carbon_intensity(
    request: Request,
    location: str = Query(..., min_length=1),
    client: Optional[httpx.AsyncClient] = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    return await carbon_intensity_for_location(location, client=client, settings=settings)


@app.get("/api/renewable-potential", response_model=RenewableSection, tags=["Renewable"])
@limiter.limit("30/minute")
async def renewable_potential(
    request: Request,
    location: str = Query(..., min_length=1),
    client: Optional[httpx.AsyncClient] = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    return await renewable_potential_for_location(location, client=client, settings=settings)


@app.post("/api/footprint", response_model=FootprintResult, tags=["Carbon"])
async def footprint(body: FootprintRequest):
    return calculate_footprint(body.kwh, body.intensity)


# ── AI Advisor ────────────────────────────────────────────────────────────────
@app.post("/api/advisor/chat", response_model=ChatResponse, tags=["AI"])
@limiter.limit("20/minute")
async def advisor_chat(
    request: Request,
    body: ChatRequest,
    client: Optional[httpx.AsyncClient] = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    """
    Six-step sustainability plan from the LLM, or canned advice if the LLM
    is unavailable. Never returns an upstream error.
    """
    result = await generate_reply(body.message, body.history, client=client, settings=settings)
    return ChatResponse(reply=result["content"], generated_by=result["generated_by"])


# ── Simulated national generation ticker ──────────────────────────────────────
@app.get("/api/generation/realtime", response_model=GenerationSnapshot, tags=["Dashboard"])
async def realtime_generation():
    return simulate_realtime_generation()


# ── Error Handlers ────────────────────────────────────────────────────────────
@app.exception_handler(LocationResolutionError)
async def location_error_handler(request: Request, exc: LocationResolutionError):
    status_code = 404 if exc.not_found else 502
    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc), "status_code": status_code},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(status_code=400, content={"error": str(exc), "status_code": 400})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error. Please try again.", "status_code": 500},
    )
