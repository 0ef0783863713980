import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.deps import Analyzer, MetadataFetcher, Settings, Transcripts
from app.exceptions import ValidationError
from app.logger import get_logger
from app.models import (
    AnalysisRequest,
    AnalysisResponse,
    HealthResponse,
    to_video_info_response,
)
from app.services.utils import extract_video_id, preview_transcript
from app.settings import settings

logger = get_logger()

ERROR_DETAILS = "Please check API keys and try again."


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Groq key configured: {bool(settings.groq_api_key)}")
    logger.info(f"Gemini key configured: {bool(settings.gemini_api_key)}")
    logger.info(f"YouTube key configured: {bool(settings.youtube_api_key)}")
    yield


app = FastAPI(
    title="YouTube Subtopic Coverage Analyzer",
    description="API for scoring how well a video covers a list of subtopics",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=86400,  # Cache preflight requests for 24 hours
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected malformed request body: {exc.errors()}")
    return JSONResponse(
        status_code=400, content={"error": "Invalid request body."}
    )


@app.get("/")
async def root():
    return {"message": "YouTube Subtopic Coverage Analyzer API is running"}


@app.post("/api/analyze", response_model=AnalysisResponse)
async def analyze_video(
    request: AnalysisRequest,
    app_settings: Settings,
    metadata_fetcher: MetadataFetcher,
    transcripts: Transcripts,
    analyzer: Analyzer,
):
    """Fetch a video's transcript and score its coverage of each subtopic"""
    try:
        request = request.validate_fields()
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    video_id = extract_video_id(request.youtube_url)
    if not video_id:
        logger.warning(f"Could not extract video ID from: {request.youtube_url}")
        return JSONResponse(status_code=400, content={"error": "Invalid YouTube URL."})

    logger.info(
        f"Analyzing video_id: {video_id} with provider: {request.provider}, "
        f"{len(request.custom_subtopics)} subtopics"
    )
    try:
        video_info = await metadata_fetcher.fetch_metadata(video_id)
        transcript = await transcripts.fetch_transcript(video_id)

        analysis = await analyzer.analyze(
            transcript, request.custom_subtopics, request.provider
        )

        return AnalysisResponse(
            success=True,
            provider=request.provider,
            video_info=to_video_info_response(video_info),
            transcript=preview_transcript(transcript),
            subtopics=request.custom_subtopics,
            analysis=analysis,
        )
    except Exception as e:
        logger.error(f"Full analysis error: {str(e)}", exc_info=True)
        content = {"error": str(e), "details": ERROR_DETAILS}
        if app_settings.is_development:
            content["stack"] = traceback.format_exc()
        return JSONResponse(status_code=500, content=content)


@app.get("/api/health", response_model=HealthResponse)
async def health(app_settings: Settings):
    return HealthResponse(
        has_groq_key=bool(app_settings.groq_api_key),
        has_gemini_key=bool(app_settings.gemini_api_key),
        has_youtube_key=bool(app_settings.youtube_api_key),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)
