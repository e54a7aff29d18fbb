"""Sequencing service API endpoints for listing videos."""

from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from services.sequencing.captions import CaptionSegmenter
from services.sequencing.service import SequencingInputError, SequencingService
from shared.enums import CaptionFormat
from shared.models import (
    APIResponse,
    ArrangementRequest,
    ArrangementResponse,
    CaptionExportRequest,
    CaptionRequest,
    CaptionResponse,
    SequenceRequest,
    SequenceResponse,
)
from shared.utils import config, setup_logging

logger = setup_logging("sequencing-api")

app = FastAPI(
    title="Sequencing Service",
    description="Photo ordering, caption timing and slide timing for listing videos",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

service = SequencingService()


@app.get("/health")
async def health_check():
    """Health check endpoint for the sequencing service."""
    return APIResponse(message="Sequencing Service is healthy")


@app.post("/sequence", response_model=SequenceResponse)
async def create_sequence(request: SequenceRequest) -> SequenceResponse:
    """Build the full slideshow plan: ordered photos, captions and timing."""
    start_time = datetime.now(UTC)
    try:
        plan = await service.plan(
            request.narration,
            request.image_urls,
            words_per_minute=request.words_per_minute,
            speed=request.speed,
        )
    except SequencingInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Sequence planning failed: {e}")
        raise HTTPException(status_code=500, detail=f"Sequence planning failed: {e!s}") from e

    processing_time = (datetime.now(UTC) - start_time).total_seconds()
    logger.info(f"Planned sequence for {len(plan.arranged_images)} images in {processing_time:.2f}s")
    return SequenceResponse(plan=plan, processing_time=processing_time)


@app.post("/arrange", response_model=ArrangementResponse)
async def arrange_images(request: ArrangementRequest) -> ArrangementResponse:
    """Classify photos and order them to follow the script."""
    start_time = datetime.now(UTC)
    try:
        arrangement = await service.arrange(request.script, request.image_urls)
    except SequencingInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Image arrangement failed: {e}")
        raise HTTPException(status_code=500, detail=f"Image arrangement failed: {e!s}") from e

    return ArrangementResponse(
        original_order=request.image_urls,
        arrangement=arrangement,
        processing_time=(datetime.now(UTC) - start_time).total_seconds(),
    )


@app.post("/captions", response_model=CaptionResponse)
async def generate_captions(request: CaptionRequest) -> CaptionResponse:
    """Generate timed caption chunks for narration text.

    Uses the supplied duration when the narration audio length is known,
    otherwise estimates it from the word count and speaking rate.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Caption text is required")

    total_duration = request.duration or service.estimate_duration(
        request.text,
        words_per_minute=request.words_per_minute,
        speed=request.speed,
    )
    segmenter = service.segmenter
    if request.clamp_to_duration:
        segmenter = CaptionSegmenter(clamp_to_duration=True)

    try:
        captions = segmenter.segment(request.text, total_duration)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return CaptionResponse(
        captions=captions,
        total_duration=total_duration,
        caption_count=len(captions),
    )


@app.post("/captions/export")
async def export_captions(request: CaptionExportRequest) -> PlainTextResponse:
    """Render caption segments as SRT or WebVTT."""
    content = service.segmenter.render(request.captions, request.target_format)
    media_type = "text/vtt" if request.target_format is CaptionFormat.VTT else "text/plain"
    return PlainTextResponse(content=content, media_type=media_type)
