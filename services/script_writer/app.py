"""FastAPI app for the listing script writer."""

from fastapi import FastAPI, HTTPException

from services.script_writer.writer import ListingScriptWriter
from shared.models import APIResponse, ListingScript, PropertyDetails
from shared.utils import setup_logging

logger = setup_logging("script-writer-api")

app = FastAPI(
    title="Script Writer Service",
    description="Generate voiceover-ready narration for property listings",
    version="1.0.0",
)

writer = ListingScriptWriter()


@app.get("/health")
async def health_check():
    """Health check endpoint for the script writer."""
    return APIResponse(message="Script Writer Service is healthy")


@app.post("/generate-script", response_model=ListingScript)
async def generate_script(details: PropertyDetails) -> ListingScript:
    """Generate a narration script from property details."""
    try:
        return writer.generate(details)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:  # pragma: no cover
        logger.error("Script generation failed, using fallback script: %s", exc)
        return writer.fallback()
