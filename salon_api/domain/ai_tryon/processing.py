"""
Try-on image processing.

Runs outside the request that created the session (ARQ job or FastAPI
background task) and records every outcome on the session row:
pending -> processing -> completed | failed.
"""

import logging
import time

import httpx

from ...config import (
    IMAGE_GENERATION_API_KEY,
    IMAGE_GENERATION_COST,
    IMAGE_GENERATION_MODEL,
    IMAGE_GENERATION_TIMEOUT,
    IMAGE_GENERATION_URL,
    PLACEHOLDER_RESULT_IMAGE_URL,
)
from ...database import SessionLocal
from ...models_tryon import TryOnStatus
from .repository import TryOnRepository

logger = logging.getLogger(__name__)


class ImageGenerationError(Exception):
    """The image provider did not return a usable result"""


async def generate_tryon_image(original_image_url: str, hairstyle_image_url: str, hairstyle_name: str) -> str:
    """Ask the image provider to render the hairstyle onto the photo. Returns the result image URL.

    Without a configured provider a placeholder result is returned.
    """
    if not IMAGE_GENERATION_URL:
        return PLACEHOLDER_RESULT_IMAGE_URL

    headers = {"Content-Type": "application/json"}
    if IMAGE_GENERATION_API_KEY:
        headers["Authorization"] = f"Bearer {IMAGE_GENERATION_API_KEY}"

    payload = {
        "model": IMAGE_GENERATION_MODEL,
        "userImage": original_image_url,
        "hairstyleImage": hairstyle_image_url,
        "hairstyleName": hairstyle_name,
    }

    async with httpx.AsyncClient(timeout=IMAGE_GENERATION_TIMEOUT) as client:
        response = await client.post(IMAGE_GENERATION_URL, json=payload, headers=headers)

    if response.status_code != 200:
        raise ImageGenerationError(f"Image provider returned HTTP {response.status_code}")

    result_url = response.json().get("resultImageUrl")
    if not result_url:
        raise ImageGenerationError("Image provider response did not include resultImageUrl")
    return result_url


async def process_tryon_session(session_id: int) -> str:
    """Process one pending session. Returns the final status.

    Sessions that are no longer pending are left untouched, so a retried job
    never processes (or bills the provider for) the same session twice.
    """
    db = SessionLocal()
    repo = TryOnRepository()
    try:
        session = repo.get_session(db, session_id)
        if not session:
            logger.error(f"❌ Try-on session {session_id} not found")
            return "not_found"

        if not repo.transition_status(db, session_id, TryOnStatus.PENDING, status=TryOnStatus.PROCESSING.value):
            logger.info(f"⏭️ Try-on session {session_id} already {session.status}, skipping")
            return session.status
        db.commit()

        started = time.monotonic()
        try:
            hairstyle = repo.get_hairstyle(db, session.hairstyle_id)
            if not hairstyle:
                raise ImageGenerationError("Hairstyle not found")
            result_url = await generate_tryon_image(session.original_image_url, hairstyle.image_url, hairstyle.name)
        except Exception as e:
            logger.error(f"❌ Try-on session {session_id} failed: {e}")
            db.rollback()
            repo.transition_status(
                db,
                session_id,
                TryOnStatus.PROCESSING,
                status=TryOnStatus.FAILED.value,
                error_message=str(e)[:1000] or e.__class__.__name__,
            )
            db.commit()
            return TryOnStatus.FAILED.value

        elapsed_ms = int((time.monotonic() - started) * 1000)
        repo.transition_status(
            db,
            session_id,
            TryOnStatus.PROCESSING,
            status=TryOnStatus.COMPLETED.value,
            result_image_url=result_url,
            processing_time_ms=elapsed_ms,
            generation_metadata={
                "model": IMAGE_GENERATION_MODEL,
                "cost": IMAGE_GENERATION_COST,
                "batchProcessed": False,
            },
        )
        repo.increment_hairstyle_counter(db, session.hairstyle_id, "try_on_count")
        db.commit()

        logger.info(f"✅ Try-on session {session_id} completed in {elapsed_ms}ms")
        return TryOnStatus.COMPLETED.value
    finally:
        db.close()
