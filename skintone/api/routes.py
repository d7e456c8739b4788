"""Skin tone analysis API routes.

This module provides the HTTP endpoints for skin tone analysis, handling
image input, face box parsing, and translation of analysis errors into
responses.
"""

import logging
import math
import traceback
from fastapi import APIRouter, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
from ..core.errors import AnalysisError, InvalidRegion, MissingInput
from ..core.pipeline import analyze
from ..models.types import AnalysisResponse, ErrorResponse, FaceBox, FaceBoxPayload, SkinToneRequest

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter()


def _face_box_from_payload(payload: Optional[FaceBoxPayload]) -> Optional[FaceBox]:
    """Snap a client face box to whole pixels; negative fields stay negative."""
    if not payload:
        return None
    return FaceBox(
        x=math.floor(payload['x']),
        y=math.floor(payload['y']),
        width=math.floor(payload['width']),
        height=math.floor(payload['height'])
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies with 400 and a stable error code.

    Errors located under ``faceBox`` are reported as an invalid region;
    anything else means the image input itself is unusable.
    """
    errors = exc.errors()
    logger.warning(f"Request validation failed for {request.url.path}: {errors}")

    if any('faceBox' in error.get('loc', ()) for error in errors):
        code = InvalidRegion.code
        message = "faceBox must have numeric x, y, width and height"
    else:
        code = MissingInput.code
        message = "Request must include imageBase64, imageUrl or croppedFaceBase64 as a string"

    detail: ErrorResponse = {'error': code, 'message': message}
    content: Dict[str, Any] = {'detail': detail}
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@router.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@router.post("/analyze-skin-tone", response_model=AnalysisResponse)
def analyze_skin_tone(request_data: SkinToneRequest) -> Dict:
    """Analyze skin undertone, depth, clarity and season from a photo.

    Args:
        request_data: Dictionary containing the image and optional face box.
            - imageBase64: Base64 string of the photo (data URL prefix allowed)
            - imageUrl: URL to fetch the photo from, used if no base64 given
            - croppedFaceBase64: Base64 face crop; wins over the other
              sources and is sampled as a whole-image face box
            - faceBox: Optional {x, y, width, height} in pixels, fractional
              values are floored

    Returns:
        Dictionary containing the analysis:
            - rgb, hex, lab: Representative skin color
            - undertone, depth, clarity: Attribute labels
            - season, seasonConfidence: Season classification
            - confidence: Overall confidence (0-1)
            - needsConfirmation, qualityIssues: Whether the user should
              confirm the result, and why
            - diagnostics: Face box used and sample count

    Raises:
        HTTPException: 400 for missing input or an unusable face region.
            Malformed bodies are answered 400 by
            :func:`validation_exception_handler`.
            Server-side failures answer 500 with a neutral/medium/autumn
            default payload instead.
    """
    face_box_payload = request_data.get('faceBox')
    if request_data.get('croppedFaceBase64'):
        provenance = 'cropped'
    elif request_data.get('imageBase64'):
        provenance = 'base64'
    elif request_data.get('imageUrl'):
        provenance = f"url:{request_data['imageUrl']}"
    else:
        provenance = 'none'

    try:
        result = analyze(
            image_base64=request_data.get('imageBase64'),
            image_url=request_data.get('imageUrl'),
            face_box=_face_box_from_payload(face_box_payload),
            cropped_face_base64=request_data.get('croppedFaceBase64')
        )
        return result.to_response()

    except AnalysisError as e:
        if e.client_error:
            logger.warning(
                f"Analysis rejected ({e.code}): {str(e)} "
                f"[source={provenance}, faceBox={face_box_payload}]"
            )
            detail: ErrorResponse = {'error': e.code, 'message': str(e)}
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=detail
            )
        logger.error(
            f"Analysis failed ({e.code}): {str(e)} "
            f"[source={provenance}, faceBox={face_box_payload}]"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=e.fallback_payload()
        )
    except Exception as e:
        logger.error(
            f"Unexpected analysis error: {str(e)} "
            f"[source={provenance}, faceBox={face_box_payload}]\n{traceback.format_exc()}"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=AnalysisError(str(e)).fallback_payload()
        )
