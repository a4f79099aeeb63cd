import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from alternative_finder.core.brands import AMERICAN_BRANDS, is_american, matched_brands
from alternative_finder.core.config import Settings, get_settings
from alternative_finder.core.vision import detect_labels
from alternative_finder.schemas.detect import DetectRequest, DetectResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["detect"])

# Browsers call this straight from the scanner page, from any origin.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Same handler is reachable bare and behind the edge platform's prefix
DETECT_PATHS = ("/detect-product", "/functions/v1/detect-product")


@router.options(DETECT_PATHS[0], include_in_schema=False)
@router.options(DETECT_PATHS[1], include_in_schema=False)
async def detect_product_preflight():
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post(DETECT_PATHS[0], response_model=DetectResponse, responses={500: {"model": ErrorResponse}})
@router.post(DETECT_PATHS[1], response_model=DetectResponse, responses={500: {"model": ErrorResponse}})
async def detect_product(request: Request, cfg: Settings = Depends(get_settings)):
    """
    Label-detect one image and report whether any label names an American brand.

    The body is parsed by hand instead of through a typed parameter so that a
    malformed body gets the same {"error": ...} 500 as every other failure,
    rather than FastAPI's 422.
    """
    try:
        body = await request.json()
        req = DetectRequest.model_validate(body)

        labels = await detect_labels(req.image, settings=cfg)
        verdict = is_american(labels, AMERICAN_BRANDS)

        if verdict:
            logger.info("American product detected (brands=%s)", matched_brands(labels, AMERICAN_BRANDS))
        else:
            logger.info("No American brand among %d labels", len(labels))

        # Shape check only; the labels go back exactly as the provider sent them
        DetectResponse(isAmerican=verdict, labels=labels)
        return JSONResponse({"isAmerican": verdict, "labels": labels}, headers=CORS_HEADERS)

    except Exception as e:
        logger.exception("detect-product failed")
        return JSONResponse(
            ErrorResponse(error=str(e)).model_dump(),
            status_code=500,
            headers=CORS_HEADERS,
        )
