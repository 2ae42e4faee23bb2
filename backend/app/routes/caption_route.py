from fastapi import APIRouter, Depends

from app.models.base_model import CaptionRequest, ParseReelResponse
from app.services.Caption_service import CaptionExtractor

router = APIRouter(prefix="/api", tags=["Caption"])

def get_caption_extractor() -> CaptionExtractor:
    return CaptionExtractor()

@router.post("/parse-reel", response_model=ParseReelResponse)
async def parse_reel_endpoint(
    request: CaptionRequest,
    extractor: CaptionExtractor = Depends(get_caption_extractor)
):
    """Reads the restaurant name, address and category out of a reel caption."""
    candidate = await extractor.extract(request.caption)
    return ParseReelResponse(data=candidate)
