import logging
from app.core.config import settings
from app.core.exceptions import ExtractionError, ValidationError
from app.core.json_parser import parse_json_object
from app.core.llm_connection import LLMService, llm_client
from app.core.logger import logs
from app.models.places_model import PlaceCandidate


def normalize_category(value, categories: list[str] | None = None, default: str | None = None) -> str:
    """
    Map a raw category onto the configured set (case-insensitive).
    Anything missing, blank or outside the set becomes the default.
    """
    categories = categories if categories is not None else settings.PLACE_CATEGORIES
    default = default if default is not None else settings.DEFAULT_CATEGORY

    if not isinstance(value, str) or not value.strip():
        return default

    wanted = value.strip().lower()
    for category in categories:
        if category.lower() == wanted:
            return category

    logs.log(logging.WARNING, f"Category '{value}' is not one of {categories}, using '{default}'")
    return default


def _as_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class CaptionExtractor:
    def __init__(self, llm: LLMService = llm_client, categories: list[str] | None = None):
        self.llm = llm
        self.categories = categories if categories is not None else settings.PLACE_CATEGORIES

    def build_prompt(self, caption: str) -> str:
        """The caption always goes last, verbatim."""
        allowed = ", ".join(f'"{c}"' for c in self.categories)
        return (
            "Extract the restaurant's name and full street address from the "
            "Instagram reel caption below, and classify the restaurant.\n"
            f"category must be exactly one of: {allowed}.\n"
            "Respond with a single JSON object and nothing else: no explanation, "
            "no markdown, no code fences.\n\n"
            "Format:\n"
            '{"name": "restaurant name", "address": "full address", "category": "one of the values above"}\n\n'
            "Caption:\n"
            f"{caption}"
        )

    async def extract(self, caption: str) -> PlaceCandidate:
        if not caption or not caption.strip():
            raise ValidationError("caption is required")

        logs.log(logging.INFO, "Extracting place from caption", extra={"length": len(caption)})

        try:
            raw = await self.llm.complete(self.build_prompt(caption))
        except Exception as e:
            logs.log(logging.ERROR, f"Completion service failed: {str(e)}")
            raise ExtractionError("completion service unavailable") from e

        logs.log(logging.DEBUG, f"Raw completion: {raw}")

        parsed = parse_json_object(raw)
        if parsed is None:
            logs.log(logging.WARNING, f"No JSON object in completion: {raw[:200]!r}")
            raise ExtractionError("unparseable response")

        candidate = PlaceCandidate(
            name=_as_text(parsed.get("name")),
            address=_as_text(parsed.get("address")),
            category=normalize_category(parsed.get("category"), self.categories),
        )
        logs.log(logging.INFO, f"Extracted place: {candidate.name} / {candidate.address} ({candidate.category})")
        return candidate
