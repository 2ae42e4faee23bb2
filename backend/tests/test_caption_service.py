import asyncio

import httpx
import pytest

from app.core.exceptions import ExtractionError, ValidationError
from app.services.Caption_service import CaptionExtractor, normalize_category
from fakes import FakeLLM

CATEGORIES = ["korean", "cafe", "western", "other"]


def _extract(reply="", caption="홍대 맛집 🍕 도미노피자 서울 마포구 양화로 160", error=None):
    llm = FakeLLM(reply=reply, error=error)
    extractor = CaptionExtractor(llm=llm, categories=CATEGORIES)
    return llm, asyncio.run(extractor.extract(caption))


def test_extract_valid_json():
    _, candidate = _extract('{"name": "도미노피자", "address": "서울 마포구 양화로 160", "category": "western"}')
    assert candidate.name == "도미노피자"
    assert candidate.address == "서울 마포구 양화로 160"
    assert candidate.category == "western"


def test_extract_tolerates_surrounding_prose():
    _, candidate = _extract(
        'Here you go: {"name": "Cafe Onion", "address": "서울 성동구 아차산로9길 8", "category": "cafe"} thanks'
    )
    assert candidate.name == "Cafe Onion"
    assert candidate.address == "서울 성동구 아차산로9길 8"
    assert candidate.category == "cafe"


def test_missing_category_uses_default():
    _, candidate = _extract('{"name": "A", "address": "B"}')
    assert candidate.category == "other"


@pytest.mark.parametrize("raw, expected", [
    ("CAFE", "cafe"),
    ("  korean ", "korean"),
    ("sushi bar", "other"),
    ("", "other"),
    (42, "other"),
    (None, "other"),
])
def test_category_normalization(raw, expected):
    assert normalize_category(raw, CATEGORIES, "other") == expected


def test_missing_name_and_address_become_empty_text():
    _, candidate = _extract('{"category": "cafe"}')
    assert candidate.name == ""
    assert candidate.address == ""


@pytest.mark.parametrize("caption", ["", "   ", "\n\t"])
def test_empty_caption_fails_without_calling_llm(caption):
    llm = FakeLLM(reply='{"name": "x", "address": "y"}')
    extractor = CaptionExtractor(llm=llm, categories=CATEGORIES)
    with pytest.raises(ValidationError):
        asyncio.run(extractor.extract(caption))
    assert llm.prompts == []


def test_no_json_in_reply():
    with pytest.raises(ExtractionError) as exc_info:
        _extract("Sorry, I can't tell which restaurant this is.")
    assert exc_info.value.message == "unparseable response"


def test_broken_json_in_reply():
    with pytest.raises(ExtractionError) as exc_info:
        _extract('{"name": "x", "address": }')
    assert exc_info.value.message == "unparseable response"


def test_completion_service_down():
    with pytest.raises(ExtractionError) as exc_info:
        _extract(error=httpx.ConnectError("connection refused"))
    assert exc_info.value.message == "completion service unavailable"


def test_prompt_lists_categories_and_ends_with_caption():
    caption = "성수동 브런치 카페 ☕️ 서울 성동구 연무장길 41"
    llm, _ = _extract('{"name": "x", "address": "y"}', caption=caption)
    prompt = llm.prompts[0]
    assert prompt.endswith(caption)
    for category in CATEGORIES:
        assert f'"{category}"' in prompt
    assert "JSON" in prompt
