"""
Tests for AI meal analysis.

Meal Analysis Flow
==================
POST /analysis/photo {"image_data": "<base64>", "notes": "..."}
POST /analysis/text  {"description": "two eggs and toast"}

1. Signed-in callers pass scan gating (one scan counted); anonymous callers skip it
2. The model reply is parsed (fenced JSON, bare fence, or outermost braces)
3. Required keys are checked, nutrition values coerced, score normalized
4. Photo results point at the stored image, text results at the placeholder

The OpenAI call is replaced with monkeypatch in every test.
"""

import base64
import json
import os

import pytest
from sqlalchemy.orm import Session

from test_fixtures import client, db_session, make_user, auth_headers
from adapters import openai_adapter
from app.config import settings
from app.exceptions import AnalysisError
from domain.enums import AnalysisType, NutritionScore
from domain.models import UserSubscription
from services.analysis_service import (
    build_photo_messages,
    build_system_prompt,
    build_text_messages,
    coerce_number,
    extract_json,
    normalize_nutrition,
    normalize_score,
    parse_analysis,
)

MODEL_REPLY = {
    "title": "Avocado toast",
    "description": "Sourdough toast topped with smashed avocado and a poached egg",
    "foodItems": ["sourdough", "avocado", "egg"],
    "nutrition": {"calories": 420, "protein": 15, "fat": 24, "carbs": 36},
    "nutritionScore": "Healthy",
}

IMAGE_B64 = base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg-bytes").decode()


@pytest.fixture
def fake_openai(monkeypatch):
    """Capture messages and answer with a canned reply"""
    calls = []

    def _complete(messages, model=None, max_tokens=None):
        calls.append(messages)
        return "Here you go:\n```json\n" + json.dumps(MODEL_REPLY) + "\n```"

    monkeypatch.setattr(openai_adapter, "complete", _complete)
    return calls


def scan_count(db, user):
    db.expire_all()
    return db.query(UserSubscription).filter_by(user_id=user.user_id).one().scan_count


# =============================================================================
# PROMPTS
# =============================================================================


def test_photo_prompt_mentions_image_and_user_notes():
    prompt = build_system_prompt(AnalysisType.PHOTO, "no butter used")

    assert "Analyze the food in the image" in prompt
    assert "visible in the image" in prompt
    assert prompt.endswith("Additional context from the user: no butter used")


def test_text_prompt_has_no_notes_section():
    prompt = build_system_prompt(AnalysisType.TEXT, "   ")

    assert "Analyze the food description" in prompt
    assert "Additional context" not in prompt
    assert '"very healthy", "healthy", "moderate", "unhealthy", "not healthy"' in prompt


def test_photo_messages_embed_jpeg_data_url():
    messages = build_photo_messages("QUJD")

    assert messages[0]["role"] == "system"
    parts = messages[1]["content"]
    assert parts[0]["type"] == "text"
    assert parts[1]["image_url"]["url"] == "data:image/jpeg;base64,QUJD"


def test_text_messages_quote_the_description():
    messages = build_text_messages("two eggs and toast")

    assert messages[1]["content"].endswith(': "two eggs and toast"')


# =============================================================================
# RESPONSE NORMALIZATION
# =============================================================================


@pytest.mark.parametrize(
    "content",
    [
        "```json\n" + json.dumps(MODEL_REPLY) + "\n```",
        "```\n" + json.dumps(MODEL_REPLY) + "\n```",
        "Sure! " + json.dumps(MODEL_REPLY) + " Enjoy.",
        json.dumps(MODEL_REPLY),
    ],
)
def test_extract_json_handles_fences_and_prose(content):
    assert extract_json(content)["title"] == "Avocado toast"


def test_extract_json_rejects_garbage():
    with pytest.raises(AnalysisError) as exc:
        extract_json("I cannot analyze this image.")

    assert exc.value.http_status == 502


def test_missing_required_fields_are_listed():
    reply = {"title": "Soup", "description": "", "nutrition": {"calories": 100}}

    with pytest.raises(AnalysisError) as exc:
        parse_analysis(json.dumps(reply), "/placeholder.svg")

    assert "description, foodItems, nutritionScore" in exc.value.message


@pytest.mark.parametrize(
    "value,expected",
    [
        (350, 350.0),
        (12.5, 12.5),
        ("450 kcal", 450.0),
        ("~12.5g", 12.5),
        ("1.2.3", 1.2),
        ("unknown", 0.0),
        (None, 0.0),
        (True, 0.0),
        ([1, 2], 0.0),
        (float("nan"), 0.0),
        (float("inf"), 0.0),
        (-3, 0.0),
    ],
)
def test_coerce_number(value, expected):
    assert coerce_number(value) == expected


def test_missing_nutrition_fields_default_to_zero():
    facts = normalize_nutrition({"calories": "300", "protein": 20})

    assert facts.calories == 300
    assert facts.protein == 20
    assert facts.fat == 0
    assert facts.carbs == 0


def test_score_is_lowercased_and_unknown_becomes_moderate():
    assert normalize_score("Very Healthy") == NutritionScore.VERY_HEALTHY
    assert normalize_score("excellent") == NutritionScore.MODERATE


# =============================================================================
# API
# =============================================================================


def test_text_analysis_anonymous(db_session: Session, fake_openai):
    resp = client.post("/analysis/text", json={"description": "avocado toast with egg"})

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["title"] == "Avocado toast"
    assert body["food_items"] == ["sourdough", "avocado", "egg"]
    assert body["nutrition_score"] == "healthy"
    assert body["image_url"] == settings.placeholder_image_url
    assert body["remaining_scans"] is None
    assert len(fake_openai) == 1


def test_text_analysis_counts_scan_for_signed_in_user(db_session: Session, fake_openai):
    user = make_user(db_session, scan_count=6)

    resp = client.post(
        "/analysis/text", json={"description": "avocado toast"}, headers=auth_headers(user)
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["remaining_scans"] == 3
    assert body["warning"] == "You have 3 free scans remaining."
    assert scan_count(db_session, user) == 7


def test_analysis_refused_at_free_limit(db_session: Session, fake_openai):
    user = make_user(db_session, scan_count=settings.default_free_tier_limit)

    resp = client.post(
        "/analysis/text", json={"description": "avocado toast"}, headers=auth_headers(user)
    )

    assert resp.status_code == 403
    error = resp.json()["error"]
    assert error["code"] == "SCAN_LIMIT_REACHED"
    assert error["message"] == (
        f"You've reached your free scan limit of {settings.default_free_tier_limit}. "
        "Please subscribe to continue."
    )
    assert fake_openai == []
    assert scan_count(db_session, user) == settings.default_free_tier_limit


def test_photo_analysis_stores_image(db_session: Session, fake_openai):
    user = make_user(db_session)

    resp = client.post(
        "/analysis/photo",
        json={"image_data": f"data:image/jpeg;base64,{IMAGE_B64}", "notes": "shared plate"},
        headers=auth_headers(user),
    )

    assert resp.status_code == 200, resp.text
    image_url = resp.json()["image_url"]
    assert image_url.startswith(settings.media_url_prefix + "/")
    assert image_url.endswith(".jpg")
    sent = fake_openai[0]
    assert sent[1]["content"][1]["image_url"]["url"] == f"data:image/jpeg;base64,{IMAGE_B64}"
    assert "shared plate" in sent[0]["content"]


def test_photo_analysis_falls_back_to_placeholder(db_session: Session, fake_openai):
    resp = client.post("/analysis/photo", json={"image_data": "not*base64!"})

    assert resp.status_code == 200
    assert resp.json()["image_url"] == settings.placeholder_image_url


def test_empty_inputs_are_rejected(db_session: Session, fake_openai):
    assert client.post("/analysis/photo", json={"image_data": "  "}).status_code == 400
    assert client.post("/analysis/text", json={"description": ""}).status_code == 400
    assert fake_openai == []


def test_bad_model_reply_returns_502(db_session: Session, monkeypatch):
    monkeypatch.setattr(
        openai_adapter, "complete", lambda messages, **kw: '{"title": "Mystery"}'
    )

    resp = client.post("/analysis/text", json={"description": "something"})

    assert resp.status_code == 502
    assert resp.json()["error"]["code"] == "ANALYSIS_ERROR"


def test_missing_api_key_returns_503(db_session: Session, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(openai_adapter, "_client", None)

    resp = client.post("/analysis/text", json={"description": "two eggs"})

    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "EXTERNAL_SERVICE_ERROR"


def test_anonymous_analysis_can_be_disabled(db_session: Session, fake_openai, monkeypatch):
    monkeypatch.setattr(settings, "allow_anonymous_analysis", False)

    resp = client.post("/analysis/text", json={"description": "two eggs"})

    assert resp.status_code == 401


def test_non_finite_nutrition_becomes_zero(db_session: Session, monkeypatch):
    reply = json.dumps(MODEL_REPLY).replace('"calories": 420', '"calories": NaN')
    monkeypatch.setattr(openai_adapter, "complete", lambda messages, **kw: reply)

    resp = client.post("/analysis/text", json={"description": "avocado toast"})

    assert resp.status_code == 200, resp.text
    assert resp.json()["nutrition"]["calories"] == 0
    assert resp.json()["nutrition"]["protein"] == 15


def test_rejected_photo_reply_stores_no_image(db_session: Session, monkeypatch):
    monkeypatch.setattr(openai_adapter, "complete", lambda messages, **kw: "no food here")
    before = set(os.listdir(settings.media_dir)) if os.path.isdir(settings.media_dir) else set()

    resp = client.post("/analysis/photo", json={"image_data": IMAGE_B64})

    assert resp.status_code == 502
    after = set(os.listdir(settings.media_dir)) if os.path.isdir(settings.media_dir) else set()
    assert after == before
