"""
AI meal analysis: prompt building and model reply normalization.
"""

from typing import Any, Dict, List, Optional
import json
import logging
import math
import re

from sqlalchemy.orm import Session

from adapters import image_storage, openai_adapter
from app.config import settings
from app.exceptions import AnalysisError, ServiceValidationError
from domain.enums import AnalysisType, NutritionScore
from domain.models import AppUser
from domain.schemas.analysis_schemas import MealAnalysisResponse
from domain.schemas.meal_schemas import NutritionFacts
from services.subscription_service import SubscriptionService, remaining_warning

logger = logging.getLogger("mealscan.analysis")

REQUIRED_FIELDS = ["title", "description", "foodItems", "nutrition", "nutritionScore"]
NUTRITION_FIELDS = ["calories", "protein", "fat", "carbs"]

PHOTO_USER_TEXT = (
    "Analyze this food image and provide nutritional information "
    "in the exact JSON format specified."
)

_JSON_PATTERNS = [
    re.compile(r"```json\s*([\s\S]*?)\s*```"),
    re.compile(r"```\s*([\s\S]*?)\s*```"),
    re.compile(r"(\{[\s\S]*\})"),
]
_LEADING_NUMBER = re.compile(r"\d*\.?\d*")


def build_system_prompt(analysis_type: AnalysisType, notes: Optional[str] = None) -> str:
    photo = analysis_type == AnalysisType.PHOTO
    prompt = (
        "You are a nutritional analysis AI. "
        f"{'Analyze the food in the image' if photo else 'Analyze the food description'} "
        "and provide the following information in JSON format:\n"
        '1. "title": A concise title for this meal (just the food name)\n'
        '2. "description": A detailed description of '
        f"{'what you see in the image' if photo else 'the meal based on the description'}\n"
        '3. "foodItems": An array of individual food items '
        f"{'visible in the image' if photo else 'mentioned in the description'}\n"
        '4. "nutrition": An object containing estimated nutritional information '
        "with these numeric properties:\n"
        '   - "calories": Total calories\n'
        '   - "protein": Protein in grams\n'
        '   - "fat": Fat in grams\n'
        '   - "carbs": Carbohydrates in grams\n'
        '5. "nutritionScore": Overall healthiness rating (one of: "very healthy", '
        '"healthy", "moderate", "unhealthy", "not healthy")\n\n'
        "Your analysis must be accurate to "
        f"{'what is visible in the image' if photo else 'the information provided in the description'}. "
        "Provide your best estimate for nutrition values.\n"
        "Your response MUST be valid JSON without any extra text, markdown, or explanations."
    )
    if notes and notes.strip():
        prompt += f"\n\nAdditional context from the user: {notes}"
    return prompt


def build_photo_messages(image_base64: str, notes: Optional[str] = None) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": build_system_prompt(AnalysisType.PHOTO, notes)},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": PHOTO_USER_TEXT},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"},
                },
            ],
        },
    ]


def build_text_messages(description: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": build_system_prompt(AnalysisType.TEXT)},
        {
            "role": "user",
            "content": (
                "Analyze this meal description and provide nutritional information "
                f'in the exact JSON format specified: "{description}"'
            ),
        },
    ]


def extract_json(content: str) -> Dict[str, Any]:
    """Parse the JSON object out of a fenced block or surrounding prose"""
    text = content or ""
    for pattern in _JSON_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1):
            text = match.group(1)
            break
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.error(f"analysis_parse_failed error={exc}")
        raise AnalysisError(
            "Failed to parse OpenAI response as JSON",
            details={"content": content},
        ) from exc
    if not isinstance(parsed, dict):
        raise AnalysisError(
            "OpenAI response is not a JSON object", details={"content": content}
        )
    return parsed


def validate_result(result: Dict[str, Any]) -> None:
    missing = [field for field in REQUIRED_FIELDS if not result.get(field)]
    if missing:
        logger.error(f"analysis_missing_fields fields={missing}")
        raise AnalysisError(
            f"Missing required fields in analysis result: {', '.join(missing)}",
            details={"missing": missing, "content": json.dumps(result)},
        )


def coerce_number(value: Any) -> float:
    """Numbers pass through; strings keep digits and dots; anything else is 0"""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return 0.0
        return max(float(value), 0.0)
    if isinstance(value, str):
        cleaned = re.sub(r"[^\d.]", "", value)
        try:
            return float(_LEADING_NUMBER.match(cleaned).group(0))
        except ValueError:
            return 0.0
    return 0.0


def normalize_nutrition(nutrition: Any) -> NutritionFacts:
    if not isinstance(nutrition, dict):
        nutrition = {}
    missing = [f for f in NUTRITION_FIELDS if nutrition.get(f) is None]
    if missing:
        logger.warning(f"analysis_nutrition_defaulted fields={missing}")
    return NutritionFacts(**{f: coerce_number(nutrition.get(f)) for f in NUTRITION_FIELDS})


def normalize_score(value: Any) -> NutritionScore:
    try:
        return NutritionScore(str(value).strip().lower())
    except ValueError:
        logger.warning(f"analysis_unknown_score value={value!r} fallback=moderate")
        return NutritionScore.MODERATE


def normalize_food_items(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if item not in (None, "")]
    return []


def parse_analysis(content: str, image_url: str) -> MealAnalysisResponse:
    """Turn raw model output into a normalized analysis"""
    result = extract_json(content)
    validate_result(result)
    return MealAnalysisResponse(
        title=str(result["title"]),
        description=str(result["description"]),
        food_items=normalize_food_items(result["foodItems"]),
        nutrition=normalize_nutrition(result["nutrition"]),
        nutrition_score=normalize_score(result["nutritionScore"]),
        image_url=image_url,
    )


class AnalysisService:
    """Business logic for AI meal analysis"""

    @staticmethod
    def _gate(db: Session, user: Optional[AppUser]):
        if user is None:
            logger.info("analysis_anonymous scan_gating=skipped")
            return None
        return SubscriptionService.consume_scan(db, user)

    @staticmethod
    def _attach_status(response: MealAnalysisResponse, status) -> MealAnalysisResponse:
        if status is not None:
            response.remaining_scans = status.remaining_scans
            response.warning = remaining_warning(status.remaining_scans)
        return response

    @staticmethod
    def analyze_photo(
        db: Session,
        user: Optional[AppUser],
        image_data: str,
        notes: Optional[str] = None,
    ) -> MealAnalysisResponse:
        if not image_data or not image_data.strip():
            raise ServiceValidationError("Image data is required for photo analysis")
        status = AnalysisService._gate(db, user)

        _, payload = image_storage.split_data_url(image_data.strip())
        content = openai_adapter.complete(build_photo_messages(payload, notes))
        response = parse_analysis(content, settings.placeholder_image_url)
        response.image_url = image_storage.save_image(
            image_data.strip(), str(user.user_id) if user else None
        )
        logger.info(
            f"analysis_completed type=photo user_id={getattr(user, 'user_id', None)} "
            f"score={response.nutrition_score.value}"
        )
        return AnalysisService._attach_status(response, status)

    @staticmethod
    def analyze_text(
        db: Session, user: Optional[AppUser], description: str
    ) -> MealAnalysisResponse:
        if not description or not description.strip():
            raise ServiceValidationError("Description is required for text analysis")
        status = AnalysisService._gate(db, user)

        content = openai_adapter.complete(build_text_messages(description.strip()))
        response = parse_analysis(content, settings.placeholder_image_url)
        logger.info(
            f"analysis_completed type=text user_id={getattr(user, 'user_id', None)} "
            f"score={response.nutrition_score.value}"
        )
        return AnalysisService._attach_status(response, status)
