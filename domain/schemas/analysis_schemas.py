from pydantic import BaseModel, Field
from typing import Optional, List

from domain.enums import NutritionScore
from domain.schemas.meal_schemas import NutritionFacts


class PhotoAnalysisRequest(BaseModel):
    """Photo analysis input; image is raw base64 or a data URL"""

    image_data: str = Field(..., description="Base64 encoded JPEG/PNG")
    notes: Optional[str] = Field(
        None, max_length=2000, description="Extra context for the model"
    )


class TextAnalysisRequest(BaseModel):
    description: str = Field(..., description="Free text meal description")


class MealAnalysisResponse(BaseModel):
    """Normalized model output, ready to be saved as a meal"""

    title: str
    description: str
    food_items: List[str]
    nutrition: NutritionFacts
    nutrition_score: NutritionScore
    image_url: str
    warning: Optional[str] = None
    remaining_scans: Optional[int] = None
