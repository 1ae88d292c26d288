from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Exercise(BaseModel):
    """Reference data for one exercise. Immutable for the length of a session."""

    name: str = Field(..., alias="Exercise Name", min_length=1)
    equipment: str = Field("", alias="Equipment")
    primary_muscle: str = Field("", alias="Primary Muscle")
    secondary_muscles: str = Field("", alias="Secondary Muscles", description="comma-separated")
    sets: Optional[int] = Field(None, ge=0)

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "Exercise Name": "Bench Press, Barbell",
                    "Equipment": "Barbell",
                    "Primary Muscle": "Chest",
                    "Secondary Muscles": "Triceps, Front Delts",
                    "sets": 4,
                }
            ]
        },
    }

    @property
    def secondary_muscle_list(self) -> List[str]:
        return [m.strip() for m in self.secondary_muscles.split(",") if m.strip()]

    @property
    def is_bodyweight(self) -> bool:
        return self.equipment.strip().lower() == "bodyweight"


# Ordered exercises; None marks an empty placeholder slot in "customize" mode.
WorkoutPlan = List[Optional[Exercise]]
