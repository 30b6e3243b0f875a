from pydantic import BaseModel, Field, ValidationError

class SettingsSchema(BaseModel):
    storage_key: str = "gym-log-workouts-v1"
    top_exercise_limit: int = Field(default=10, ge=1)
    default_reps: int = Field(default=10, ge=0)
    default_weight: float = Field(default=0.0, ge=0)
    weight_unit: str = "kg"
    language: str = "en"

def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
