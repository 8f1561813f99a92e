from pydantic import BaseModel, Field, ValidationError


class SettingsSchema(BaseModel):
    default_bodyweight: float = Field(60.0, ge=0)
    load_step: float = Field(5.0, gt=0)
    reps_step: int = Field(1, gt=0)
    max_set_count: int = Field(10, ge=1)
    store_url: str = ""
    store_table: str = "workout_raw_records"
    store_api_key: str | bool = ""
    log_level: str = "INFO"


def validate_settings(data: dict) -> None:
    try:
        SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
