from functools import lru_cache
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


class Settings(BaseModel):
    hotel_name: str = Field(default="DogStay Hotel")
    max_capacity: int = Field(default=10, ge=1)
    conflict_display_limit: int = Field(default=3, ge=1)


@lru_cache
def get_settings() -> Settings:
    defaults = Settings.model_fields
    return Settings(
        hotel_name=os.getenv("HOTEL_NAME", defaults["hotel_name"].default),
        max_capacity=int(os.getenv("MAX_CAPACITY", str(defaults["max_capacity"].default))),
        conflict_display_limit=int(
            os.getenv("CONFLICT_DISPLAY_LIMIT", str(defaults["conflict_display_limit"].default))
        ),
    )
