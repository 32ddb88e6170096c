import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Type, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def new_id() -> str:
    """Opaque unique identifier (never reused)."""
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def load_and_validate(data_path: Path, model: Type[ModelT]) -> ModelT:
    """
    Load and validate model data from data_path.
    Returns a validated model instance.
    """
    if not data_path.exists():
        raise FileNotFoundError(f"Data file not found: {data_path}")

    with data_path.open("r", encoding="utf-8") as f:
        raw_data = json.load(f)
        return model.model_validate(raw_data)


def validate_json(raw: Union[str, bytes], model: Type[ModelT]) -> ModelT:
    """Parse a JSON document straight into `model` (raises pydantic.ValidationError)."""
    return model.model_validate_json(raw)
