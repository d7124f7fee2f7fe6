from datetime import datetime
from enum import Enum


def to_jsonable(obj):
    """Convert various Python objects to JSON-serializable format.

    Handles:
    - Basic types (str, int, float, bool, None)
    - Enums (by value) and datetimes (ISO 8601)
    - Collections (list, tuple, set, dict)
    - Pydantic models
    - Dataclasses

    Args:
        obj: Any Python object

    Returns:
        A JSON-serializable version of the object
    """
    if isinstance(obj, Enum):
        return obj.value
    elif obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    elif isinstance(obj, datetime):
        return obj.isoformat()
    elif isinstance(obj, (list, tuple)):
        return [to_jsonable(item) for item in obj]
    elif isinstance(obj, (set, frozenset)):
        return sorted(to_jsonable(item) for item in obj)
    elif isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    elif hasattr(obj, 'model_dump'):  # Pydantic v2
        return to_jsonable(obj.model_dump())
    elif hasattr(obj, '__dataclass_fields__'):  # Dataclass
        from dataclasses import fields
        return {f.name: to_jsonable(getattr(obj, f.name)) for f in fields(obj)}
    else:
        return str(obj)
