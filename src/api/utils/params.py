from typing import Optional
from uuid import UUID

from src.api.error import ClientError
from src.libs.result import Error


def optional_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    """Query parameter -> UUID; missing or blank means not supplied."""
    if value is None or not value.strip():
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        raise ClientError(Error("VALIDATION_ERROR", f"{field} must be a UUID"))
