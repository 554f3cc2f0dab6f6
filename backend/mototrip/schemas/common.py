"""
Shared schema building blocks.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, StringConstraints
from typing_extensions import Annotated

# Free 3-letter code, stored upper-case; no conversion is ever applied
Currency = Annotated[str, StringConstraints(strip_whitespace=True, pattern=r"^[A-Za-z]{3}$", to_upper=True)]


class VersionedUpdate(BaseModel):
    """Base for update payloads on versioned rows.

    When ``row_version`` is sent it must match the stored version, otherwise
    the update is rejected with a conflict.
    """
    row_version: Optional[int] = None


class AuditedResponse(BaseModel):
    """Audit and concurrency fields shared by trip children."""
    created_by_user_id: int
    updated_by_user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    row_version: int

    class Config:
        from_attributes = True
