"""
Scope Predicate

Declarative data-access filter produced by the authorization engine.
Repositories apply it verbatim before returning or mutating rows.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ScopePredicate(BaseModel):
    """
    service_provider_id: always applied
    customer_id: rows of one customer only, when set
    assigned_to: rows assigned to this actor only, when set
    """

    model_config = ConfigDict(frozen=True)

    service_provider_id: UUID
    customer_id: Optional[UUID] = None
    assigned_to: Optional[UUID] = None
