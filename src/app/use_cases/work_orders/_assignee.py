from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import UserRole
from src.libs.result import Error, Result, Return


async def check_assignee(
    uow: UnitOfWork, assignee_id: UUID, service_provider_id: UUID
) -> Result[None]:
    """Assignees are active technicians of the same provider."""
    assignee = await uow.users.get_by_id(assignee_id, service_provider_id)
    if assignee is None or assignee.role != UserRole.technician or not assignee.is_active:
        return Return.err(
            Error("INVALID_ASSIGNEE", "assigned_to must be an active technician of this provider")
        )
    return Return.ok(None)
