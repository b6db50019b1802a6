from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.api.utils.params import optional_uuid
from src.app.services.authorization import AuthorizationEngine
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.work_orders import (
    AssignWorkOrderUseCase,
    CompleteWorkOrderUseCase,
    CreateWorkOrderCommand,
    CreateWorkOrderResponse,
    CreateWorkOrderUseCase,
    ListWorkOrdersUseCase,
    WorkOrderItem,
    WorkOrderStatusResponse,
)
from src.depends import (
    get_authorization_engine,
    get_config,
    get_identity_context,
    get_unit_of_work,
)
from src.domain.entities import WorkOrderPriority, WorkOrderStatus, WorkOrderType
from src.domain.identity_context import IdentityContext

router = APIRouter(prefix="/work-orders", tags=["Work Orders"])


@router.get("", status_code=status.HTTP_200_OK, response_model=List[WorkOrderItem])
async def list_work_orders(
    customer_id: Optional[str] = Query(None),
    status_filter: Optional[WorkOrderStatus] = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    config=Depends(get_config),
):
    """
    List Work Orders

    admin/dispatcher see the whole provider (optional customer_id filter),
    technicians only their assignments, clients only their own customer.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED (client asking for another customer)
        - 500 Internal Server Error: Server error
    """
    use_case = ListWorkOrdersUseCase(
        uow, engine, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(
        identity,
        customer_id=optional_uuid(customer_id, "customer_id"),
        status=status_filter,
        limit=limit,
        offset=offset,
    )

    if result.is_err():
        raise_error(result.error)

    return result.value


class CreateWorkOrderRequest(BaseModel):
    """Create work order HTTP request payload"""

    customer_id: UUID
    site_id: UUID
    asset_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    type: WorkOrderType = WorkOrderType.corrective
    priority: WorkOrderPriority = WorkOrderPriority.medium
    description: Optional[str] = None
    notes: Optional[str] = None
    assigned_to: Optional[UUID] = None


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=CreateWorkOrderResponse
)
async def create_work_order(
    request: CreateWorkOrderRequest,
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    config=Depends(get_config),
):
    """
    Create Work Order

    Raises:
        - 400 Bad Request: VALIDATION_ERROR, INVALID_OWNERSHIP_CHAIN, INVALID_ASSIGNEE
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 500 Internal Server Error: Server error
    """
    use_case = CreateWorkOrderUseCase(
        uow, engine, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(
        identity, CreateWorkOrderCommand(**request.model_dump())
    )

    if result.is_err():
        raise_error(result.error)

    return result.value


class CompleteWorkOrderRequest(BaseModel):
    notes: Optional[str] = None


@router.patch(
    "/{work_order_id}/complete",
    status_code=status.HTTP_200_OK,
    response_model=WorkOrderStatusResponse,
)
async def complete_work_order(
    work_order_id: UUID,
    request: Optional[CompleteWorkOrderRequest] = None,
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    config=Depends(get_config),
):
    """
    Complete Work Order

    Raises:
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 404 Not Found: NOT_FOUND (missing or outside the caller's scope)
        - 409 Conflict: CONFLICT (cancelled)
        - 500 Internal Server Error: Server error
    """
    use_case = CompleteWorkOrderUseCase(
        uow, engine, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    notes = request.notes if request is not None else None
    result = await use_case.execute(identity, work_order_id, notes)

    if result.is_err():
        raise_error(result.error)

    return result.value


class AssignWorkOrderRequest(BaseModel):
    assigned_to: UUID


@router.patch(
    "/{work_order_id}/assign",
    status_code=status.HTTP_200_OK,
    response_model=WorkOrderStatusResponse,
)
async def assign_work_order(
    work_order_id: UUID,
    request: AssignWorkOrderRequest,
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    config=Depends(get_config),
):
    """
    Assign Work Order to a technician

    Raises:
        - 400 Bad Request: INVALID_ASSIGNEE
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: CONFLICT (not open)
        - 500 Internal Server Error: Server error
    """
    use_case = AssignWorkOrderUseCase(
        uow, engine, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(identity, work_order_id, request.assigned_to)

    if result.is_err():
        raise_error(result.error)

    return result.value
