from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_error
from src.api.utils.params import optional_uuid
from src.app.services.authorization import AuthorizationEngine
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.reports import MonthlyReportResponse, MonthlyReportUseCase
from src.depends import (
    get_authorization_engine,
    get_config,
    get_identity_context,
    get_unit_of_work,
)
from src.domain.identity_context import IdentityContext

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get(
    "/monthly", status_code=status.HTTP_200_OK, response_model=MonthlyReportResponse
)
async def monthly_report(
    month: str = Query("", description="YYYY-MM"),
    customer_id: Optional[str] = Query(None),
    identity: IdentityContext = Depends(get_identity_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    engine: AuthorizationEngine = Depends(get_authorization_engine),
    config=Depends(get_config),
):
    """
    Monthly Maintenance Report data

    admin/dispatcher must pass customer_id; clients always get their own customer.

    Raises:
        - 400 Bad Request: VALIDATION_ERROR (month format, missing customer_id)
        - 401 Unauthorized: UNAUTHENTICATED, INVALID_TOKEN
        - 403 Forbidden: DENIED
        - 404 Not Found: NOT_FOUND
        - 500 Internal Server Error: Server error
    """
    use_case = MonthlyReportUseCase(
        uow, engine, store_timeout=config.STORE_TIMEOUT_SECONDS
    )
    result = await use_case.execute(
        identity, month, customer_id=optional_uuid(customer_id, "customer_id")
    )

    if result.is_err():
        raise_error(result.error)

    return result.value
