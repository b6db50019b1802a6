from datetime import datetime
from uuid import uuid4

import pytest

from src.app.services.authorization import AuthorizationEngine
from src.app.use_cases.reports import MonthlyReportUseCase, month_window
from src.domain.entities import Customer, ServiceProvider, UserRole, WorkOrder, WorkOrderStatus


def test_month_window():
    assert month_window("2025-03") == (datetime(2025, 3, 1), datetime(2025, 4, 1))


def test_december_rolls_over_the_year():
    assert month_window("2024-12") == (datetime(2024, 12, 1), datetime(2025, 1, 1))


@pytest.mark.parametrize("month", ["", "2025", "2025-13", "03-2025", "2025/03"])
def test_malformed_month(month):
    assert month_window(month) is None


@pytest.mark.asyncio
async def test_bad_month_is_rejected_before_authorization(mock_uow, make_identity):
    result = await MonthlyReportUseCase(mock_uow, AuthorizationEngine()).execute(
        make_identity(UserRole.technician), "March"
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_technician_is_denied(mock_uow, make_identity):
    result = await MonthlyReportUseCase(mock_uow, AuthorizationEngine()).execute(
        make_identity(UserRole.technician), "2025-03", customer_id=uuid4()
    )

    assert result.error.code == "DENIED"


@pytest.mark.asyncio
async def test_staff_must_name_customer(mock_uow, make_identity):
    result = await MonthlyReportUseCase(mock_uow, AuthorizationEngine()).execute(
        make_identity(UserRole.admin), "2025-03"
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_client_report_uses_token_customer(mock_uow, make_identity):
    client = make_identity(UserRole.client)
    provider = ServiceProvider(id=client.service_provider_id, name="FixIt")
    customer = Customer(
        id=client.customer_id, service_provider_id=client.service_provider_id, name="Acme"
    )
    work_order = WorkOrder(
        id=uuid4(),
        service_provider_id=client.service_provider_id,
        customer_id=client.customer_id,
        site_id=uuid4(),
        asset_id=uuid4(),
        title="Quarterly check",
        status=WorkOrderStatus.completed,
        created_by=uuid4(),
        completed_at=datetime(2025, 3, 14, 9, 30),
    )
    mock_uow.service_providers.get_by_id.return_value = provider
    mock_uow.customers.get_in_provider.return_value = customer
    mock_uow.work_orders.list_completed_between.return_value = [
        (work_order, "Main Site", "PUMP-01", "Pump")
    ]

    result = await MonthlyReportUseCase(mock_uow, AuthorizationEngine()).execute(
        client, "2025-03"
    )

    report = result.value
    assert report.service_provider_name == "FixIt"
    assert report.customer_name == "Acme"
    assert report.total == 1
    assert report.rows[0].asset_tag == "PUMP-01"

    scope, start, end = mock_uow.work_orders.list_completed_between.call_args.args
    assert scope.customer_id == client.customer_id
    assert (start, end) == (datetime(2025, 3, 1), datetime(2025, 4, 1))


@pytest.mark.asyncio
async def test_unknown_customer_is_not_found(mock_uow, make_identity):
    admin = make_identity(UserRole.admin)
    mock_uow.service_providers.get_by_id.return_value = ServiceProvider(
        id=admin.service_provider_id, name="FixIt"
    )

    result = await MonthlyReportUseCase(mock_uow, AuthorizationEngine()).execute(
        admin, "2025-03", customer_id=uuid4()
    )

    assert result.error.code == "NOT_FOUND"
