from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.customer_repository import CustomerRepository
from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.service_provider_repository import ServiceProviderRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.repositories.work_order_repository import WorkOrderRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.customers = CustomerRepository(self.session)
        self.service_providers = ServiceProviderRepository(self.session)
        self.work_orders = WorkOrderRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Loaded rows stay readable after the block; anything not committed
        # is discarded
        self.session.expunge_all()
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
