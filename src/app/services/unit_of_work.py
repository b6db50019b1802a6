from abc import ABC, abstractmethod

from src.app.repositories.customer_repository import ICustomerRepository
from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.service_provider_repository import IServiceProviderRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.repositories.work_order_repository import IWorkOrderRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    invitations: IInvitationRepository
    customers: ICustomerRepository
    service_providers: IServiceProviderRepository
    work_orders: IWorkOrderRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
