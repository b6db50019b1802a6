from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import WorkOrder, WorkOrderStatus
from src.domain.scope import ScopePredicate


class IWorkOrderRepository(ABC):
    """
    Work order repository interface - application layer

    Every read and write takes the ScopePredicate issued by the
    authorization engine and must apply all of its fields.
    """

    @abstractmethod
    async def list(
        self,
        scope: ScopePredicate,
        status: Optional[WorkOrderStatus],
        limit: int,
        offset: int,
    ) -> List[WorkOrder]:
        """List work orders inside scope, newest first"""
        pass

    @abstractmethod
    async def get(self, work_order_id: UUID, scope: ScopePredicate) -> Optional[WorkOrder]:
        """Get one work order inside scope"""
        pass

    @abstractmethod
    async def create(self, work_order: WorkOrder) -> WorkOrder:
        """Create a new work order"""
        pass

    @abstractmethod
    async def complete(
        self,
        work_order_id: UUID,
        scope: ScopePredicate,
        notes: Optional[str],
        now: datetime,
    ) -> bool:
        """Mark completed unless cancelled; False if nothing matched"""
        pass

    @abstractmethod
    async def assign(
        self,
        work_order_id: UUID,
        scope: ScopePredicate,
        assignee_id: UUID,
        now: datetime,
    ) -> bool:
        """Set assigned_to on an open work order; False if nothing matched"""
        pass

    @abstractmethod
    async def list_completed_between(
        self, scope: ScopePredicate, start: datetime, end: datetime
    ) -> List[Tuple[WorkOrder, str, str, Optional[str]]]:
        """Completed work orders in [start, end) with site name, asset tag and asset name"""
        pass
