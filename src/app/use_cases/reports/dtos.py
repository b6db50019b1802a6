"""
Report Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel


class MonthlyReportRow(BaseModel):
    completed_at: str
    work_order_id: str
    site_name: str
    asset_tag: str
    asset_name: Optional[str] = None
    type: str
    priority: str
    title: str


class MonthlyReportResponse(BaseModel):
    """Authorized report data; rendering it to a document happens elsewhere"""

    service_provider_name: str
    customer_id: str
    customer_name: str
    month: str
    total: int
    rows: List[MonthlyReportRow]
