from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime, date

# --- GENERIC BUILDING BLOCKS ---
class MetricChange(BaseModel):
    value: int
    previous_value: int
    percentage_change: float
    trend: str # 'up', 'down'

class DashboardStats(BaseModel):
    extractions_today: MetricChange
    successful_today: MetricChange
    failed_today: MetricChange
    success_rate: float
    scheduled_jobs: int

class ActivityItem(BaseModel):
    execution_id: int
    job_id: int
    job_name: Optional[str] = None
    status: str
    started_at: Optional[datetime] = None
    rows_processed: Optional[int] = None

class ChartPoint(BaseModel):
    day: date
    label: str # "Feb 10"
    success: int
    failed: int

class ChartResponse(BaseModel):
    days: int
    series: List[ChartPoint]
