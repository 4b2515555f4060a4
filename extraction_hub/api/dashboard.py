from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List

from extraction_hub.api.deps import get_current_user
from extraction_hub.core.database import get_db
from extraction_hub.models.user import User
from extraction_hub.services.dashboard_service import DashboardService
from extraction_hub.schemas.dashboard import DashboardStats, ActivityItem, ChartResponse

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])

# 1. KPI Cards
@router.get("/stats", response_model=DashboardStats)
def get_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return DashboardService(db, user.id).get_stats()

# 2. Recent Activity
@router.get("/activity", response_model=List[ActivityItem])
def get_activity(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DashboardService(db, user.id).get_recent_activity(limit)

# 3. Extraction Chart
@router.get("/chart", response_model=ChartResponse)
def get_chart(
    days: int = Query(7, ge=1, le=90),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DashboardService(db, user.id).get_chart(days)
