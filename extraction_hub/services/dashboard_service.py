from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import datetime, timedelta, date
from typing import List

from extraction_hub.models.job import Job
from extraction_hub.models.job_execution import JobExecution


class DashboardService:
    def __init__(self, db: Session, user_id: int):
        self.db = db
        self.user_id = user_id

    def _calculate_growth(self, current: int, previous: int):
        if previous == 0:
            return 100.0 if current > 0 else 0.0
        return round(((current - previous) / previous) * 100, 1)

    def _day_bounds(self, day: date):
        start = datetime(day.year, day.month, day.day)
        return start, start + timedelta(days=1)

    def _count(self, start, end, status=None):
        q = self.db.query(func.count(JobExecution.id)).filter(
            JobExecution.user_id == self.user_id,
            JobExecution.started_at >= start,
            JobExecution.started_at < end,
        )
        if status:
            q = q.filter(JobExecution.status == status)
        return q.scalar() or 0

    def _metric(self, status=None):
        """Today vs yesterday for one status (or all runs)."""
        today = datetime.utcnow().date()
        t_start, t_end = self._day_bounds(today)
        y_start, y_end = self._day_bounds(today - timedelta(days=1))

        curr = self._count(t_start, t_end, status)
        prev = self._count(y_start, y_end, status)
        return {
            "value": curr,
            "previous_value": prev,
            "percentage_change": self._calculate_growth(curr, prev),
            "trend": "up" if curr >= prev else "down",
        }

    # --- MAIN LOGIC ---

    def get_stats(self):
        total = self._metric()
        success = self._metric("success")
        failed = self._metric("failed")

        finished = success["value"] + failed["value"]
        success_rate = round(success["value"] / finished * 100, 1) if finished else 0.0

        scheduled = self.db.query(func.count(Job.id)).filter(
            Job.user_id == self.user_id,
            Job.schedule_type == "schedule",
            Job.status == "active",
        ).scalar() or 0

        return {
            "extractions_today": total,
            "successful_today": success,
            "failed_today": failed,
            "success_rate": success_rate,
            "scheduled_jobs": scheduled,
        }

    def get_recent_activity(self, limit: int = 10) -> List[dict]:
        rows = (
            self.db.query(JobExecution, Job.name)
            .outerjoin(Job, JobExecution.job_id == Job.id)
            .filter(JobExecution.user_id == self.user_id)
            .order_by(JobExecution.started_at.desc(), JobExecution.id.desc())
            .limit(limit)
            .all()
        )
        return [
            {
                "execution_id": e.id,
                "job_id": e.job_id,
                "job_name": name,
                "status": e.status,
                "started_at": e.started_at,
                "rows_processed": e.rows_processed,
            }
            for e, name in rows
        ]

    def get_chart(self, days: int = 7):
        """Per-day success/failed counts, oldest first, zero-filled."""
        today = datetime.utcnow().date()
        first_day = today - timedelta(days=days - 1)
        start, _ = self._day_bounds(first_day)

        rows = self.db.query(JobExecution.started_at, JobExecution.status).filter(
            JobExecution.user_id == self.user_id,
            JobExecution.started_at >= start,
        ).all()

        buckets = {first_day + timedelta(days=i): {"success": 0, "failed": 0} for i in range(days)}
        for started_at, status in rows:
            if started_at is None:
                continue
            bucket = buckets.get(started_at.date())
            if bucket is not None and status in bucket:
                bucket[status] += 1

        series = [
            {"day": d, "label": d.strftime("%b %d"), "success": v["success"], "failed": v["failed"]}
            for d, v in sorted(buckets.items())
        ]
        return {"days": days, "series": series}
