import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from extraction_hub.core.config import settings
from extraction_hub.core.database import SessionLocal
from extraction_hub.models.job import Job
from extraction_hub.models.profile import Profile
from extraction_hub.services.execution_service import ExecutionService

logger = logging.getLogger(__name__)
scheduler = BackgroundScheduler(timezone="UTC")

JOB_ID_PREFIX = "extraction-job-"
SYNC_JOB_ID = "schedule_sync"


def _parse_time(schedule_time: Optional[str]):
    if not schedule_time:
        return 0, 0
    hour, minute = schedule_time.split(":")[:2]
    return int(hour), int(minute)


def build_trigger(frequency: str, schedule_time: Optional[str] = None) -> CronTrigger:
    """
    Maps a job's frequency + "HH:MM" to a cron trigger (UTC).
    hourly uses only the minute; weekly runs Mondays; monthly runs on the 1st.
    """
    hour, minute = _parse_time(schedule_time)

    if frequency == "hourly":
        return CronTrigger(minute=minute, timezone="UTC")
    if frequency == "daily":
        return CronTrigger(hour=hour, minute=minute, timezone="UTC")
    if frequency == "weekly":
        return CronTrigger(day_of_week="mon", hour=hour, minute=minute, timezone="UTC")
    if frequency == "monthly":
        return CronTrigger(day=1, hour=hour, minute=minute, timezone="UTC")

    raise ValueError(f"Unsupported frequency: {frequency}")


# ---------------------------------------------------------
# WRAPPER: run one scheduled job
# ---------------------------------------------------------
def run_scheduled_job(job_id: int):
    """
    Opens its own session and runs the job as its owner.
    Owners whose account is not active are skipped.
    Errors are logged, never raised into the scheduler thread.
    """
    db = SessionLocal()
    try:
        job = db.get(Job, job_id)
        if not job:
            logger.warning(f"Scheduled job {job_id} no longer exists")
            return

        profile = db.query(Profile).filter(Profile.user_id == job.user_id).first()
        if profile and profile.status != "active":
            logger.info(f"Skipping scheduled job {job_id}: owner account is {profile.status}")
            return

        result = ExecutionService(db, job.user_id).execute_job(job.id, check_permission=False)
        logger.info(f"Scheduled run of job {job_id} finished: {result['rows_processed']} rows ({result['run_id']})")

    except Exception as e:
        logger.error(f"Scheduled run of job {job_id} failed: {e}")
    finally:
        db.close()


# ---------------------------------------------------------
# SYNC: DB schedule -> APScheduler
# ---------------------------------------------------------
def sync_scheduled_jobs(target: Optional[BackgroundScheduler] = None) -> int:
    """
    Registers a cron job for every active scheduled job and removes stale ones.
    Returns the number of registered extraction jobs.
    """
    target = target or scheduler
    db = SessionLocal()
    try:
        jobs = db.query(Job).filter(
            Job.schedule_type == "schedule",
            Job.status == "active",
            Job.frequency.isnot(None),
        ).all()

        wanted = set()
        for job in jobs:
            aps_id = f"{JOB_ID_PREFIX}{job.id}"
            try:
                trigger = build_trigger(job.frequency, job.schedule_time)
            except ValueError as e:
                logger.warning(f"Skipping job {job.id}: {e}")
                continue

            target.add_job(
                run_scheduled_job,
                trigger,
                args=[job.id],
                id=aps_id,
                name=job.name,
                replace_existing=True,
            )
            wanted.add(aps_id)

        for registered in target.get_jobs():
            if registered.id.startswith(JOB_ID_PREFIX) and registered.id not in wanted:
                target.remove_job(registered.id)
                logger.info(f"Unscheduled {registered.id}")

        return len(wanted)
    finally:
        db.close()


# ---------------------------------------------------------
# SCHEDULER SETUP
# ---------------------------------------------------------
def start_scheduler():
    if scheduler.running:
        return

    scheduler.add_job(
        sync_scheduled_jobs,
        "interval",
        minutes=settings.SCHEDULE_SYNC_MINUTES,
        id=SYNC_JOB_ID,
        replace_existing=True,
    )
    scheduler.start()
    count = sync_scheduled_jobs()
    logger.info(f"Background scheduler started with {count} scheduled extraction jobs")


def shutdown_scheduler():
    if scheduler.running:
        scheduler.shutdown(wait=False)
