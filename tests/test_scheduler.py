"""
Tests for cron trigger construction and the DB -> scheduler sync.
"""

from datetime import datetime, timezone

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from extraction_hub.models import JobExecution, Profile
from extraction_hub.scheduler import (
    JOB_ID_PREFIX,
    build_trigger,
    run_scheduled_job,
    sync_scheduled_jobs,
)


def _next(trigger, now):
    return trigger.get_next_fire_time(None, now)


@pytest.mark.parametrize(
    "frequency, now, expected",
    [
        ("hourly", datetime(2024, 1, 1, 10, 20, tzinfo=timezone.utc), datetime(2024, 1, 1, 11, 15, tzinfo=timezone.utc)),
        ("daily", datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc), datetime(2024, 1, 1, 2, 15, tzinfo=timezone.utc)),
        ("weekly", datetime(2024, 1, 2, 0, 0, tzinfo=timezone.utc), datetime(2024, 1, 8, 2, 15, tzinfo=timezone.utc)),
        ("monthly", datetime(2024, 1, 2, 0, 0, tzinfo=timezone.utc), datetime(2024, 2, 1, 2, 15, tzinfo=timezone.utc)),
    ],
)
def test_build_trigger(frequency, now, expected):
    assert _next(build_trigger(frequency, "02:15"), now) == expected


def test_build_trigger_defaults_to_midnight():
    now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert _next(build_trigger("daily"), now) == datetime(2024, 1, 2, 0, 0, tzinfo=timezone.utc)


def test_build_trigger_rejects_unknown_frequency():
    with pytest.raises(ValueError):
        build_trigger("yearly", "01:00")


@pytest.fixture
def paused_scheduler():
    sched = BackgroundScheduler(timezone="UTC")
    sched.start(paused=True)
    yield sched
    sched.shutdown(wait=False)


def test_sync_registers_active_scheduled_jobs(client, manager_headers, create_job, paused_scheduler):
    scheduled = create_job(manager_headers, name="Nightly", schedule_type="schedule", frequency="daily", schedule_time="03:00")
    create_job(manager_headers, name="Adhoc")

    # Drafts are not scheduled
    assert sync_scheduled_jobs(paused_scheduler) == 0

    client.patch(f"/api/jobs/{scheduled['id']}", json={"status": "active"}, headers=manager_headers)
    assert sync_scheduled_jobs(paused_scheduler) == 1
    assert [j.id for j in paused_scheduler.get_jobs()] == [f"{JOB_ID_PREFIX}{scheduled['id']}"]

    client.patch(f"/api/jobs/{scheduled['id']}", json={"status": "inactive"}, headers=manager_headers)
    assert sync_scheduled_jobs(paused_scheduler) == 0
    assert paused_scheduler.get_jobs() == []


def test_run_scheduled_job_records_execution(client, manager_headers, create_job):
    job = create_job(manager_headers, name="Nightly", schedule_type="schedule", frequency="daily")

    run_scheduled_job(job["id"])

    history = client.get("/api/executions/", headers=manager_headers).json()
    assert history["total"] == 1
    assert history["data"][0]["status"] == "success"


def test_run_scheduled_job_swallows_missing_job(client):
    run_scheduled_job(424242)


def test_run_scheduled_job_skips_suspended_owner(client, db, manager_headers, create_job):
    job = create_job(manager_headers, name="Nightly", schedule_type="schedule", frequency="daily")
    owner = db.query(Profile).filter(Profile.email == "morgan@hub.io").first()
    owner.status = "suspended"
    db.commit()

    run_scheduled_job(job["id"])

    assert db.query(JobExecution).count() == 0
