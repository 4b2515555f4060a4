"""
Simulated extraction runs.

Nothing here opens a database connection or touches object storage. A run
waits on fixed timers, writes a log transcript and reports a random row count.
Waits are multiplied by settings.EXECUTION_DELAY_SCALE (0 disables them).
"""

import random
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from extraction_hub.core.config import settings
from extraction_hub.core.exceptions import JobExecutionError

# Fixed simulation timings (seconds)
PYTHON_SCRIPT_DELAY = 2.0
DB_CONNECT_DELAY = 1.5
DB_QUERY_DELAY = 2.0

# rows_processed ranges (inclusive)
PYTHON_ROWS = (100, 1099)
QUERY_ROWS = (500, 5499)

CODE_PREVIEW_CHARS = 100


@dataclass
class RunLog:
    lines: List[str] = field(default_factory=list)

    def _add(self, level: str, message: str):
        self.lines.append(f"{datetime.utcnow().isoformat()}Z {level}: {message}")

    def info(self, message: str):
        self._add("INFO", message)

    def error(self, message: str):
        self._add("ERROR", message)

    def text(self) -> str:
        return "\n".join(self.lines) + "\n" if self.lines else ""


@dataclass
class RunResult:
    rows_processed: int
    message: str


def _wait(seconds: float):
    scaled = seconds * settings.EXECUTION_DELAY_SCALE
    if scaled > 0:
        time.sleep(scaled)


def _preview(code: Optional[str]) -> str:
    return (code or "")[:CODE_PREVIEW_CHARS]


def run_python_script(job, log: RunLog) -> RunResult:
    log.info("Executing Python script")
    log.info(f"Script content: {_preview(job.code)}...")

    _wait(PYTHON_SCRIPT_DELAY)

    rows = random.randint(*PYTHON_ROWS)
    log.info("Python script completed successfully")
    return RunResult(rows_processed=rows, message="Python script executed successfully")


def run_database_query(job, credential, log: RunLog) -> RunResult:
    if credential is None:
        raise JobExecutionError("Credentials not found")

    log.info(f"Connecting to {credential.type} database at {credential.host}")
    log.info(f"Database: {credential.database_name}")

    _wait(DB_CONNECT_DELAY)

    log.info("Connection established")
    log.info(f"Executing query: {_preview(job.code)}...")

    _wait(DB_QUERY_DELAY)

    rows = random.randint(*QUERY_ROWS)
    log.info(f"Query executed successfully, {rows} rows returned")
    return RunResult(rows_processed=rows, message="Query executed successfully")


def simulate_connection_test() -> bool:
    """Coin flip weighted by CONNECTION_TEST_SUCCESS_RATE after a 1-3s wait."""
    _wait(1.0 + random.random() * 2.0)
    return random.random() < settings.CONNECTION_TEST_SUCCESS_RATE
