"""
Tests for run ids and export locations.
"""

from datetime import datetime

from extraction_hub.workers.extraction.output import (
    build_output_location,
    generate_run_id,
    slugify_job_name,
)

NOW = datetime(2024, 12, 19, 14, 30, 0)


def test_run_id_format():
    run_id = generate_run_id(NOW)
    assert run_id.startswith("run_20241219T143000_")
    assert len(run_id.split("_")[-1]) == 8


def test_run_ids_are_unique():
    assert generate_run_id(NOW) != generate_run_id(NOW)


def test_slug_collapses_whitespace():
    assert slugify_job_name("Customer \t Data  Sync") == "customer_data_sync"


def test_location_with_date_subfolders():
    loc = build_output_location("data-bucket", "customers", "Customers", "run_x", True, NOW)
    assert loc == "s3://data-bucket/customers/2024/12/19/customers_run_x.csv"


def test_location_without_date_subfolders():
    loc = build_output_location("data-bucket", "customers", "Customers", "run_x", False, NOW)
    assert loc == "s3://data-bucket/customers/customers_run_x.csv"


def test_location_requires_bucket_and_folder():
    assert build_output_location(None, "customers", "Customers", "run_x") == ""
    assert build_output_location("data-bucket", "", "Customers", "run_x") == ""
