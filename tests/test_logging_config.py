import logging

import pytest

from logging_config import (
    CALCULATION_LOGGER,
    COHERENCE_LOGGER,
    reset_logging,
    setup_logging,
)


@pytest.fixture
def log_dir(tmp_path):
    directory = tmp_path / "logs"
    yield directory
    reset_logging()


def test_setup_logging_creates_concern_files(log_dir):
    setup_logging(log_dir=log_dir, debug=True)

    logging.getLogger(COHERENCE_LOGGER).info("price and volume reconcile")
    logging.getLogger(CALCULATION_LOGGER).info("payroll aggregated")

    coherence = (log_dir / "coherence_checks.log").read_text(encoding="utf-8")
    calculation = (log_dir / "calculation_events.log").read_text(encoding="utf-8")
    combined = (log_dir / "combined.log").read_text(encoding="utf-8")

    assert "price and volume reconcile" in coherence
    assert "payroll aggregated" not in coherence
    assert "payroll aggregated" in calculation
    assert "price and volume reconcile" in combined
    assert (log_dir / "debug_detail.log").exists()


def test_warnings_file_only_receives_warnings(log_dir):
    setup_logging(log_dir=log_dir)

    logging.getLogger("hr_analytics.engines.payroll").info("routine")
    logging.getLogger("hr_analytics.engines.payroll").warning("negative amount")

    warnings = (log_dir / "warnings_errors.log").read_text(encoding="utf-8")
    assert "negative amount" in warnings
    assert "routine" not in warnings
    assert not (log_dir / "debug_detail.log").exists()


def test_setup_logging_is_idempotent(log_dir, tmp_path):
    setup_logging(log_dir=log_dir)
    setup_logging(log_dir=tmp_path / "other")

    assert not (tmp_path / "other").exists()
