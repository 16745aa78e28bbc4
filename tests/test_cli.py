import json

import pytest

from hr_analytics.cli import main, parse_arguments
from logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def inputs(tmp_path):
    files = {
        "roster.csv": (
            "employee_id,status,birth_date,hire_date,gender,contract_type,fte,exit_date,exit_reason\n"
            "E1,Active,1990-01-01,2020-01-01,F,CDI,1,,\n"
            "E2,Active,1985-01-01,2015-01-01,M,CDI,1,,\n"
            "E3,Inactive,1970-01-01,2000-01-01,M,CDI,1,2023-01-31,Démission\n"
        ),
        "pay.csv": "employee_id,base_salary,social_contributions\nE1,3000,900\nE2,2500,800\n",
        "pay_previous.csv": "employee_id,base_salary,social_contributions\nE1,2800,850\nE2,2400,800\n",
        "absences.csv": "employee_id,absence_type,start_date,end_date\nE1,Maladie,2024-06-03,2024-06-04\n",
    }
    for name, text in files.items():
        (tmp_path / name).write_text(text, encoding="utf-8")
    return tmp_path


def test_parse_arguments_defaults():
    args = parse_arguments(["--employees", "r.csv", "--compensation", "p.csv", "--period", "2024-06"])

    assert args.comparison_mode == "previous_month"
    assert args.sector == "services"
    assert args.absences is None
    assert not args.debug


def test_full_report(inputs):
    output = inputs / "out" / "report.json"
    code = main(
        [
            "--employees", str(inputs / "roster.csv"),
            "--compensation", str(inputs / "pay.csv"),
            "--period", "2024-06-30",
            "--absences", str(inputs / "absences.csv"),
            "--comparison-compensation", str(inputs / "pay_previous.csv"),
            "--sector", "tech",
            "--log-dir", str(inputs / "logs"),
            "--output", str(output),
        ]
    )

    assert code == 0
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["period"] == "2024-06"
    assert report["payroll"]["gross_payroll"] == 5500.0
    assert report["demographics"]["active_headcount"] == 2
    assert report["workforce"]["headcount_end"] == 2
    assert report["workforce"]["exits"] == 0
    assert report["workforce_benchmark"]["sector"] == "tech"
    assert report["pyramid_risk"]["at_risk"] is False
    assert report["absence"]["absence_days"] == 2
    assert report["comparison_payroll"]["period"] == "2024-05"
    assert report["waterfall"]["effects"]["variation"] == 300.0
    assert report["waterfall"]["effects"]["coherence_ok"] is True
    assert len(report["waterfall"]["steps"]) == 4
    assert (inputs / "logs" / "combined.log").exists()


def test_report_to_stdout_without_optional_inputs(inputs, capsys):
    code = main(
        [
            "--employees", str(inputs / "roster.csv"),
            "--compensation", str(inputs / "pay.csv"),
            "--period", "2024-06",
            "--log-dir", str(inputs / "logs"),
        ]
    )

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert "absence" not in report
    assert "waterfall" not in report


@pytest.mark.parametrize(
    "extra",
    [
        ["--period", "not-a-date"],
        ["--period", "2024-06", "--sector", "mining"],
    ],
)
def test_invalid_arguments_return_error_code(inputs, extra):
    code = main(
        [
            "--employees", str(inputs / "roster.csv"),
            "--compensation", str(inputs / "pay.csv"),
            "--log-dir", str(inputs / "logs"),
        ]
        + extra
    )
    assert code == 1


def test_missing_input_file_returns_error_code(inputs, capsys):
    code = main(
        [
            "--employees", str(inputs / "missing.csv"),
            "--compensation", str(inputs / "pay.csv"),
            "--period", "2024-06",
            "--log-dir", str(inputs / "logs"),
        ]
    )

    assert code == 1
    assert "not found" in capsys.readouterr().err
