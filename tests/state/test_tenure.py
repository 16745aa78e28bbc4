from datetime import date

import pandas as pd
import pytest

from hr_analytics.state.tenure import SeniorityBand, apply_seniority, categorize_seniority


@pytest.mark.parametrize(
    "months, expected",
    [
        (0, SeniorityBand.NEW_HIRE),
        (11, SeniorityBand.NEW_HIRE),
        (12, SeniorityBand.EARLY),
        (36, SeniorityBand.CORE),
        (60, SeniorityBand.EXPERIENCED),
        (119, SeniorityBand.EXPERIENCED),
        (120, SeniorityBand.VETERAN),
    ],
)
def test_categorize_seniority_bounds(months, expected):
    assert categorize_seniority(months) is expected


def test_negative_seniority_is_na():
    assert pd.isna(categorize_seniority(-1))


def test_apply_seniority():
    df = pd.DataFrame({"hire_date": [date(2024, 1, 31), date(2014, 6, 1), date(2024, 7, 1)]})
    apply_seniority(df, "hire_date", date(2024, 6, 30), out_months_col="months", out_band_col="band")

    assert df["months"].tolist()[:2] == [5, 120]
    assert pd.isna(df["months"].iloc[2])
    assert df["band"].iloc[0] == SeniorityBand.NEW_HIRE.value
    assert df["band"].iloc[1] == SeniorityBand.VETERAN.value
