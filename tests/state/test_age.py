from datetime import date

import pandas as pd
import pytest

from hr_analytics.state.age import AgeBand, age_band_counts, apply_age, categorize_age


@pytest.mark.parametrize(
    "age, expected",
    [
        (0, AgeBand.UNDER_25),
        (24, AgeBand.UNDER_25),
        (25, AgeBand.EARLY),
        (34, AgeBand.EARLY),
        (35, AgeBand.MID),
        (45, AgeBand.LATE),
        (55, AgeBand.OVER_55),
        (119, AgeBand.OVER_55),
    ],
)
def test_categorize_age_bounds(age, expected):
    assert categorize_age(age) is expected


@pytest.mark.parametrize("age", [-1, 120, None])
def test_categorize_age_invalid_is_na(age):
    assert pd.isna(categorize_age(age))


def test_apply_age_drops_implausible_ages():
    df = pd.DataFrame(
        {"birth_date": [date(2000, 7, 1), date(1890, 1, 1), date(2030, 1, 1), None]}
    )
    apply_age(df, "birth_date", date(2024, 6, 30), out_age_col="age", out_band_col="band")

    assert df["age"].iloc[0] == 23
    assert df["age"].iloc[1:].isna().all()
    assert df["band"].iloc[0] == AgeBand.UNDER_25.value
    assert df["band"].iloc[1:].isna().all()


def test_age_band_counts_reports_every_band():
    bands = pd.Series(["<25", "55+", "55+"])
    counts = age_band_counts(bands)
    assert set(counts) == set(AgeBand)
    assert counts[AgeBand.OVER_55] == 2
    assert counts[AgeBand.MID] == 0
