from __future__ import annotations

import pandas as pd
import pytest

from nypd_shootings.data.schema import REQUIRED_COLUMNS, apply_schema, declared_type
from nypd_shootings.errors import SourceUnavailable


def _frame(**extra):
    data = {
        "OCCUR_DATE": ["01/01/2020", "01/02/2020"],
        "OCCUR_TIME": ["10:00:00", "11:00:00"],
        "BORO": ["BRONX", None],
        "STATISTICAL_MURDER_FLAG": ["Y", "n"],
    }
    data.update(extra)
    return pd.DataFrame(data)


def test_required_columns_are_declared():
    for col in REQUIRED_COLUMNS:
        assert declared_type(col) != "text" or col == "BORO"
    assert declared_type("SOME_NEW_COLUMN") == "text"


def test_logical_aliases_are_accepted():
    df = apply_schema(_frame())
    assert df["STATISTICAL_MURDER_FLAG"].tolist() == [True, False]


def test_undeclared_columns_are_kept_as_text():
    df = apply_schema(_frame(EXTRA=[1, None]))
    assert isinstance(df["EXTRA"].dtype, pd.StringDtype)
    assert df["BORO"].isna().tolist() == [False, True]


def test_fractional_integer_is_rejected():
    with pytest.raises(SourceUnavailable, match="PRECINCT"):
        apply_schema(_frame(PRECINCT=["75", "75.5"]))


def test_date_and_time_stay_unparsed():
    df = apply_schema(_frame())
    assert df["OCCUR_DATE"].tolist() == ["01/01/2020", "01/02/2020"]
    assert isinstance(df["OCCUR_TIME"].dtype, pd.StringDtype)
