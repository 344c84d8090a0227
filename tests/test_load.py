from __future__ import annotations

import pandas as pd
import pytest
import requests

from nypd_shootings.data import load as load_module
from nypd_shootings.data.load import load_dataset
from nypd_shootings.errors import SourceUnavailable

CSV_TEXT = (
    "INCIDENT_KEY,OCCUR_DATE,OCCUR_TIME,BORO,PRECINCT,STATISTICAL_MURDER_FLAG,X_COORD_CD,VIC_SEX\n"
    '1,01/15/2020,23:45:00,BROOKLYN,75,true,"1,006,343",M\n'
    "2,02/01/2021,(null),QUEENS,(null),false,,F\n"
)


class _FakeResponse:
    def __init__(self, text="", status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code}", response=self)


def test_url_source_applies_schema(monkeypatch):
    seen = {}

    def fake_get(url, timeout):
        seen["url"], seen["timeout"] = url, timeout
        return _FakeResponse(CSV_TEXT)

    monkeypatch.setattr(load_module.requests, "get", fake_get)
    df = load_dataset("https://example.invalid/rows.csv", timeout=7)

    assert seen == {"url": "https://example.invalid/rows.csv", "timeout": 7}
    assert df.shape == (2, 8)
    assert str(df["PRECINCT"].dtype) == "Int64"
    assert df["PRECINCT"].isna().tolist() == [False, True]
    assert str(df["STATISTICAL_MURDER_FLAG"].dtype) == "boolean"
    assert df["STATISTICAL_MURDER_FLAG"].tolist() == [True, False]
    assert df["X_COORD_CD"].iloc[0] == pytest.approx(1006343.0)
    assert df["OCCUR_TIME"].iloc[1] == "(null)"


def test_http_error_is_source_unavailable(monkeypatch):
    monkeypatch.setattr(load_module.requests, "get", lambda url, timeout: _FakeResponse(status=404))
    with pytest.raises(SourceUnavailable, match="404"):
        load_dataset("https://example.invalid/rows.csv")


def test_connection_error_is_source_unavailable(monkeypatch):
    def boom(url, timeout):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(load_module.requests, "get", boom)
    with pytest.raises(SourceUnavailable):
        load_dataset("https://example.invalid/rows.csv")


def test_empty_body_is_source_unavailable(monkeypatch):
    monkeypatch.setattr(load_module.requests, "get", lambda url, timeout: _FakeResponse(""))
    with pytest.raises(SourceUnavailable):
        load_dataset("https://example.invalid/rows.csv")


def test_header_only_csv_is_source_unavailable(tmp_path):
    path = tmp_path / "header_only.csv"
    path.write_text("OCCUR_DATE,OCCUR_TIME,BORO,STATISTICAL_MURDER_FLAG\n")
    with pytest.raises(SourceUnavailable, match="no rows"):
        load_dataset(path)


def test_missing_required_column(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"OCCUR_DATE": ["01/01/2020"], "BORO": ["BRONX"]}).to_csv(path, index=False)
    with pytest.raises(SourceUnavailable, match="OCCUR_TIME"):
        load_dataset(path)


def test_unrecognised_flag_value(tmp_path):
    path = tmp_path / "bad_flag.csv"
    pd.DataFrame(
        {
            "OCCUR_DATE": ["01/01/2020"],
            "OCCUR_TIME": ["10:00:00"],
            "BORO": ["BRONX"],
            "STATISTICAL_MURDER_FLAG": ["maybe"],
        }
    ).to_csv(path, index=False)
    with pytest.raises(SourceUnavailable, match="logical"):
        load_dataset(path)


def test_missing_local_file(tmp_path):
    with pytest.raises(SourceUnavailable):
        load_dataset(tmp_path / "nope.csv")


def test_local_csv(raw_csv):
    df = load_dataset(raw_csv)
    assert len(df) == 15
    assert "Lon_Lat" in df.columns
