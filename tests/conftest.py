import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from nypd_shootings.config import load_config
from nypd_shootings.data.schema import apply_schema

RAW_COLUMNS = [
    "INCIDENT_KEY",
    "OCCUR_DATE",
    "OCCUR_TIME",
    "BORO",
    "LOC_OF_OCCUR_DESC",
    "PRECINCT",
    "JURISDICTION_CODE",
    "LOCATION_DESC",
    "STATISTICAL_MURDER_FLAG",
    "PERP_AGE_GROUP",
    "PERP_SEX",
    "VIC_AGE_GROUP",
    "VIC_SEX",
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
]


def make_row(date="01/15/2020", time="23:45:00", boro="BROOKLYN", murder="true", key=1, **overrides):
    row = {
        "INCIDENT_KEY": str(key),
        "OCCUR_DATE": date,
        "OCCUR_TIME": time,
        "BORO": boro,
        "LOC_OF_OCCUR_DESC": "OUTSIDE",
        "PRECINCT": "75",
        "JURISDICTION_CODE": "0",
        "LOCATION_DESC": "(null)",
        "STATISTICAL_MURDER_FLAG": murder,
        "PERP_AGE_GROUP": None,
        "PERP_SEX": "M",
        "VIC_AGE_GROUP": "25-44",
        "VIC_SEX": "M",
        "X_COORD_CD": "1,006,343",
        "Y_COORD_CD": "234,270",
        "Latitude": "40.8",
        "Longitude": "-73.9",
        "Lon_Lat": "POINT (-73.9 40.8)",
    }
    row.update(overrides)
    return row


def make_raw(rows) -> pd.DataFrame:
    return apply_schema(pd.DataFrame(list(rows), columns=RAW_COLUMNS))


@pytest.fixture
def raw_df() -> pd.DataFrame:
    rows = []
    key = 1
    boros = ["BRONX", "BROOKLYN", "MANHATTAN", "QUEENS", "STATEN ISLAND"]
    for year in (2018, 2019, 2020, 2021):
        for i, boro in enumerate(boros):
            for n in range(i + year - 2017):
                murder = "true" if n % 4 == 0 else "false"
                hour = (n * 5 + i) % 24
                rows.append(
                    make_row(
                        date=f"{(n % 12) + 1:02d}/{(n % 27) + 1:02d}/{year}",
                        time=f"{hour:02d}:{(n * 7) % 60:02d}:00",
                        boro=boro,
                        murder=murder,
                        key=key,
                    )
                )
                key += 1
    return make_raw(rows)


@pytest.fixture
def raw_csv(tmp_path) -> Path:
    rows = []
    for year, boro, count in [(2019, "BRONX", 3), (2020, "BRONX", 4), (2019, "QUEENS", 2), (2020, "QUEENS", 5)]:
        for n in range(count):
            rows.append(make_row(date=f"06/{n + 1:02d}/{year}", time=f"{n + 8:02d}:00:00", boro=boro, key=len(rows) + 1))
    rows.append(make_row(time="(null)", boro="QUEENS", key=len(rows) + 1))
    path = tmp_path / "shootings.csv"
    pd.DataFrame(rows, columns=RAW_COLUMNS).to_csv(path, index=False)
    return path


@pytest.fixture
def config_path(tmp_path) -> Path:
    cfg = {
        "paths": {"outputs": str(tmp_path / "outputs")},
        "data": {"source_url": "https://example.invalid/shootings.csv", "timeout_seconds": 5},
        "cleaning": {"timezone": "America/New_York", "on_malformed": "quarantine"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return path


@pytest.fixture
def cfg(config_path):
    return load_config(config_path)
