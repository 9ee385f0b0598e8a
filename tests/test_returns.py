"""
Unit tests for the price -> return transformation.
"""
import numpy as np
import pandas as pd
import pytest

from pdindex.exceptions import InsufficientDataError
from pdindex.returns import center_returns, simple_returns, transform_prices


def _price_table(descending: bool = False) -> pd.DataFrame:
    dates = pd.date_range("2024-01-01", periods=6, freq="D")
    df = pd.DataFrame(
        {
            "Date": dates,
            "AAA": [100.0, 101.0, 99.0, 102.0, 104.0, 103.0],
            "BBB": [50.0, 50.5, 51.0, 50.0, 49.0, 49.5],
            "CCC": [10.0, 10.2, 10.1, 10.4, 10.3, 10.6],
        }
    )
    if descending:
        df = df.iloc[::-1].reset_index(drop=True)
    return df


def test_simple_returns_formula():
    prices = pd.DataFrame({"AAA": [100.0, 110.0, 99.0]})
    result = simple_returns(prices)
    assert len(result) == 2
    assert np.allclose(result["AAA"].to_numpy(), [0.10, -0.10])


def test_transform_prices_centres_and_keeps_rows():
    result = transform_prices(_price_table())

    assert list(result.columns) == ["AAA", "BBB", "CCC"]
    assert len(result) == 5
    assert result.index.name == "date"
    assert result.index.is_monotonic_increasing
    assert np.allclose(result.mean().to_numpy(), 0.0, atol=1e-12)
    assert not result.isna().any().any()


def test_transform_prices_matches_centred_simple_returns():
    prices = _price_table().set_index("Date")
    expected = center_returns(simple_returns(prices))

    result = transform_prices(_price_table())

    assert np.allclose(result.to_numpy(), expected.to_numpy())


def test_row_order_does_not_change_returns():
    ascending = transform_prices(_price_table(descending=False))
    descending = transform_prices(_price_table(descending=True))

    pd.testing.assert_frame_equal(ascending, descending)
    # Forward-in-time: AAA went 100 -> 101 on the first return date
    raw = simple_returns(_price_table().set_index("Date"))
    assert raw["AAA"].iloc[0] == pytest.approx(0.01)


def test_columns_with_missing_returns_are_dropped():
    df = _price_table()
    df.loc[3, "BBB"] = np.nan

    result = transform_prices(df)

    assert list(result.columns) == ["AAA", "CCC"]
    assert len(result) == 5


def test_zero_price_drops_column():
    df = _price_table()
    df.loc[2, "CCC"] = 0.0

    result = transform_prices(df)

    assert "CCC" not in result.columns
    assert np.isfinite(result.to_numpy()).all()


def test_non_trading_rows_are_filtered_by_reference_column():
    df = _price_table()
    df.loc[2, "AAA"] = np.nan  # AAA is the default reference column

    result = transform_prices(df)

    # 6 rows - 1 filtered - 1 differencing
    assert len(result) == 4
    assert list(result.columns) == ["AAA", "BBB", "CCC"]
    assert pd.Timestamp("2024-01-03") not in result.index


def test_explicit_reference_column():
    df = _price_table()
    df.loc[2, "BBB"] = np.nan

    result = transform_prices(df, reference_column="BBB")

    assert len(result) == 4
    assert list(result.columns) == ["AAA", "BBB", "CCC"]


def test_dates_from_index():
    df = _price_table().set_index("Date")
    result = transform_prices(df, date_column=None)
    assert len(result) == 5
    assert result.index[0] == pd.Timestamp("2024-01-02")


def test_too_few_rows_after_filtering():
    df = _price_table()
    df.loc[1:, "AAA"] = np.nan
    with pytest.raises(InsufficientDataError):
        transform_prices(df)


def test_all_columns_dropped():
    df = _price_table()
    df.loc[2, ["BBB", "CCC"]] = np.nan
    df.loc[4, "AAA"] = 0.0
    with pytest.raises(InsufficientDataError):
        transform_prices(df)


def test_no_asset_columns():
    df = _price_table()[["Date"]]
    with pytest.raises(InsufficientDataError):
        transform_prices(df)


def test_unknown_columns_raise_value_error():
    with pytest.raises(ValueError, match="Date column"):
        transform_prices(_price_table(), date_column="Timestamp")
    with pytest.raises(ValueError, match="Reference column"):
        transform_prices(_price_table(), reference_column="ZZZ")


def test_unparseable_dates_are_filtered_from_shuffled_table():
    df = pd.DataFrame(
        {
            "Date": ["2024-01-03", "garbage", "2024-01-01", "2024-01-04", "2024-01-02"],
            "AAA": [102.0, 500.0, 100.0, 101.0, 101.5],
            "BBB": [20.5, 90.0, 20.0, 20.1, 20.8],
        }
    )

    result = transform_prices(df)

    # 5 rows - 1 unparseable date - 1 differencing
    assert len(result) == 5 - 1 - 1
    assert list(result.index) == [
        pd.Timestamp("2024-01-02"),
        pd.Timestamp("2024-01-03"),
        pd.Timestamp("2024-01-04"),
    ]
    raw = simple_returns(
        pd.DataFrame({"AAA": [100.0, 101.5, 102.0, 101.0]})
    )["AAA"].to_numpy()
    assert np.allclose(result["AAA"].to_numpy(), raw - raw.mean())


def test_date_column_default_read_at_call_time(monkeypatch):
    from pdindex.config import RETURNS_CONFIG

    df = _price_table().rename(columns={"Date": "Session"})
    monkeypatch.setitem(RETURNS_CONFIG, "date_column", "Session")

    result = transform_prices(df)

    assert len(result) == 5
    assert list(result.columns) == ["AAA", "BBB", "CCC"]
