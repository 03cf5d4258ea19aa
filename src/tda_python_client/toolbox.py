from dataclasses import asdict
import pandas as pd

from .responses import PriceHistory


def candles_to_dataframe(
    history: PriceHistory
) -> pd.DataFrame:
    """
    Convert a `PriceHistory` into a cleaned and structured pandas DataFrame.

    The function:
    1. Loads the candles into a DataFrame.
    2. Converts the epoch-millisecond `datetime` into UTC `date` and `time`.
    3. Removes the original timestamp.
    4. Reorders the columns.
    5. Enforces consistent numeric/string dtypes.

    Parameters
    ----------
    history : PriceHistory
        Result of `TDAClient.get_price_history()`.

    Returns
    -------
    pandas.DataFrame
        A DataFrame with the schema
        ['date', 'time', 'open', 'high', 'low', 'close', 'volume'].
        Dates and times are strings; prices are float64 and volume int64.
        An empty history yields an empty frame with the same columns.
    """
    ordered_cols = ["date", "time", "open", "high", "low", "close", "volume"]

    if not history.candles:
        return pd.DataFrame(columns=ordered_cols)

    df = pd.DataFrame([asdict(c) for c in history.candles])

    ts = pd.to_datetime(df["datetime"], unit="ms", utc=True)
    df["date"] = ts.dt.date.astype(str)
    df["time"] = ts.dt.time.astype(str)

    df = df[ordered_cols]

    df = df.astype({
        "open": "float64",
        "high": "float64",
        "low": "float64",
        "close": "float64",
        "volume": "int64",
    })

    return df
