import os
import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def sample_feed_path() -> str:
    return os.path.join(os.path.dirname(__file__), "data/sample-feed.txt")


@pytest.fixture
def session_feed_path() -> str:
    return os.path.join(os.path.dirname(__file__), "data/session-feed.txt")


@pytest.fixture
def reference_trace():
    # (time, max price, twap) after each event of sample-feed.txt
    return [
        (1000, 10.0, None),
        (2000, 13.0, 10.0),
        (2200, 13.0, 10.5),
        (2400, 13.0, 15200 / 1400),
        (2500, 10.0, 11.0),
        (4000, None, 10.5),
    ]


def _load_feed(fp: str) -> pd.DataFrame:
    return pd.read_csv(
        fp, sep=r"\s+", comment="#", header=None,
        names=["time", "action", "order_id", "price"],
    )


@pytest.fixture
def expected_session_trace(session_feed_path):
    """
    Brute force: rescan every live order for the max after each event, then
    weight each max by the time until the next event.
    """
    feed = _load_feed(session_feed_path)

    live = {}
    max_prices = []
    for row in feed.itertuples():
        if row.action == "I":
            live.setdefault(row.order_id, row.price)
        else:
            live.pop(row.order_id, None)
        max_prices.append(max(live.values()) if live else np.nan)

    df = pd.DataFrame({"time": feed["time"], "max_price": max_prices})
    duration = df["time"].shift(-1) - df["time"]
    weight = duration.where(df["max_price"].notna(), 0.0)
    weighted = (df["max_price"].fillna(0.0) * weight)

    # twap reported at row i covers the intervals that ended at or before it
    cum_weight = weight.shift(1).fillna(0.0).cumsum()
    cum_weighted = weighted.shift(1).fillna(0.0).cumsum()
    with np.errstate(divide="ignore", invalid="ignore"):
        twap = np.where(cum_weight > 0, cum_weighted / cum_weight, np.nan)

    return [
        (
            int(t),
            None if np.isnan(p) else float(p),
            None if np.isnan(a) else float(a),
        )
        for t, p, a in zip(df["time"], df["max_price"], twap)
    ]
