from typing import List, Optional
import requests

from ..base_client import BaseAPIClient
from ..params import GetMoversParams, GetPriceHistoryParams
from ..responses import Mover, PriceHistory, decode_list


class MarketDataAPI(BaseAPIClient):
    """
    Market data endpoints: movers and price history.
    """

    def get_movers(
        self,
        index: str,
        params: Optional[GetMoversParams] = None
    ) -> List[Mover]:
        """
        Top 10 movers (up or down) by value or percent for an index.

        Parameters
        ----------
        index : str
            Index symbol, one of ``$COMPX``, ``$DJI`` or ``$SPX.X``.
        params : GetMoversParams, optional
            Direction and change type filters.

        Returns
        -------
        list of Mover
            May be empty outside market hours.
        """
        params = params or GetMoversParams.default()

        index = requests.utils.quote(index.strip(), safe="")

        data = self.make_request(
            "GET",
            f"marketdata/{index}/movers",
            params=params.encode()
        )

        return decode_list(Mover.from_json, data)

    def get_price_history(
        self,
        symbol: str,
        params: Optional[GetPriceHistoryParams] = None
    ) -> PriceHistory:
        """
        Retrieve OHLCV candles for a symbol.

        Parameters
        ----------
        symbol : str
            Instrument symbol (e.g. ``AAPL``).
        params : GetPriceHistoryParams, optional
            Period, frequency and date range. With none set the API
            returns 10 days of 1-minute candles.

        Returns
        -------
        PriceHistory
            Candles in ascending time order. `toolbox.candles_to_dataframe`
            turns them into a DataFrame.

        Notes
        -----
        - Do not combine `period` with both `start_date` and `end_date`;
          the API rejects the request with an `ApiError`.
        """
        params = params or GetPriceHistoryParams.default()

        symbol = requests.utils.quote(symbol.strip(), safe="")

        data = self.make_request(
            "GET",
            f"marketdata/{symbol}/pricehistory",
            params=params.encode()
        )

        return PriceHistory.from_json(data)
