from tda_python_client import AccessToken, TDAClient
from tda_python_client.params import (
    FrequencyType,
    GetPriceHistoryParams,
    PeriodType,
)
from tda_python_client.toolbox import candles_to_dataframe
import os

if __name__ == "__main__":
    # Reuse a token obtained earlier. Without a known expiry it always
    # reports as expired, so refresh before relying on it.
    token = AccessToken(token=os.environ["TDA_ACCESS_TOKEN"])

    client = TDAClient(
        os.environ["TDA_CLIENT_ID"],
        os.environ["TDA_REFRESH_TOKEN"],
        token,
    )

    if client.access_token.has_expired():
        response = client.get_access_token()
        client.set_access_token(AccessToken.from_refresh_response(response))

    history = client.get_price_history(
        "AAPL",
        GetPriceHistoryParams(
            period_type=PeriodType.MONTH,
            period=1,
            frequency_type=FrequencyType.DAILY,
            frequency=1,
        ),
    )

    print(candles_to_dataframe(history).tail())
