from unittest.mock import MagicMock
import pytest
import json


def make_response(status, body=None, text=None):
    """
    Build a mocked `requests.Response` with a status code and a body given
    either as JSON-serializable data or as raw text.
    """
    resp = MagicMock()
    resp.status_code = status
    resp.text = text if text is not None else json.dumps(body)
    resp.json.side_effect = lambda: json.loads(resp.text)
    return resp


# Balance keys of a margin account as documented by the API. Values are
# distinct so a field decoded into the wrong attribute shows up.
MARGIN_INITIAL_BALANCES = {
    "accountValue": 10500.25,
    "accruedInterest": 1.5,
    "bondValue": 250.0,
    "cashAvailableForTrading": 2400.0,
    "cashAvailableForWithdrawal": 2300.0,
    "cashBalance": 2500.0,
    "cashDebitCallValue": 3.0,
    "cashReceipts": 4.0,
    "isInCall": False,
    "liquidationValue": 10500.75,
    "longOptionMarketValue": 310.0,
    "moneyMarketFund": 120.0,
    "mutualFundValue": 730.0,
    "pendingDeposits": 50.0,
    "shortOptionMarketValue": 6.0,
    "shortStockValue": 7.0,
    "unsettledCash": 8.0,
}

MARGIN_CURRENT_BALANCES = {
    "accruedInterest": 1.75,
    "bondValue": 255.0,
    "cashAvailableForTrading": 2450.0,
    "cashAvailableForWithdrawal": 2350.0,
    "cashBalance": 2550.0,
    "cashCall": 9.0,
    "cashDebitCallValue": 10.0,
    "cashReceipts": 11.0,
    "liquidationValue": 10620.5,
    "longMarketValue": 8120.5,
    "longOptionMarketValue": 320.0,
    "moneyMarketFund": 125.0,
    "mutualFundValue": 735.0,
    "pendingDeposits": 55.0,
    "savings": 12.0,
    "shortMarketValue": 13.0,
    "shortOptionMarketValue": 14.0,
    "totalCash": 2565.0,
    "unsettledCash": 15.0,
}

MARGIN_PROJECTED_BALANCES = {
    "cashAvailableForTrading": 2460.0,
    "cashAvailableForWithdrawal": 2360.0,
}


@pytest.fixture
def documented_margin_account_payload():
    """A margin account carrying only the documented balance keys."""
    return {
        "securitiesAccount": {
            "type": "MARGIN",
            "accountId": "123456789",
            "roundTrips": 0,
            "isDayTrader": False,
            "isClosingOnlyRestricted": False,
            "initialBalances": dict(MARGIN_INITIAL_BALANCES),
            "currentBalances": dict(MARGIN_CURRENT_BALANCES),
            "projectedBalances": dict(MARGIN_PROJECTED_BALANCES),
        }
    }


@pytest.fixture
def margin_account_payload(documented_margin_account_payload):
    """A margin account with margin extras and a position."""
    account = documented_margin_account_payload["securitiesAccount"]
    account["initialBalances"].update({
        "margin": 2500.0,
        "marginBalance": 0,
        "marginEquity": 10500.25,
        "buyingPower": 5000.0,
        "dayTradingBuyingPower": 0,
        "maintenanceRequirement": 2400.0,
    })
    account["currentBalances"].update({
        "availableFunds": 2500.0,
        "buyingPower": 5000.0,
        "dayTradingBuyingPower": 0,
        "equity": 10620.5,
        "marginBalance": 0,
        "maintenanceRequirement": 2436.15,
        "sma": 5120.0,
    })
    account["projectedBalances"].update({
        "availableFunds": 2500.0,
        "buyingPower": 5000.0,
        "dayTradingBuyingPower": 0,
        "stockBuyingPower": 5000.0,
        "isInCall": False,
    })
    account["positions"] = [
        {
            "shortQuantity": 0,
            "longQuantity": 50,
            "averagePrice": 150.1,
            "marketValue": 8120.5,
            "currentDayProfitLoss": 120.0,
            "instrument": {
                "assetType": "EQUITY",
                "cusip": "037833100",
                "symbol": "AAPL",
            },
        }
    ]
    return documented_margin_account_payload


@pytest.fixture
def cash_account_payload():
    return {
        "securitiesAccount": {
            "type": "CASH",
            "accountId": "987654321",
            "roundTrips": 0,
            "isDayTrader": False,
            "isClosingOnlyRestricted": True,
            "initialBalances": {
                "accountValue": 3000.0,
                "cashBalance": 3000.0,
                "liquidationValue": 3000.0,
                "cashAvailableForTrading": 2800.0,
                "cashAvailableForWithdrawal": 2800.0,
                "unsettledCash": 200.0,
                "isInCall": False,
            },
            "currentBalances": {
                "cashBalance": 3000.0,
                "liquidationValue": 3000.0,
                "longMarketValue": 0,
                "totalCash": 3000.0,
                "cashAvailableForTrading": 2800.0,
                "cashAvailableForWithdrawal": 2800.0,
                "unsettledCash": 200.0,
                "cashCall": 0,
            },
            "projectedBalances": {
                "cashAvailableForTrading": 2800.0,
                "cashAvailableForWithdrawal": 2800.0,
            },
        }
    }


@pytest.fixture
def order_payload():
    return {
        "session": "NORMAL",
        "duration": "DAY",
        "orderType": "LIMIT",
        "quantity": 10,
        "filledQuantity": 10,
        "remainingQuantity": 0,
        "price": 149.5,
        "orderLegCollection": [
            {
                "orderLegType": "EQUITY",
                "legId": 1,
                "instrument": {"assetType": "EQUITY", "symbol": "AAPL"},
                "instruction": "BUY",
                "positionEffect": "OPENING",
                "quantity": 10,
            }
        ],
        "orderId": 5512345678,
        "cancelable": False,
        "editable": False,
        "status": "FILLED",
        "enteredTime": "2024-03-01T14:31:02+0000",
        "closeTime": "2024-03-01T14:31:03+0000",
        "accountId": 123456789,
    }


@pytest.fixture
def price_history_payload():
    return {
        "symbol": "AAPL",
        "empty": False,
        "candles": [
            {
                "open": 184.2,
                "high": 185.0,
                "low": 183.9,
                "close": 184.7,
                "volume": 120000,
                "datetime": 1704207600000,
            },
            {
                "open": 184.7,
                "high": 185.3,
                "low": 184.5,
                "close": 185.1,
                "volume": 98000,
                "datetime": 1704207660000,
            },
        ],
    }
