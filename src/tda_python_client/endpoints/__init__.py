from .accounts import AccountsAPI
from .market_data import MarketDataAPI

__all__ = ["AccountsAPI", "MarketDataAPI"]
