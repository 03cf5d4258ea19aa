"""
Typed request parameters, one class per endpoint.

Every parameter class is a frozen dataclass whose fields all default to
``None``. ``default()`` returns an instance with every optional field unset
and ``encode()`` turns an instance into ordered ``(key, value)`` string pairs
ready for a query string, skipping the fields that are unset.

No cross-field validation happens here: the API decides whether a
combination is valid and rejects it with an `ApiError`.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union
from dateutil.parser import isoparse
import numpy as np
import math


Pairs = List[Tuple[str, str]]
DateLike = Union[date, datetime, str]
InstantLike = Union[datetime, date, int, float, str]


class AccountField(str, Enum):
    """Extra sections returned alongside account balances."""

    POSITIONS = "positions"
    ORDERS = "orders"


class MoverDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class MoverChange(str, Enum):
    VALUE = "value"
    PERCENT = "percent"


class PeriodType(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    YTD = "ytd"


class FrequencyType(str, Enum):
    MINUTE = "minute"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class OrderStatus(str, Enum):
    """Order status filter accepted by the orders endpoint."""

    AWAITING_PARENT_ORDER = "AWAITING_PARENT_ORDER"
    AWAITING_CONDITION = "AWAITING_CONDITION"
    AWAITING_MANUAL_REVIEW = "AWAITING_MANUAL_REVIEW"
    ACCEPTED = "ACCEPTED"
    AWAITING_UR_OUT = "AWAITING_UR_OUT"
    PENDING_ACTIVATION = "PENDING_ACTIVATION"
    QUEUED = "QUEUED"
    WORKING = "WORKING"
    REJECTED = "REJECTED"
    PENDING_CANCEL = "PENDING_CANCEL"
    CANCELED = "CANCELED"
    PENDING_REPLACE = "PENDING_REPLACE"
    REPLACED = "REPLACED"
    FILLED = "FILLED"
    EXPIRED = "EXPIRED"


def _enum_value(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _join(values: Sequence[Union[Enum, str]]) -> str:
    return ",".join(_enum_value(v) for v in values)


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _normalize_date(value: DateLike) -> str:
    """
    Normalize a date input to YYYY-MM-DD (day precision).

    Raises
    ------
    ValueError
        If the input format cannot be parsed.
    """
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.isoformat()
    try:
        return str(np.datetime64(value, "D"))
    except Exception:
        raise ValueError(f"Invalid date format: {value}")


def _epoch_millis(value: InstantLike) -> str:
    """
    Convert an instant to milliseconds since epoch.

    Numbers are taken as already being epoch milliseconds. Naive datetimes
    and ISO strings without an offset are read as UTC.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid instant: {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValueError(f"Invalid instant: {value!r}")
        return str(int(value))
    if isinstance(value, str):
        value = isoparse(value)
    if not isinstance(value, date):
        raise ValueError(f"Invalid instant: {value!r}")
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return str(int(value.timestamp() * 1000))


class _Params(ABC):
    """Shared ``default()`` constructor and encoding entry point."""

    @classmethod
    def default(cls):
        return cls()

    @abstractmethod
    def encode(self) -> Pairs:
        """Ordered query pairs, omitting unset fields."""


@dataclass(frozen=True)
class GetAccountParams(_Params):
    """
    Parameters for `TDAClient.get_account()`.

    Balances are always returned; `fields` adds positions and/or orders.
    """

    fields: Optional[Sequence[AccountField]] = None

    def encode(self) -> Pairs:
        pairs: Pairs = []
        if self.fields:
            pairs.append(("fields", _join(self.fields)))
        return pairs


@dataclass(frozen=True)
class GetAccountsParams(GetAccountParams):
    """Parameters for `TDAClient.get_accounts()`."""


@dataclass(frozen=True)
class GetMoversParams(_Params):
    """Parameters for `TDAClient.get_movers()`."""

    direction: Optional[MoverDirection] = None
    change: Optional[MoverChange] = None

    def encode(self) -> Pairs:
        pairs: Pairs = []
        if self.direction is not None:
            pairs.append(("direction", _enum_value(self.direction)))
        if self.change is not None:
            pairs.append(("change", _enum_value(self.change)))
        return pairs


@dataclass(frozen=True)
class GetPriceHistoryParams(_Params):
    """
    Parameters for `TDAClient.get_price_history()`.

    Attributes
    ----------
    period_type : PeriodType, optional
        Type of period to show. The API default is ``day``.
    period : int, optional
        Number of periods to show. Leave unset when both `start_date` and
        `end_date` are given.
    frequency_type : FrequencyType, optional
        Type of frequency with which a new candle is formed.
    frequency : int, optional
        Number of `frequency_type` units in each candle.
    start_date, end_date : datetime, date, int, float or str, optional
        Range bounds. Sent as milliseconds since epoch; numbers are taken
        as epoch milliseconds already.
    need_extended_hours_data : bool, optional
        Whether extended hours candles are included. The API default is
        ``true``.
    """

    period_type: Optional[PeriodType] = None
    period: Optional[int] = None
    frequency_type: Optional[FrequencyType] = None
    frequency: Optional[int] = None
    start_date: Optional[InstantLike] = None
    end_date: Optional[InstantLike] = None
    need_extended_hours_data: Optional[bool] = None

    def encode(self) -> Pairs:
        pairs: Pairs = []
        if self.period_type is not None:
            pairs.append(("periodType", _enum_value(self.period_type)))
        if self.period is not None:
            pairs.append(("period", str(self.period)))
        if self.frequency_type is not None:
            pairs.append(("frequencyType", _enum_value(self.frequency_type)))
        if self.frequency is not None:
            pairs.append(("frequency", str(self.frequency)))
        if self.start_date is not None:
            pairs.append(("startDate", _epoch_millis(self.start_date)))
        if self.end_date is not None:
            pairs.append(("endDate", _epoch_millis(self.end_date)))
        if self.need_extended_hours_data is not None:
            pairs.append(
                ("needExtendedHoursData", _bool(self.need_extended_hours_data))
            )
        return pairs


@dataclass(frozen=True)
class GetOrdersParams(_Params):
    """
    Parameters for `TDAClient.get_orders()`.

    Entered-time bounds are calendar dates (``yyyy-MM-dd``); the API only
    accepts a window within the last 60 days.
    """

    account_id: Optional[str] = None
    max_results: Optional[int] = None
    from_entered_time: Optional[DateLike] = None
    to_entered_time: Optional[DateLike] = None
    status: Optional[OrderStatus] = None

    def encode(self) -> Pairs:
        pairs: Pairs = []
        if self.account_id is not None:
            pairs.append(("accountId", self.account_id))
        if self.max_results is not None:
            pairs.append(("maxResults", str(self.max_results)))
        if self.from_entered_time is not None:
            pairs.append(
                ("fromEnteredTime", _normalize_date(self.from_entered_time))
            )
        if self.to_entered_time is not None:
            pairs.append(
                ("toEnteredTime", _normalize_date(self.to_entered_time))
            )
        if self.status is not None:
            pairs.append(("status", _enum_value(self.status)))
        return pairs


def encode(params: _Params) -> Pairs:
    """Encode any parameter object into ordered query pairs."""
    return params.encode()
