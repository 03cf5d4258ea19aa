"""
Typed response structures and their JSON decoders.

Every structure exposes ``from_json(payload, path="")``. Decoders never fill
a missing required field with a default: a missing key raises
`MissingField`, a value of the wrong JSON type raises `InvalidField`, both
naming the dotted path of the offending field.
"""
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from .exceptions import InvalidField, MissingField, UnknownVariant


_MISSING = object()


def _path(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _object(payload: Any, path: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise InvalidField(path or "<root>", "object")
    return payload


def _list(payload: Any, path: str) -> List[Any]:
    if not isinstance(payload, list):
        raise InvalidField(path or "<root>", "array")
    return payload


def _get(
    payload: Dict[str, Any],
    key: str,
    path: str,
    check: Callable[[Any], bool],
    expected: str,
    optional: bool = False
) -> Any:
    value = payload.get(key, _MISSING)
    if value is _MISSING or (optional and value is None):
        if optional:
            return None
        raise MissingField(_path(path, key))
    if not check(value):
        raise InvalidField(_path(path, key), expected)
    return value


def _is_str(v: Any) -> bool:
    return isinstance(v, str)


def _is_bool(v: Any) -> bool:
    return isinstance(v, bool)


def _is_int(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _str(payload, key, path, optional=False) -> Optional[str]:
    return _get(payload, key, path, _is_str, "string", optional)


def _bool(payload, key, path, optional=False) -> Optional[bool]:
    return _get(payload, key, path, _is_bool, "boolean", optional)


def _int(payload, key, path, optional=False) -> Optional[int]:
    return _get(payload, key, path, _is_int, "integer", optional)


def _float(payload, key, path, optional=False) -> Optional[float]:
    value = _get(payload, key, path, _is_number, "number", optional)
    return None if value is None else float(value)


def _items(payload, key, path, decoder, optional=False):
    value = payload.get(key, _MISSING)
    if value is _MISSING or value is None:
        if optional:
            return None
        raise MissingField(_path(path, key))
    list_path = _path(path, key)
    return [
        decoder(item, f"{list_path}[{i}]")
        for i, item in enumerate(_list(value, list_path))
    ]


def _nested(payload, key, path, decoder):
    value = payload.get(key, _MISSING)
    if value is _MISSING:
        raise MissingField(_path(path, key))
    return decoder(value, _path(path, key))


@dataclass(frozen=True)
class TokenRefreshResponse:
    """
    Payload returned by the OAuth2 token endpoint.

    `scope` is kept as received, either a space-delimited string or a
    sequence, which is stored as a tuple. Use
    `AccessToken.from_refresh_response()` to turn it into a token.
    """

    access_token: str
    expires_in: int
    scope: Union[str, Tuple[str, ...]]
    token_type: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.scope, str):
            object.__setattr__(self, "scope", tuple(self.scope))

    def scopes(self) -> Tuple[str, ...]:
        if isinstance(self.scope, str):
            return tuple(self.scope.split())
        return self.scope

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "TokenRefreshResponse":
        payload = _object(payload, path)
        scope = payload.get("scope", _MISSING)
        if scope is _MISSING:
            raise MissingField(_path(path, "scope"))
        if not (
            isinstance(scope, str)
            or (isinstance(scope, list) and all(map(_is_str, scope)))
        ):
            raise InvalidField(_path(path, "scope"), "string or string array")
        return cls(
            access_token=_str(payload, "access_token", path),
            expires_in=_int(payload, "expires_in", path),
            scope=scope,
            token_type=_str(payload, "token_type", path, optional=True),
        )


@dataclass(frozen=True)
class Instrument:
    asset_type: str
    symbol: str
    cusip: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "Instrument":
        payload = _object(payload, path)
        return cls(
            asset_type=_str(payload, "assetType", path),
            symbol=_str(payload, "symbol", path),
            cusip=_str(payload, "cusip", path, optional=True),
            description=_str(payload, "description", path, optional=True),
        )


@dataclass(frozen=True)
class Position:
    short_quantity: float
    long_quantity: float
    average_price: float
    market_value: float
    instrument: Instrument
    current_day_profit_loss: Optional[float] = None

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "Position":
        payload = _object(payload, path)
        return cls(
            short_quantity=_float(payload, "shortQuantity", path),
            long_quantity=_float(payload, "longQuantity", path),
            average_price=_float(payload, "averagePrice", path),
            market_value=_float(payload, "marketValue", path),
            instrument=_nested(payload, "instrument", path, Instrument.from_json),
            current_day_profit_loss=_float(
                payload, "currentDayProfitLoss", path, optional=True
            ),
        )


@dataclass(frozen=True)
class OrderLeg:
    order_leg_type: str
    leg_id: int
    instrument: Instrument
    instruction: str
    quantity: float
    position_effect: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "OrderLeg":
        payload = _object(payload, path)
        return cls(
            order_leg_type=_str(payload, "orderLegType", path),
            leg_id=_int(payload, "legId", path),
            instrument=_nested(payload, "instrument", path, Instrument.from_json),
            instruction=_str(payload, "instruction", path),
            quantity=_float(payload, "quantity", path),
            position_effect=_str(payload, "positionEffect", path, optional=True),
        )


@dataclass(frozen=True)
class Order:
    """A working or historical order as returned by the orders endpoints."""

    order_id: int
    account_id: str
    status: str
    session: str
    duration: str
    order_type: str
    quantity: float
    filled_quantity: float
    remaining_quantity: float
    entered_time: str
    cancelable: bool
    editable: bool
    order_legs: List[OrderLeg]
    price: Optional[float] = None
    close_time: Optional[str] = None

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "Order":
        payload = _object(payload, path)
        account_id = payload.get("accountId", _MISSING)
        # The orders endpoint sends numeric account ids.
        if _is_int(account_id):
            account_id = str(account_id)
        elif account_id is _MISSING:
            raise MissingField(_path(path, "accountId"))
        elif not _is_str(account_id):
            raise InvalidField(_path(path, "accountId"), "string")
        return cls(
            order_id=_int(payload, "orderId", path),
            account_id=account_id,
            status=_str(payload, "status", path),
            session=_str(payload, "session", path),
            duration=_str(payload, "duration", path),
            order_type=_str(payload, "orderType", path),
            quantity=_float(payload, "quantity", path),
            filled_quantity=_float(payload, "filledQuantity", path),
            remaining_quantity=_float(payload, "remainingQuantity", path),
            entered_time=_str(payload, "enteredTime", path),
            cancelable=_bool(payload, "cancelable", path),
            editable=_bool(payload, "editable", path),
            order_legs=_items(
                payload, "orderLegCollection", path, OrderLeg.from_json
            ),
            price=_float(payload, "price", path, optional=True),
            close_time=_str(payload, "closeTime", path, optional=True),
        )


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _Balances:
    """
    Flat balance records. Every attribute maps to the camelCase wire key of
    the same name. Attributes without a default are required, those
    defaulting to ``None`` may be absent. Booleans are read as booleans,
    everything else as a number.
    """

    @classmethod
    def from_json(cls, payload: Any, path: str = ""):
        payload = _object(payload, path)
        values = {}
        for f in fields(cls):
            reader = _bool if f.type in (bool, Optional[bool]) else _float
            values[f.name] = reader(
                payload, _camel(f.name), path, optional=f.default is None
            )
        return cls(**values)


@dataclass(frozen=True)
class MarginInitialBalances(_Balances):
    account_value: float
    accrued_interest: float
    bond_value: float
    cash_available_for_trading: float
    cash_available_for_withdrawal: float
    cash_balance: float
    cash_debit_call_value: float
    cash_receipts: float
    is_in_call: bool
    liquidation_value: float
    long_option_market_value: float
    money_market_fund: float
    mutual_fund_value: float
    pending_deposits: float
    short_option_market_value: float
    short_stock_value: float
    unsettled_cash: float
    margin: Optional[float] = None
    margin_balance: Optional[float] = None
    margin_equity: Optional[float] = None
    buying_power: Optional[float] = None
    day_trading_buying_power: Optional[float] = None
    maintenance_requirement: Optional[float] = None


@dataclass(frozen=True)
class MarginCurrentBalances(_Balances):
    accrued_interest: float
    bond_value: float
    cash_available_for_trading: float
    cash_available_for_withdrawal: float
    cash_balance: float
    cash_call: float
    cash_debit_call_value: float
    cash_receipts: float
    liquidation_value: float
    long_market_value: float
    long_option_market_value: float
    money_market_fund: float
    mutual_fund_value: float
    pending_deposits: float
    savings: float
    short_market_value: float
    short_option_market_value: float
    total_cash: float
    unsettled_cash: float
    available_funds: Optional[float] = None
    buying_power: Optional[float] = None
    day_trading_buying_power: Optional[float] = None
    equity: Optional[float] = None
    margin_balance: Optional[float] = None
    maintenance_requirement: Optional[float] = None
    sma: Optional[float] = None


@dataclass(frozen=True)
class MarginProjectedBalances(_Balances):
    cash_available_for_trading: float
    cash_available_for_withdrawal: float
    available_funds: Optional[float] = None
    buying_power: Optional[float] = None
    day_trading_buying_power: Optional[float] = None
    stock_buying_power: Optional[float] = None
    is_in_call: Optional[bool] = None


@dataclass(frozen=True)
class CashInitialBalances(_Balances):
    account_value: float
    cash_balance: float
    liquidation_value: float
    cash_available_for_trading: float
    cash_available_for_withdrawal: float
    unsettled_cash: float
    is_in_call: bool


@dataclass(frozen=True)
class CashCurrentBalances(_Balances):
    cash_balance: float
    liquidation_value: float
    long_market_value: float
    total_cash: float
    cash_available_for_trading: float
    cash_available_for_withdrawal: float
    unsettled_cash: float
    cash_call: float


@dataclass(frozen=True)
class CashProjectedBalances(_Balances):
    cash_available_for_trading: float
    cash_available_for_withdrawal: float


def _account_common(payload: Dict[str, Any], path: str) -> Dict[str, Any]:
    return {
        "type": _str(payload, "type", path),
        "account_id": _str(payload, "accountId", path),
        "round_trips": _int(payload, "roundTrips", path),
        "is_day_trader": _bool(payload, "isDayTrader", path),
        "is_closing_only_restricted": _bool(
            payload, "isClosingOnlyRestricted", path
        ),
        "positions": _items(
            payload, "positions", path, Position.from_json, optional=True
        ),
        "order_strategies": _items(
            payload, "orderStrategies", path, Order.from_json, optional=True
        ),
    }


@dataclass(frozen=True)
class MarginAccount:
    type: str
    account_id: str
    round_trips: int
    is_day_trader: bool
    is_closing_only_restricted: bool
    initial_balances: MarginInitialBalances
    current_balances: MarginCurrentBalances
    projected_balances: MarginProjectedBalances
    positions: Optional[List[Position]] = None
    order_strategies: Optional[List[Order]] = None

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "MarginAccount":
        payload = _object(payload, path)
        return cls(
            initial_balances=_nested(
                payload, "initialBalances", path,
                MarginInitialBalances.from_json
            ),
            current_balances=_nested(
                payload, "currentBalances", path,
                MarginCurrentBalances.from_json
            ),
            projected_balances=_nested(
                payload, "projectedBalances", path,
                MarginProjectedBalances.from_json
            ),
            **_account_common(payload, path)
        )


@dataclass(frozen=True)
class CashAccount:
    type: str
    account_id: str
    round_trips: int
    is_day_trader: bool
    is_closing_only_restricted: bool
    initial_balances: CashInitialBalances
    current_balances: CashCurrentBalances
    projected_balances: CashProjectedBalances
    positions: Optional[List[Position]] = None
    order_strategies: Optional[List[Order]] = None

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "CashAccount":
        payload = _object(payload, path)
        return cls(
            initial_balances=_nested(
                payload, "initialBalances", path,
                CashInitialBalances.from_json
            ),
            current_balances=_nested(
                payload, "currentBalances", path,
                CashCurrentBalances.from_json
            ),
            projected_balances=_nested(
                payload, "projectedBalances", path,
                CashProjectedBalances.from_json
            ),
            **_account_common(payload, path)
        )


SecuritiesAccount = Union[MarginAccount, CashAccount]

# Closed set of account variants keyed by the wire ``type`` discriminator.
# New variants are added here and nowhere else.
ACCOUNT_VARIANTS: Dict[str, Type[SecuritiesAccount]] = {
    "MARGIN": MarginAccount,
    "CASH": CashAccount,
}


def decode_securities_account(
    payload: Any,
    path: str = "securitiesAccount"
) -> SecuritiesAccount:
    """
    Decode a securities account into the variant named by its ``type``.

    Raises
    ------
    MissingField
        If the discriminator or any field of the selected variant is absent.
    UnknownVariant
        If ``type`` names no known variant.
    """
    payload = _object(payload, path)
    discriminator = _str(payload, "type", path)
    variant = ACCOUNT_VARIANTS.get(discriminator)
    if variant is None:
        raise UnknownVariant(discriminator, field=_path(path, "type"))
    return variant.from_json(payload, path)


@dataclass(frozen=True)
class Account:
    """Item returned by the single- and multi-account endpoints."""

    securities_account: SecuritiesAccount

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "Account":
        payload = _object(payload, path)
        return cls(
            securities_account=_nested(
                payload, "securitiesAccount", path, decode_securities_account
            )
        )


@dataclass(frozen=True)
class Mover:
    change: float
    description: str
    direction: str
    last: float
    symbol: str
    total_volume: int

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "Mover":
        payload = _object(payload, path)
        return cls(
            change=_float(payload, "change", path),
            description=_str(payload, "description", path),
            direction=_str(payload, "direction", path),
            last=_float(payload, "last", path),
            symbol=_str(payload, "symbol", path),
            total_volume=_int(payload, "totalVolume", path),
        )


@dataclass(frozen=True)
class Candle:
    """One OHLCV bar. `datetime` is the bar open in epoch milliseconds."""

    open: float
    high: float
    low: float
    close: float
    volume: int
    datetime: int

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "Candle":
        payload = _object(payload, path)
        return cls(
            open=_float(payload, "open", path),
            high=_float(payload, "high", path),
            low=_float(payload, "low", path),
            close=_float(payload, "close", path),
            volume=_int(payload, "volume", path),
            datetime=_int(payload, "datetime", path),
        )


@dataclass(frozen=True)
class PriceHistory:
    symbol: str
    empty: bool
    candles: List[Candle]

    @classmethod
    def from_json(cls, payload: Any, path: str = "") -> "PriceHistory":
        payload = _object(payload, path)
        return cls(
            symbol=_str(payload, "symbol", path),
            empty=_bool(payload, "empty", path),
            candles=_items(payload, "candles", path, Candle.from_json),
        )


def decode_list(decoder, payload: Any) -> list:
    """Decode a top-level JSON array with `decoder` applied to each item."""
    return [
        decoder(item, f"[{i}]")
        for i, item in enumerate(_list(payload, ""))
    ]
