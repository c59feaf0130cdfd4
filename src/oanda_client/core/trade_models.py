from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from oanda_client.core.decoding import (
    parse_time,
    sub_dict,
    sub_list,
    to_float,
    to_int,
    to_str,
)
from oanda_client.core.models import PriceBucket

# Trade records and the transactions returned by trade modification.
# Units, prices and P&L stay as the decimal strings OANDA sends so callers
# can do exact arithmetic on them.


@dataclass(frozen=True)
class ReceivedTradeOrder:
    price: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> ReceivedTradeOrder:
        return cls(price=to_str(data.get("price")))


@dataclass(frozen=True)
class Trade:
    current_units: str = ""
    financing: str = ""
    id: str = ""
    initial_units: str = ""
    instrument: str = ""
    open_time: Optional[pd.Timestamp] = None
    price: str = ""
    realized_pl: str = ""
    state: str = ""  # OPEN | CLOSED | CLOSE_WHEN_TRADEABLE
    unrealized_pl: str = ""
    stop_loss_order: ReceivedTradeOrder = field(default_factory=ReceivedTradeOrder)
    take_profit_order: ReceivedTradeOrder = field(default_factory=ReceivedTradeOrder)
    trailing_stop_loss_order: ReceivedTradeOrder = field(default_factory=ReceivedTradeOrder)

    @classmethod
    def from_dict(cls, data: dict) -> Trade:
        return cls(
            current_units=to_str(data.get("currentUnits")),
            financing=to_str(data.get("financing")),
            id=to_str(data.get("id")),
            initial_units=to_str(data.get("initialUnits")),
            instrument=to_str(data.get("instrument")),
            open_time=parse_time(data.get("openTime")),
            price=to_str(data.get("price")),
            realized_pl=to_str(data.get("realizedPL")),
            state=to_str(data.get("state")),
            unrealized_pl=to_str(data.get("unrealizedPL")),
            stop_loss_order=ReceivedTradeOrder.from_dict(sub_dict(data, "stopLossOrder")),
            take_profit_order=ReceivedTradeOrder.from_dict(sub_dict(data, "takeProfitOrder")),
            trailing_stop_loss_order=ReceivedTradeOrder.from_dict(
                sub_dict(data, "trailingStopLossOrder")
            ),
        )


@dataclass(frozen=True)
class ReceivedTrades:
    last_transaction_id: str = ""
    trades: List[Trade] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> ReceivedTrades:
        return cls(
            last_transaction_id=to_str(data.get("lastTransactionID")),
            trades=[Trade.from_dict(t) for t in sub_list(data, "trades")],
        )


@dataclass(frozen=True)
class ReceivedTrade:
    last_transaction_id: str = ""
    trade: Trade = field(default_factory=Trade)

    @classmethod
    def from_dict(cls, data: dict) -> ReceivedTrade:
        return cls(
            last_transaction_id=to_str(data.get("lastTransactionID")),
            trade=Trade.from_dict(sub_dict(data, "trade")),
        )


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CloseTradePayload:
    """Body of a trade size reduction. ``"ALL"`` closes the whole trade."""

    units: str = "ALL"

    def to_dict(self) -> dict:
        return {"Units": self.units}


@dataclass(frozen=True)
class OnFill:
    """Stop-loss / take-profit / trailing-stop details. Empty fields are not sent."""

    price: str = ""
    time_in_force: str = ""
    distance: str = ""

    def to_dict(self) -> dict:
        body = {}
        if self.price:
            body["price"] = self.price
        if self.time_in_force:
            body["timeInForce"] = self.time_in_force
        if self.distance:
            body["distance"] = self.distance
        return body


@dataclass(frozen=True)
class UpdateTradeOrdersPayload:
    stop_loss: Optional[OnFill] = None
    take_profit: Optional[OnFill] = None
    trailing_stop_loss: Optional[OnFill] = None

    def to_dict(self) -> dict:
        body = {}
        if self.stop_loss is not None:
            body["stopLoss"] = self.stop_loss.to_dict()
        if self.take_profit is not None:
            body["takeProfit"] = self.take_profit.to_dict()
        if self.trailing_stop_loss is not None:
            body["trailingStopLoss"] = self.trailing_stop_loss.to_dict()
        return body


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TradeClose:
    units: str = ""
    trade_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> TradeClose:
        return cls(units=to_str(data.get("units")), trade_id=to_str(data.get("tradeID")))


@dataclass(frozen=True)
class TradeReduced:
    trade_id: str = ""
    units: str = ""
    realized_pl: str = ""
    financing: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> TradeReduced:
        return cls(
            trade_id=to_str(data.get("tradeID")),
            units=to_str(data.get("units")),
            realized_pl=to_str(data.get("realizedPL")),
            financing=to_str(data.get("financing")),
        )


@dataclass(frozen=True)
class TradeOpened:
    trade_id: str = ""
    units: str = ""
    price: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> TradeOpened:
        return cls(
            trade_id=to_str(data.get("tradeID")),
            units=to_str(data.get("units")),
            price=to_str(data.get("price")),
        )


@dataclass(frozen=True)
class ClientPrice:
    """Full price ladder a fill was executed against."""

    time: Optional[pd.Timestamp] = None
    bids: List[PriceBucket] = field(default_factory=list)
    asks: List[PriceBucket] = field(default_factory=list)
    closeout_bid: float = 0.0
    closeout_ask: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> ClientPrice:
        return cls(
            time=parse_time(data.get("timestamp") or data.get("time")),
            bids=[PriceBucket.from_dict(b) for b in sub_list(data, "bids")],
            asks=[PriceBucket.from_dict(a) for a in sub_list(data, "asks")],
            closeout_bid=to_float(data.get("closeoutBid")),
            closeout_ask=to_float(data.get("closeoutAsk")),
        )


@dataclass(frozen=True)
class OrderCreateTransaction:
    type: str = ""
    instrument: str = ""
    units: str = ""
    time_in_force: str = ""
    position_fill: str = ""
    reason: str = ""
    trade_close: TradeClose = field(default_factory=TradeClose)
    id: str = ""
    user_id: int = 0
    account_id: str = ""
    batch_id: str = ""
    request_id: str = ""
    time: Optional[pd.Timestamp] = None

    @classmethod
    def from_dict(cls, data: dict) -> OrderCreateTransaction:
        return cls(
            type=to_str(data.get("type")),
            instrument=to_str(data.get("instrument")),
            units=to_str(data.get("units")),
            time_in_force=to_str(data.get("timeInForce")),
            position_fill=to_str(data.get("positionFill")),
            reason=to_str(data.get("reason")),
            trade_close=TradeClose.from_dict(sub_dict(data, "tradeClose")),
            id=to_str(data.get("id")),
            user_id=to_int(data.get("userID")),
            account_id=to_str(data.get("accountID")),
            batch_id=to_str(data.get("batchID")),
            request_id=to_str(data.get("requestID")),
            time=parse_time(data.get("time")),
        )


@dataclass(frozen=True)
class OrderFillTransaction:
    type: str = ""
    instrument: str = ""
    units: str = ""
    price: str = ""
    full_price: ClientPrice = field(default_factory=ClientPrice)
    pl: str = ""
    financing: str = ""
    commission: str = ""
    account_balance: str = ""
    trade_opened: TradeOpened = field(default_factory=TradeOpened)
    time_in_force: str = ""
    position_fill: str = ""
    reason: str = ""
    trades_closed: List[TradeReduced] = field(default_factory=list)
    trade_reduced: TradeReduced = field(default_factory=TradeReduced)
    id: str = ""
    user_id: int = 0
    account_id: str = ""
    batch_id: str = ""
    request_id: str = ""
    order_id: str = ""
    client_order_id: str = ""
    time: Optional[pd.Timestamp] = None

    @classmethod
    def from_dict(cls, data: dict) -> OrderFillTransaction:
        return cls(
            type=to_str(data.get("type")),
            instrument=to_str(data.get("instrument")),
            units=to_str(data.get("units")),
            price=to_str(data.get("price")),
            full_price=ClientPrice.from_dict(sub_dict(data, "fullPrice")),
            pl=to_str(data.get("pl")),
            financing=to_str(data.get("financing")),
            commission=to_str(data.get("commission")),
            account_balance=to_str(data.get("accountBalance")),
            trade_opened=TradeOpened.from_dict(sub_dict(data, "tradeOpened")),
            time_in_force=to_str(data.get("timeInForce")),
            position_fill=to_str(data.get("positionFill")),
            reason=to_str(data.get("reason")),
            trades_closed=[TradeReduced.from_dict(t) for t in sub_list(data, "tradesClosed")],
            trade_reduced=TradeReduced.from_dict(sub_dict(data, "tradeReduced")),
            id=to_str(data.get("id")),
            user_id=to_int(data.get("userID")),
            account_id=to_str(data.get("accountID")),
            batch_id=to_str(data.get("batchID")),
            request_id=to_str(data.get("requestID")),
            order_id=to_str(data.get("orderID", data.get("orderId"))),
            client_order_id=to_str(data.get("clientOrderID", data.get("clientOrderId"))),
            time=parse_time(data.get("time")),
        )


@dataclass(frozen=True)
class OrderCancelTransaction:
    type: str = ""
    order_id: str = ""
    reason: str = ""
    id: str = ""
    user_id: int = 0
    account_id: str = ""
    batch_id: str = ""
    request_id: str = ""
    time: Optional[pd.Timestamp] = None

    @classmethod
    def from_dict(cls, data: dict) -> OrderCancelTransaction:
        return cls(
            type=to_str(data.get("type")),
            order_id=to_str(data.get("orderID")),
            reason=to_str(data.get("reason")),
            id=to_str(data.get("id")),
            user_id=to_int(data.get("userID")),
            account_id=to_str(data.get("accountID")),
            batch_id=to_str(data.get("batchID")),
            request_id=to_str(data.get("requestID")),
            time=parse_time(data.get("time")),
        )


@dataclass(frozen=True)
class ModifiedTrade:
    order_create_transaction: OrderCreateTransaction = field(default_factory=OrderCreateTransaction)
    order_fill_transaction: OrderFillTransaction = field(default_factory=OrderFillTransaction)
    order_cancel_transaction: OrderCancelTransaction = field(default_factory=OrderCancelTransaction)
    related_transaction_ids: List[str] = field(default_factory=list)
    last_transaction_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> ModifiedTrade:
        return cls(
            order_create_transaction=OrderCreateTransaction.from_dict(
                sub_dict(data, "orderCreateTransaction")
            ),
            order_fill_transaction=OrderFillTransaction.from_dict(
                sub_dict(data, "orderFillTransaction")
            ),
            order_cancel_transaction=OrderCancelTransaction.from_dict(
                sub_dict(data, "orderCancelTransaction")
            ),
            related_transaction_ids=[to_str(i) for i in sub_list(data, "relatedTransactionIDs")],
            last_transaction_id=to_str(data.get("lastTransactionID")),
        )
