from abc import ABC, abstractmethod

from oanda_client.core.models import (
    BrokerBook,
    InstrumentBidAskHistory,
    InstrumentHistory,
    InstrumentPricing,
)
from oanda_client.core.trade_models import (
    CloseTradePayload,
    ModifiedTrade,
    ReceivedTrade,
    ReceivedTrades,
    UpdateTradeOrdersPayload,
)

class BrokerAdapter(ABC):

    # Market Data Methods
    @abstractmethod
    def get_candles(self, instrument: str, count: str, granularity: str) -> InstrumentHistory:
        pass

    @abstractmethod
    def get_candles_by_time(self, instrument: str, granularity: str, from_: str, to: str, smooth: bool) -> InstrumentHistory:
        pass

    @abstractmethod
    def get_bid_ask_candles(self, instrument: str, count: str, granularity: str) -> InstrumentBidAskHistory:
        pass

    @abstractmethod
    def get_bid_ask_candles_by_time(self, instrument: str, granularity: str, from_: str, to: str, smooth: bool) -> InstrumentBidAskHistory:
        pass

    @abstractmethod
    def order_book(self, instrument: str) -> BrokerBook:
        pass

    @abstractmethod
    def position_book(self, instrument: str) -> BrokerBook:
        pass

    @abstractmethod
    def get_instrument_price(self, instrument: str) -> InstrumentPricing:
        pass

    # Trading Methods
    @abstractmethod
    def get_trades_for_instrument(self, instrument: str) -> ReceivedTrades:
        pass

    @abstractmethod
    def get_open_trades(self) -> ReceivedTrades:
        pass

    @abstractmethod
    def get_trade(self, ticket: str) -> ReceivedTrade:
        pass

    @abstractmethod
    def reduce_trade_size(self, ticket: str, body: CloseTradePayload) -> ModifiedTrade:
        pass

    @abstractmethod
    def update_trade_orders(self, trade_id: str, body: UpdateTradeOrdersPayload) -> ModifiedTrade:
        pass
