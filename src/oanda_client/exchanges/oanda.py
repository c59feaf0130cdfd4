"""
OANDA v20 market data and trade lifecycle operations.

Usage::

    from oanda_client.exchanges.oanda import OandaAdapter
    from oanda_client.exchanges.oanda_connection import OandaConnection

    oanda = OandaAdapter(OandaConnection(account_id, token))

    history = oanda.get_candles("EUR_USD", "3", "M1")
    closes = history.extract_closed()

    oanda.reduce_trade_size("1234", CloseTradePayload(units="ALL"))

Each operation builds its path, makes one call through the connection and
decodes the body into a record from :mod:`oanda_client.core.models` or
:mod:`oanda_client.core.trade_models`. Transport and API errors propagate;
an undecodable body is logged and yields the empty record (see
:func:`oanda_client.core.decoding.decode_json`).
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Type, TypeVar

from oanda_client.core.decoding import decode_json
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
from oanda_client.exchanges import oanda_endpoints as endpoints
from oanda_client.exchanges.base import BrokerAdapter
from oanda_client.exchanges.oanda_connection import OandaConnection

T = TypeVar("T")


class OandaAdapter(BrokerAdapter):
    """
    Typed access to the OANDA v20 REST API over one :class:`OandaConnection`.

    Parameters
    ----------
    connection : OandaConnection
        Host, account and auth headers used for every call.
    logger : logging.Logger, optional
        Defaults to the module logger.
    """

    def __init__(
        self,
        connection: OandaConnection,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.connection = connection
        self.logger = logger or logging.getLogger(__name__)

    @property
    def account_id(self) -> str:
        return self.connection.account_id

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, endpoint: str, model: Type[T]) -> T:
        body = self.connection.request(endpoint)
        return decode_json(body, model, strict=self.connection.strict_decoding)

    def _put(self, endpoint: str, payload: dict, model: Type[T]) -> T:
        body = json.dumps(payload, separators=(",", ":"))
        response = self.connection.update(endpoint, body)
        return decode_json(response, model, strict=self.connection.strict_decoding)

    # ------------------------------------------------------------------
    # Instruments
    # ------------------------------------------------------------------

    def get_candles(self, instrument: str, count: str, granularity: str) -> InstrumentHistory:
        """
        Fetch the latest *count* mid-price candles.

        Parameters
        ----------
        instrument : str
            Symbol to query, e.g. ``"EUR_USD"``.
        count : str
            Number of candlesticks to return.
        granularity : str
            Candle width: ``S5``, ``S15``, ``M1``, ``M15``, ``M30``, ``H1``,
            ``D``, ``W``, ``M`` ...
        """
        return self._get(endpoints.candles_path(instrument, count, granularity), InstrumentHistory)

    def get_candles_by_time(
        self,
        instrument: str,
        granularity: str,
        from_: str,
        to: str,
        smooth: bool,
    ) -> InstrumentHistory:
        """
        Fetch mid-price candles between two points in time.

        Parameters
        ----------
        instrument : str
            Symbol to query.
        granularity : str
            Candle width, as for :meth:`get_candles`.
        from_ : str
            Start of the range, Unix representation.
        to : str
            End of the range, Unix representation.
        smooth : bool
            A smoothed candle uses the previous candle's close as its open;
            an un-smoothed one uses the first price of its own range.
        """
        path = endpoints.candles_by_time_path(instrument, granularity, from_, to, smooth)
        return self._get(path, InstrumentHistory)

    def get_bid_ask_candles(self, instrument: str, count: str, granularity: str) -> InstrumentBidAskHistory:
        """Fetch the latest *count* candles with separate bid and ask OHLC."""
        path = endpoints.bid_ask_candles_path(instrument, count, granularity)
        return self._get(path, InstrumentBidAskHistory)

    def get_bid_ask_candles_by_time(
        self,
        instrument: str,
        granularity: str,
        from_: str,
        to: str,
        smooth: bool,
    ) -> InstrumentBidAskHistory:
        """Bid/ask variant of :meth:`get_candles_by_time`."""
        path = endpoints.bid_ask_candles_by_time_path(instrument, granularity, from_, to, smooth)
        return self._get(path, InstrumentBidAskHistory)

    def order_book(self, instrument: str) -> BrokerBook:
        return self._get(endpoints.order_book_path(instrument), BrokerBook)

    def position_book(self, instrument: str) -> BrokerBook:
        return self._get(endpoints.position_book_path(instrument), BrokerBook)

    def get_instrument_price(self, instrument: str) -> InstrumentPricing:
        """Current pricing for *instrument* (a comma separated list also works)."""
        return self._get(endpoints.pricing_path(self.account_id, instrument), InstrumentPricing)

    # ------------------------------------------------------------------
    # Trades
    # ------------------------------------------------------------------

    def get_trades_for_instrument(self, instrument: str) -> ReceivedTrades:
        path = endpoints.trades_for_instrument_path(self.account_id, instrument)
        return self._get(path, ReceivedTrades)

    def get_open_trades(self) -> ReceivedTrades:
        return self._get(endpoints.open_trades_path(self.account_id), ReceivedTrades)

    def get_trade(self, ticket: str) -> ReceivedTrade:
        return self._get(endpoints.trade_path(self.account_id, ticket), ReceivedTrade)

    def reduce_trade_size(self, ticket: str, body: CloseTradePayload) -> ModifiedTrade:
        """
        Close part or all of trade *ticket*.

        ``CloseTradePayload()`` defaults to ``units="ALL"``, which closes the
        whole position.
        """
        self.logger.info(f"[{ticket}] Reducing trade by units={body.units}")
        path = endpoints.trade_path(self.account_id, ticket)
        return self._put(path, body.to_dict(), ModifiedTrade)

    def update_trade_orders(self, trade_id: str, body: UpdateTradeOrdersPayload) -> ModifiedTrade:
        """
        Create, replace or cancel the stop-loss, take-profit and trailing
        stop orders attached to *trade_id*. Orders left as ``None`` on the
        payload are not sent.
        """
        self.logger.info(f"[{trade_id}] Updating dependent orders: {sorted(body.to_dict())}")
        path = endpoints.trade_orders_path(self.account_id, trade_id)
        return self._put(path, body.to_dict(), ModifiedTrade)
