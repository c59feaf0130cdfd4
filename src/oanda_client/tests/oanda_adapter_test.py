"""Tests for the OANDA adapter operations

Tests cover:
- Path and method of every operation
- Decoding of each resource into its record type
- Serialisation of the trade modification payloads
- Error propagation (transport, API) and the decode-failure policy
"""

import json

import pandas as pd
import pytest
import requests

from conftest import (
    ACCOUNT_ID,
    bid_ask_candles_payload,
    book_payload,
    candles_payload,
    make_response,
    modified_trade_payload,
    pricing_payload,
    trade_payload,
)
from oanda_client.core.exceptions import DecodeError, OandaAPIError
from oanda_client.core.models import (
    BrokerBook,
    InstrumentBidAskHistory,
    InstrumentHistory,
    InstrumentPricing,
)
from oanda_client.core.trade_models import (
    CloseTradePayload,
    ModifiedTrade,
    OnFill,
    ReceivedTrade,
    ReceivedTrades,
    UpdateTradeOrdersPayload,
)
from oanda_client.exchanges.oanda import OandaAdapter
from oanda_client.exchanges.oanda_connection import PRACTICE_HOST, OandaConnection


def _called_url(session):
    args, _ = session.request.call_args
    return args[1]


def _called_method(session):
    args, _ = session.request.call_args
    return args[0]


def _called_body(session):
    _, kwargs = session.request.call_args
    return kwargs["data"]


class TestCandles:
    """Test candle history operations."""

    def test_get_candles_example(self, adapter, session):
        """Three candles for EUR_USD M1 decode in order and extract their closes."""
        session.request.return_value = make_response(candles_payload())

        history = adapter.get_candles("EUR_USD", "3", "M1")

        assert _called_method(session) == "GET"
        assert _called_url(session) == PRACTICE_HOST + "/instruments/EUR_USD/candles?count=3&granularity=M1"
        assert isinstance(history, InstrumentHistory)
        assert len(history.candles) == 3
        assert history.extract_closed() == [1.09968, 1.09972, 1.09961]

    def test_get_candles_by_time(self, adapter, session):
        session.request.return_value = make_response(candles_payload())

        history = adapter.get_candles_by_time("EUR_USD", "M1", "1476717360", "1476717540", True)

        assert _called_url(session) == (
            PRACTICE_HOST
            + "/instruments/EUR_USD/candles?&granularity=M1&from=1476717360&to=1476717540&smooth=true"
        )
        assert history.instrument == "EUR_USD"
        assert len(history.candles) == 3

    def test_get_bid_ask_candles(self, adapter, session):
        session.request.return_value = make_response(bid_ask_candles_payload())

        history = adapter.get_bid_ask_candles("EUR_USD", "2", "H1")

        assert _called_url(session) == PRACTICE_HOST + "/instruments/EUR_USD/candles?count=2&granularity=H1&price=BA"
        assert isinstance(history, InstrumentBidAskHistory)
        assert [c.bid.close for c in history.candles] == [1.0998, 1.1002]
        assert [c.ask.close for c in history.candles] == [1.1000, 1.1004]

    def test_get_bid_ask_candles_by_time(self, adapter, session):
        session.request.return_value = make_response(bid_ask_candles_payload())

        history = adapter.get_bid_ask_candles_by_time("EUR_USD", "H1", "1", "2", False)

        assert _called_url(session) == (
            PRACTICE_HOST + "/instruments/EUR_USD/candles?&granularity=H1&price=BA&from=1&to=2&smooth=false"
        )
        assert history.candles[1].complete is False

    def test_malformed_granularity_passed_through(self, adapter, session):
        """Parameters are not validated locally."""
        session.request.return_value = make_response(candles_payload())

        adapter.get_candles("not a symbol", "-1", "XX")

        assert _called_url(session).endswith("/instruments/not a symbol/candles?count=-1&granularity=XX")


class TestBooksAndPricing:
    """Test order book, position book and pricing operations."""

    def test_order_book(self, adapter, session):
        session.request.return_value = make_response(book_payload())

        book = adapter.order_book("EUR_USD")

        assert _called_url(session) == PRACTICE_HOST + "/instruments/EUR_USD/orderBook"
        assert isinstance(book, BrokerBook)
        assert book.bucket_width == "0.00050"
        assert len(book.buckets) == 2

    def test_position_book_wrapped_payload(self, adapter, session):
        session.request.return_value = make_response({"positionBook": book_payload()})

        book = adapter.position_book("EUR_USD")

        assert _called_url(session) == PRACTICE_HOST + "/instruments/EUR_USD/positionBook"
        assert book.instrument == "EUR_USD"
        assert book.buckets[1].short_count_percent == "0.2876"

    def test_get_instrument_price(self, adapter, session):
        session.request.return_value = make_response(pricing_payload())

        pricing = adapter.get_instrument_price("EUR_USD")

        assert _called_url(session) == PRACTICE_HOST + f"/accounts/{ACCOUNT_ID}/pricing?instruments=EUR_USD"
        assert isinstance(pricing, InstrumentPricing)
        price = pricing.prices[0]
        assert price.tradeable is True
        assert price.bids[0].price == 1.09965
        assert price.closeout_ask == 1.09984


class TestTrades:
    """Test trade query and modification operations."""

    def test_get_trades_for_instrument(self, adapter, session):
        session.request.return_value = make_response(
            {"lastTransactionID": "6400", "trades": [trade_payload("1"), trade_payload("2")]}
        )

        trades = adapter.get_trades_for_instrument("EUR_USD")

        assert _called_url(session) == PRACTICE_HOST + f"/accounts/{ACCOUNT_ID}/trades?instrument=EUR_USD"
        assert isinstance(trades, ReceivedTrades)
        assert [t.id for t in trades.trades] == ["1", "2"]
        assert trades.trades[0].stop_loss_order.price == "1.09000"

    def test_get_open_trades(self, adapter, session):
        session.request.return_value = make_response({"lastTransactionID": "6400", "trades": []})

        trades = adapter.get_open_trades()

        assert _called_url(session) == PRACTICE_HOST + f"/accounts/{ACCOUNT_ID}/openTrades"
        assert trades.last_transaction_id == "6400"
        assert trades.trades == []

    def test_get_trade(self, adapter, session):
        session.request.return_value = make_response({"lastTransactionID": "6400", "trade": trade_payload()})

        received = adapter.get_trade("1234")

        assert _called_url(session) == PRACTICE_HOST + f"/accounts/{ACCOUNT_ID}/trades/1234"
        assert isinstance(received, ReceivedTrade)
        assert received.trade.unrealized_pl == "-0.0120"
        assert received.trade.open_time == pd.Timestamp("2016-10-17T15:20:01.123456789Z")

    def test_reduce_trade_size_example(self, adapter, session):
        """Closing ticket 1234 with units ALL sends {"Units":"ALL"} as a PUT."""
        session.request.return_value = make_response(modified_trade_payload())

        modified = adapter.reduce_trade_size("1234", CloseTradePayload(units="ALL"))

        assert _called_method(session) == "PUT"
        assert _called_url(session) == PRACTICE_HOST + f"/accounts/{ACCOUNT_ID}/trades/1234"
        assert _called_body(session) == '{"Units":"ALL"}'
        assert isinstance(modified, ModifiedTrade)
        assert modified.order_fill_transaction.trades_closed[0].trade_id == "1234"
        assert modified.related_transaction_ids == ["6397", "6398", "6399"]

    def test_reduce_trade_size_defaults_to_all(self, adapter, session):
        session.request.return_value = make_response(modified_trade_payload())

        adapter.reduce_trade_size("1234", CloseTradePayload())

        assert json.loads(_called_body(session)) == {"Units": "ALL"}

    def test_update_trade_orders(self, adapter, session):
        session.request.return_value = make_response({"lastTransactionID": "6401"})
        payload = UpdateTradeOrdersPayload(
            stop_loss=OnFill(price="1.09000", time_in_force="GTC"),
            trailing_stop_loss=OnFill(distance="0.00500"),
        )

        modified = adapter.update_trade_orders("1234", payload)

        assert _called_method(session) == "PUT"
        assert _called_url(session) == PRACTICE_HOST + f"/accounts/{ACCOUNT_ID}/trades/1234/orders"
        assert json.loads(_called_body(session)) == {
            "stopLoss": {"price": "1.09000", "timeInForce": "GTC"},
            "trailingStopLoss": {"distance": "0.00500"},
        }
        assert modified.last_transaction_id == "6401"


class TestErrorHandling:
    """Test error propagation and the decode-failure policy."""

    def test_api_error_propagates(self, adapter, session):
        body = '{"errorMessage":"Invalid value specified for \'instrument\'"}'
        session.request.return_value = make_response(body, status_code=400)

        with pytest.raises(OandaAPIError) as excinfo:
            adapter.get_candles("BAD", "3", "M1")

        assert excinfo.value.body == body
        assert excinfo.value.route == "/instruments/BAD/candles?count=3&granularity=M1"

    def test_transport_error_propagates_unwrapped(self, adapter, session):
        session.request.side_effect = requests.ConnectionError("DNS failure")

        with pytest.raises(requests.ConnectionError):
            adapter.get_open_trades()

    def test_malformed_json_yields_zero_value(self, adapter, session):
        """Malformed bodies never raise: the caller receives an empty record."""
        session.request.return_value = make_response("{not json")

        history = adapter.get_candles("EUR_USD", "3", "M1")

        assert history == InstrumentHistory()
        assert history.extract_closed() == []

    def test_out_of_range_number_yields_zero_value(self, adapter, session):
        session.request.return_value = make_response('{"candles":[{"volume":1e400}]}')

        assert adapter.get_candles("EUR_USD", "3", "M1") == InstrumentHistory()

    def test_malformed_json_is_logged(self, adapter, session, caplog):
        session.request.return_value = make_response("{not json")

        with caplog.at_level("ERROR", logger="oanda_client.core.decoding"):
            adapter.get_trade("1234")

        assert "Failed to decode ReceivedTrade payload" in caplog.text

    def test_strict_decoding_raises(self, session):
        connection = OandaConnection(ACCOUNT_ID, "token", session=session, strict_decoding=True)
        strict_adapter = OandaAdapter(connection)
        session.request.return_value = make_response("{not json")

        with pytest.raises(DecodeError):
            strict_adapter.get_candles("EUR_USD", "3", "M1")
