"""Shared fixtures: canned OANDA payloads and a connection over a mocked session."""

import json
from unittest.mock import Mock

import pytest
import requests

from oanda_client.exchanges.oanda import OandaAdapter
from oanda_client.exchanges.oanda_connection import OandaConnection

ACCOUNT_ID = "101-004-1234567-001"
TOKEN = "test-token"


def make_response(payload, status_code=200):
    """Mock ``requests.Response`` whose text is *payload* (JSON-encoded unless a str)."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    response = Mock(spec=requests.Response)
    response.text = text
    response.status_code = status_code
    return response


def candles_payload():
    return {
        "instrument": "EUR_USD",
        "granularity": "M1",
        "candles": [
            {
                "complete": True,
                "volume": 12,
                "time": "2016-10-17T15:16:00.000000000Z",
                "mid": {"o": "1.09966", "h": "1.09970", "l": "1.09960", "c": "1.09968"},
            },
            {
                "complete": True,
                "volume": 7,
                "time": "2016-10-17T15:17:00.000000000Z",
                "mid": {"o": "1.09968", "h": "1.09975", "l": "1.09965", "c": "1.09972"},
            },
            {
                "complete": False,
                "volume": 3,
                "time": "2016-10-17T15:18:00.000000000Z",
                "mid": {"o": "1.09972", "h": "1.09973", "l": "1.09958", "c": "1.09961"},
            },
        ],
    }


def bid_ask_candles_payload():
    return {
        "instrument": "EUR_USD",
        "granularity": "H1",
        "candles": [
            {
                "complete": True,
                "volume": 100,
                "time": "2016-10-17T15:00:00.000000000Z",
                "bid": {"o": "1.0995", "h": "1.1001", "l": "1.0990", "c": "1.0998"},
                "ask": {"o": "1.0997", "h": "1.1003", "l": "1.0992", "c": "1.1000"},
            },
            {
                "complete": False,
                "volume": 40,
                "time": "2016-10-17T16:00:00.000000000Z",
                "bid": {"o": "1.0998", "h": "1.1004", "l": "1.0994", "c": "1.1002"},
                "ask": {"o": "1.1000", "h": "1.1006", "l": "1.0996", "c": "1.1004"},
            },
        ],
    }


def book_payload():
    return {
        "instrument": "EUR_USD",
        "time": "2016-10-17T15:00:00Z",
        "price": "1.09970",
        "bucketWidth": "0.00050",
        "buckets": [
            {"price": "1.09900", "longCountPercent": "0.2123", "shortCountPercent": "0.1567"},
            {"price": "1.09950", "longCountPercent": "0.3102", "shortCountPercent": "0.2876"},
        ],
    }


def pricing_payload():
    return {
        "time": "2016-10-17T15:16:40.000000000Z",
        "prices": [
            {
                "type": "PRICE",
                "instrument": "EUR_USD",
                "time": "2016-10-17T15:16:39.915396210Z",
                "bids": [
                    {"price": "1.09965", "liquidity": 10000000},
                    {"price": "1.09963", "liquidity": 10000000},
                ],
                "asks": [{"price": "1.09980", "liquidity": 10000000}],
                "closeoutBid": "1.09961",
                "closeoutAsk": "1.09984",
                "status": "tradeable",
                "tradeable": True,
                "unitsAvailable": {
                    "default": {"long": "2226790", "short": "2226790"},
                    "openOnly": {"long": "2226790", "short": "2226790"},
                    "reduceFirst": {"long": "2226790", "short": "2226790"},
                    "reduceOnly": {"long": "0", "short": "0"},
                },
                "quoteHomeConversionFactors": {
                    "positiveUnits": "1.00000000",
                    "negativeUnits": "1.00000000",
                },
            }
        ],
    }


def trade_payload(trade_id="1234"):
    return {
        "id": trade_id,
        "instrument": "EUR_USD",
        "price": "1.09968",
        "openTime": "2016-10-17T15:20:01.123456789Z",
        "state": "OPEN",
        "initialUnits": "100",
        "currentUnits": "100",
        "realizedPL": "0.0000",
        "unrealizedPL": "-0.0120",
        "financing": "0.0000",
        "stopLossOrder": {"price": "1.09000"},
        "takeProfitOrder": {"price": "1.11000"},
        "trailingStopLossOrder": {"price": "1.09500"},
    }


def modified_trade_payload():
    return {
        "orderCreateTransaction": {
            "type": "MARKET_ORDER",
            "instrument": "EUR_USD",
            "units": "-100",
            "timeInForce": "FOK",
            "positionFill": "REDUCE_ONLY",
            "reason": "TRADE_CLOSE",
            "tradeClose": {"units": "ALL", "tradeID": "1234"},
            "id": "6397",
            "userID": 1435156,
            "accountID": ACCOUNT_ID,
            "batchID": "6397",
            "requestID": "88209024839409034",
            "time": "2016-10-17T15:30:00.000000000Z",
        },
        "orderFillTransaction": {
            "type": "ORDER_FILL",
            "instrument": "EUR_USD",
            "units": "-100",
            "price": "1.09977",
            "fullPrice": {
                "timestamp": "2016-10-17T15:29:59.000000000Z",
                "bids": [{"price": "1.09977", "liquidity": 10000000}],
                "asks": [{"price": "1.09990", "liquidity": 10000000}],
                "closeoutBid": "1.09973",
                "closeoutAsk": "1.09994",
            },
            "pl": "0.0090",
            "financing": "0.0000",
            "commission": "0.0000",
            "accountBalance": "100000.0090",
            "timeInForce": "FOK",
            "positionFill": "REDUCE_ONLY",
            "reason": "MARKET_ORDER_TRADE_CLOSE",
            "tradesClosed": [
                {"tradeID": "1234", "units": "-100", "realizedPL": "0.0090", "financing": "0.0000"}
            ],
            "id": "6398",
            "userID": 1435156,
            "accountID": ACCOUNT_ID,
            "batchID": "6397",
            "requestID": "88209024839409034",
            "orderID": "6397",
            "time": "2016-10-17T15:30:00.000000000Z",
        },
        "orderCancelTransaction": {
            "type": "ORDER_CANCEL",
            "orderID": "6395",
            "reason": "LINKED_TRADE_CLOSED",
            "id": "6399",
            "userID": 1435156,
            "accountID": ACCOUNT_ID,
            "batchID": "6397",
            "requestID": "88209024839409034",
            "time": "2016-10-17T15:30:00.000000000Z",
        },
        "relatedTransactionIDs": ["6397", "6398", "6399"],
        "lastTransactionID": "6399",
    }


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def connection(session):
    return OandaConnection(ACCOUNT_ID, TOKEN, session=session)


@pytest.fixture
def adapter(connection):
    return OandaAdapter(connection)
