"""
Path builders for the OANDA v20 REST endpoints.

    GET /instruments/EUR_USD/candles?count=3&granularity=M1
    GET /accounts/<account_id>/pricing?instruments=EUR_USD

Every builder is plain string concatenation of its arguments in a fixed
order. Nothing is validated or escaped: instrument symbols, granularity
codes and timestamps are passed through verbatim and the remote service is
the only validator.
"""


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


# ---------------------------------------------------------------------------
# Instruments
# ---------------------------------------------------------------------------

def candles_path(instrument: str, count: str, granularity: str) -> str:
    return "/instruments/" + instrument + "/candles?count=" + count + "&granularity=" + granularity


def candles_by_time_path(instrument: str, granularity: str, from_: str, to: str, smooth: bool) -> str:
    return (
        "/instruments/" + instrument + "/candles?" + "&granularity=" + granularity
        + "&from=" + from_ + "&to=" + to + "&smooth=" + _bool_param(smooth)
    )


def bid_ask_candles_path(instrument: str, count: str, granularity: str) -> str:
    return candles_path(instrument, count, granularity) + "&price=BA"


def bid_ask_candles_by_time_path(instrument: str, granularity: str, from_: str, to: str, smooth: bool) -> str:
    return (
        "/instruments/" + instrument + "/candles?" + "&granularity=" + granularity + "&price=BA"
        + "&from=" + from_ + "&to=" + to + "&smooth=" + _bool_param(smooth)
    )


def order_book_path(instrument: str) -> str:
    return "/instruments/" + instrument + "/orderBook"


def position_book_path(instrument: str) -> str:
    return "/instruments/" + instrument + "/positionBook"


def pricing_path(account_id: str, instrument: str) -> str:
    return "/accounts/" + account_id + "/pricing?instruments=" + instrument


# ---------------------------------------------------------------------------
# Trades
# ---------------------------------------------------------------------------

def trades_for_instrument_path(account_id: str, instrument: str) -> str:
    return "/accounts/" + account_id + "/trades" + "?instrument=" + instrument


def open_trades_path(account_id: str) -> str:
    return "/accounts/" + account_id + "/openTrades"


def trade_path(account_id: str, ticket: str) -> str:
    return "/accounts/" + account_id + "/trades/" + ticket


def trade_orders_path(account_id: str, trade_id: str) -> str:
    return trade_path(account_id, trade_id) + "/orders"
