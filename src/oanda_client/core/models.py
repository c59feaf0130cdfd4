from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from oanda_client.core.decoding import (
    parse_time,
    sub_dict,
    sub_list,
    to_bool,
    to_float,
    to_int,
    to_str,
)

# Market data snapshots from the /instruments and /pricing endpoints.
# Every field has a zero default so that ``Model()`` is the empty response.


@dataclass(frozen=True)
class Candle:
    open: float = 0.0
    close: float = 0.0
    low: float = 0.0
    high: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> Candle:
        return cls(
            open=to_float(data.get("o")),
            close=to_float(data.get("c")),
            low=to_float(data.get("l")),
            high=to_float(data.get("h")),
        )


@dataclass(frozen=True)
class Candles:
    complete: bool = False
    volume: int = 0
    time: Optional[pd.Timestamp] = None  # bucket open time, UTC
    mid: Candle = field(default_factory=Candle)

    @classmethod
    def from_dict(cls, data: dict) -> Candles:
        return cls(
            complete=to_bool(data.get("complete")),
            volume=to_int(data.get("volume")),
            time=parse_time(data.get("time")),
            mid=Candle.from_dict(sub_dict(data, "mid")),
        )


@dataclass(frozen=True)
class InstrumentHistory:
    instrument: str = ""
    granularity: str = ""
    candles: List[Candles] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> InstrumentHistory:
        return cls(
            instrument=to_str(data.get("instrument")),
            granularity=to_str(data.get("granularity")),
            candles=[Candles.from_dict(c) for c in sub_list(data, "candles")],
        )

    # Series accessors: one value per candle, response order, incomplete
    # candles included.

    def extract_closed(self) -> List[float]:
        return [candle.mid.close for candle in self.candles]

    def extract_open(self) -> List[float]:
        return [candle.mid.open for candle in self.candles]

    def extract_high(self) -> List[float]:
        return [candle.mid.high for candle in self.candles]

    def extract_low(self) -> List[float]:
        return [candle.mid.low for candle in self.candles]

    def extract_vol(self) -> List[int]:
        return [candle.volume for candle in self.candles]


@dataclass(frozen=True)
class BidAskCandles:
    complete: bool = False
    volume: int = 0
    time: Optional[pd.Timestamp] = None
    bid: Candle = field(default_factory=Candle)
    ask: Candle = field(default_factory=Candle)

    @classmethod
    def from_dict(cls, data: dict) -> BidAskCandles:
        return cls(
            complete=to_bool(data.get("complete")),
            volume=to_int(data.get("volume")),
            time=parse_time(data.get("time")),
            bid=Candle.from_dict(sub_dict(data, "bid")),
            ask=Candle.from_dict(sub_dict(data, "ask")),
        )


@dataclass(frozen=True)
class InstrumentBidAskHistory:
    instrument: str = ""
    granularity: str = ""
    candles: List[BidAskCandles] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> InstrumentBidAskHistory:
        return cls(
            instrument=to_str(data.get("instrument")),
            granularity=to_str(data.get("granularity")),
            candles=[BidAskCandles.from_dict(c) for c in sub_list(data, "candles")],
        )


@dataclass(frozen=True)
class Bucket:
    price: str = ""
    long_count_percent: str = ""
    short_count_percent: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Bucket:
        return cls(
            price=to_str(data.get("price")),
            long_count_percent=to_str(data.get("longCountPercent")),
            short_count_percent=to_str(data.get("shortCountPercent")),
        )


@dataclass(frozen=True)
class BrokerBook:
    """Order book or position book snapshot for one instrument."""

    instrument: str = ""
    time: Optional[pd.Timestamp] = None
    price: str = ""
    bucket_width: str = ""
    buckets: List[Bucket] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> BrokerBook:
        # v20 wraps the book in {"orderBook": ...} / {"positionBook": ...}
        for key in ("orderBook", "positionBook"):
            if key in data:
                data = sub_dict(data, key)
                break
        return cls(
            instrument=to_str(data.get("instrument")),
            time=parse_time(data.get("time")),
            price=to_str(data.get("price")),
            bucket_width=to_str(data.get("bucketWidth")),
            buckets=[Bucket.from_dict(b) for b in sub_list(data, "buckets")],
        )


@dataclass(frozen=True)
class PriceBucket:
    price: float = 0.0
    liquidity: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> PriceBucket:
        return cls(
            price=to_float(data.get("price")),
            liquidity=to_int(data.get("liquidity")),
        )


@dataclass(frozen=True)
class UnitsAvailableDetails:
    long: str = ""
    short: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> UnitsAvailableDetails:
        return cls(long=to_str(data.get("long")), short=to_str(data.get("short")))


@dataclass(frozen=True)
class UnitsAvailable:
    default: UnitsAvailableDetails = field(default_factory=UnitsAvailableDetails)
    open_only: UnitsAvailableDetails = field(default_factory=UnitsAvailableDetails)
    reduce_first: UnitsAvailableDetails = field(default_factory=UnitsAvailableDetails)
    reduce_only: UnitsAvailableDetails = field(default_factory=UnitsAvailableDetails)

    @classmethod
    def from_dict(cls, data: dict) -> UnitsAvailable:
        return cls(
            default=UnitsAvailableDetails.from_dict(sub_dict(data, "default")),
            open_only=UnitsAvailableDetails.from_dict(sub_dict(data, "openOnly")),
            reduce_first=UnitsAvailableDetails.from_dict(sub_dict(data, "reduceFirst")),
            reduce_only=UnitsAvailableDetails.from_dict(sub_dict(data, "reduceOnly")),
        )


@dataclass(frozen=True)
class QuoteHomeConversionFactors:
    positive_units: str = ""
    negative_units: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> QuoteHomeConversionFactors:
        return cls(
            positive_units=to_str(data.get("positiveUnits")),
            negative_units=to_str(data.get("negativeUnits")),
        )


@dataclass(frozen=True)
class Price:
    type: str = ""
    time: Optional[pd.Timestamp] = None
    bids: List[PriceBucket] = field(default_factory=list)
    asks: List[PriceBucket] = field(default_factory=list)
    closeout_bid: float = 0.0
    closeout_ask: float = 0.0
    status: str = ""
    tradeable: bool = False
    units_available: UnitsAvailable = field(default_factory=UnitsAvailable)
    quote_home_conversion_factors: QuoteHomeConversionFactors = field(
        default_factory=QuoteHomeConversionFactors
    )
    instrument: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Price:
        return cls(
            type=to_str(data.get("type")),
            time=parse_time(data.get("time")),
            bids=[PriceBucket.from_dict(b) for b in sub_list(data, "bids")],
            asks=[PriceBucket.from_dict(a) for a in sub_list(data, "asks")],
            closeout_bid=to_float(data.get("closeoutBid")),
            closeout_ask=to_float(data.get("closeoutAsk")),
            status=to_str(data.get("status")),
            tradeable=to_bool(data.get("tradeable")),
            units_available=UnitsAvailable.from_dict(sub_dict(data, "unitsAvailable")),
            quote_home_conversion_factors=QuoteHomeConversionFactors.from_dict(
                sub_dict(data, "quoteHomeConversionFactors")
            ),
            instrument=to_str(data.get("instrument")),
        )


@dataclass(frozen=True)
class InstrumentPricing:
    time: Optional[pd.Timestamp] = None
    prices: List[Price] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> InstrumentPricing:
        return cls(
            time=parse_time(data.get("time")),
            prices=[Price.from_dict(p) for p in sub_list(data, "prices")],
        )
