"""A simulated limit order book with synthetic liquidity around a mid price."""

from __future__ import annotations

import random
import time
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Dict, Iterable, Optional, Tuple

LEVELS = 5

_default_rng = random.Random()


class OrderType(str, Enum):
    """The kinds of order the book accepts."""

    BUY_LIMIT = "buy_limit"
    SELL_LIMIT = "sell_limit"
    BUY_MARKET = "buy_market"
    SELL_MARKET = "sell_market"

    @property
    def is_buy(self) -> bool:
        """True for orders that take liquidity from the ask side."""
        return self in (OrderType.BUY_LIMIT, OrderType.BUY_MARKET)

    @property
    def is_market(self) -> bool:
        """True for orders that carry no price limit."""
        return self in (OrderType.BUY_MARKET, OrderType.SELL_MARKET)


class ExecutionStatus(str, Enum):
    """Outcome of matching an order against the book."""

    FILLED = "FILLED"
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    NOT_FILLED = "NOT_FILLED"


@dataclass
class Order:
    """An order; ``type`` may be given as an OrderType or its string value."""

    type: OrderType
    price: float = 0.0
    quantity: int = 0
    order_id: str = ""

    def __post_init__(self) -> None:
        self.type = OrderType(self.type)


@dataclass
class OrderExecution:
    """The result of processing one order."""

    is_executed: bool = False
    is_partially_filled: bool = False
    avg_price: float = 0.0
    filled_quantity: int = 0
    remaining_quantity: int = 0
    status: ExecutionStatus = ExecutionStatus.NOT_FILLED


def generate_order_id(rng: Optional[random.Random] = None) -> str:
    """Return an id made of "ORD", the epoch time in ms and four random digits."""
    rng = rng or _default_rng
    timestamp = time.time_ns() // 1_000_000
    return f"ORD{timestamp}{rng.randint(1000, 9999)}"


_Book = Dict[float, Deque[Order]]


class OrderBook:
    """Bid and ask books keyed by price, with resting orders in time priority."""

    def __init__(self, mid_price: float = 100.0, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or _default_rng
        self._mid_price = mid_price
        self._bids: _Book = {}
        self._asks: _Book = {}
        self._best_bid = 0.0
        self._best_ask = 0.0
        self.initialize(mid_price)

    @property
    def best_bid(self) -> float:
        """Highest bid price, or 0.0 if there are no bids."""
        return self._best_bid

    @property
    def best_ask(self) -> float:
        """Lowest ask price, or 0.0 if there are no asks."""
        return self._best_ask

    @property
    def mid_price(self) -> float:
        return self._mid_price

    def market_data(self) -> Dict[str, float]:
        """Snapshot of best bid, best ask and mid price."""
        return {
            "best_ask": self._best_ask,
            "best_bid": self._best_bid,
            "mid_price": self._mid_price,
        }

    def initialize(self, mid_price: float) -> None:
        """Reset the book to five evenly spaced levels of 100, 200, ... 500 each side."""
        self._mid_price = mid_price
        self._populate(self._fixed_levels())

    def refresh_liquidity(self, mid_price: float) -> None:
        """Rebuild the book with randomly spaced levels and random volumes."""
        levels = []
        for i in range(1, LEVELS + 1):
            bid_offset = i * self._rng.uniform(0.5, 1.5)
            ask_offset = i * self._rng.uniform(0.5, 1.5)
            bid_volume = self._rng.randint(50, 150)
            ask_volume = self._rng.randint(50, 150)
            levels.append(
                ((mid_price - bid_offset, bid_volume), (mid_price + ask_offset, ask_volume))
            )
        self._mid_price = mid_price
        self._populate(levels)

    def update_price_artificially(self) -> None:
        """Move the mid price randomly by up to one unit and rebuild the book."""
        self._mid_price += self._rng.uniform(-1.0, 1.0)
        self._populate(self._fixed_levels())

    def process_order(self, order: Order) -> OrderExecution:
        """Match an order against the opposite side of the book."""
        order_type = order.type
        if order_type.is_buy:
            book, pick = self._asks, min

            def crosses(level: float) -> bool:
                return order_type.is_market or order.price >= level

        else:
            book, pick = self._bids, max

            def crosses(level: float) -> bool:
                return order_type.is_market or order.price <= level

        remaining = order.quantity
        filled = 0
        notional = 0.0
        while remaining > 0 and book:
            level = pick(book)
            if not crosses(level):
                break
            resting = book[level]
            while resting and remaining > 0:
                head = resting[0]
                fill = min(remaining, head.quantity)
                remaining -= fill
                filled += fill
                notional += fill * level
                head.quantity -= fill
                if head.quantity == 0:
                    resting.popleft()
            if not resting:
                del book[level]

        self._update_best_prices()

        execution = OrderExecution()
        if filled > 0:
            execution.is_executed = True
            execution.avg_price = notional / filled
            execution.filled_quantity = filled
            execution.remaining_quantity = remaining
            execution.is_partially_filled = remaining > 0
            execution.status = (
                ExecutionStatus.PARTIALLY_FILLED if remaining > 0 else ExecutionStatus.FILLED
            )
        return execution

    def _fixed_levels(self) -> list:
        mid = self._mid_price
        return [
            ((mid - i, 100 * i), (mid + i, 100 * i)) for i in range(1, LEVELS + 1)
        ]

    def _populate(
        self, levels: Iterable[Tuple[Tuple[float, int], Tuple[float, int]]]
    ) -> None:
        self._bids = {}
        self._asks = {}
        for (bid_price, bid_qty), (ask_price, ask_qty) in levels:
            self._bids.setdefault(bid_price, deque()).append(
                Order(OrderType.BUY_LIMIT, bid_price, bid_qty)
            )
            self._asks.setdefault(ask_price, deque()).append(
                Order(OrderType.SELL_LIMIT, ask_price, ask_qty)
            )
        self._update_best_prices()

    def _update_best_prices(self) -> None:
        self._best_bid = max(self._bids) if self._bids else 0.0
        self._best_ask = min(self._asks) if self._asks else 0.0