"""Traders, their positions and P&L, and the manager routing their orders to a book."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from tradesim.order_book import Order, OrderBook, OrderExecution, OrderType

BUY = "buy"
SELL = "sell"


class InvalidOrderError(ValueError):
    """Raised when an order fails a trader's validation."""


class UnknownTraderError(LookupError):
    """Raised when an order is submitted for a trader that is not registered."""


@dataclass(frozen=True)
class Trade:
    """A fill credited to a trader."""

    side: str
    price: float
    quantity: int
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if self.side not in (BUY, SELL):
            raise ValueError(f"trade side must be {BUY!r} or {SELL!r}, not {self.side!r}")


class OrderManager:
    """Routes traders' orders to an order book and credits the fills back to them."""

    def __init__(self, order_book: Optional[OrderBook] = None) -> None:
        if order_book is None:
            order_book = OrderBook()
            order_book.initialize(100.0)
        self._order_book = order_book
        self._traders: Dict[str, "Trader"] = {}

    @property
    def order_book(self) -> OrderBook:
        return self._order_book

    def register_trader(self, trader: "Trader") -> None:
        """Register a trader under its name, replacing any trader of that name."""
        self._traders[trader.name] = trader

    def unregister_trader(self, trader_id: str) -> None:
        """Forget a trader; unknown ids are ignored."""
        self._traders.pop(trader_id, None)

    def submit_order(self, trader_id: str, order: Order) -> OrderExecution:
        """Match an order for a registered trader and update the trader's position."""
        try:
            trader = self._traders[trader_id]
        except KeyError:
            raise UnknownTraderError(f"trader {trader_id!r} is not registered") from None

        execution = self._order_book.process_order(order)
        if execution.is_executed:
            trader.update_position(
                Trade(
                    side=BUY if order.type.is_buy else SELL,
                    price=execution.avg_price,
                    quantity=execution.filled_quantity,
                )
            )
        return execution

    def update_market_data(self, price: float) -> None:
        """Move the market; the book picks its own random step, ``price`` is advisory."""
        self._order_book.update_price_artificially()

    def market_data(self) -> Dict[str, float]:
        return self._order_book.market_data()


_instance: Optional[OrderManager] = None


def get_instance() -> OrderManager:
    """Return the process-wide order manager, creating it on first use."""
    global _instance
    if _instance is None:
        _instance = OrderManager()
    return _instance


class Trader:
    """A trader with capital, a net position and a history of fills."""

    def __init__(
        self,
        name: str,
        initial_capital: float,
        manager: Optional[OrderManager] = None,
    ) -> None:
        self._name = name
        self._capital = float(initial_capital)
        self._position = 0
        self._realized_pnl = 0.0
        self._history: List[Trade] = []
        self._manager = manager if manager is not None else get_instance()

    @property
    def name(self) -> str:
        return self._name

    @property
    def manager(self) -> OrderManager:
        return self._manager

    @property
    def position(self) -> int:
        return self._position

    @property
    def realized_pnl(self) -> float:
        return self._realized_pnl

    @property
    def available_capital(self) -> float:
        return self._capital

    @property
    def trade_history(self) -> Tuple[Trade, ...]:
        return tuple(self._history)

    def place_buy_limit_order(self, price: float, quantity: int) -> OrderExecution:
        self._validate(price, quantity)
        return self._submit(OrderType.BUY_LIMIT, price, quantity)

    def place_sell_limit_order(self, price: float, quantity: int) -> OrderExecution:
        self._validate(price, quantity)
        return self._submit(OrderType.SELL_LIMIT, price, quantity)

    def place_buy_market_order(self, quantity: int) -> OrderExecution:
        self._validate_quantity(quantity)
        return self._submit(OrderType.BUY_MARKET, 0.0, quantity)

    def place_sell_market_order(self, quantity: int) -> OrderExecution:
        self._validate_quantity(quantity)
        return self._submit(OrderType.SELL_MARKET, 0.0, quantity)

    def update_position(self, trade: Trade) -> None:
        """Apply a fill to position and capital, realising P&L on sells."""
        notional = trade.price * trade.quantity
        if trade.side == BUY:
            self._position += trade.quantity
            self._capital -= notional
        else:
            self._position -= trade.quantity
            self._capital += notional
            remaining = trade.quantity
            for past in self._history:
                if remaining <= 0:
                    break
                if past.side == BUY:
                    matched = min(remaining, past.quantity)
                    self._realized_pnl += matched * (trade.price - past.price)
                    remaining -= matched
        self._history.append(trade)

    def unrealized_pnl(self, current_price: float) -> float:
        """Mark the open position against the average price of all buys."""
        if self._position == 0:
            return 0.0
        buys = [t for t in self._history if t.side == BUY]
        bought = sum(t.quantity for t in buys)
        if bought == 0:
            return 0.0
        avg_entry = sum(t.price * t.quantity for t in buys) / bought
        return self._position * (current_price - avg_entry)

    def total_pnl(self, current_price: float) -> float:
        return self.realized_pnl + self.unrealized_pnl(current_price)

    def update_capital(self, amount: float) -> None:
        self._capital += amount

    def _submit(self, order_type: OrderType, price: float, quantity: int) -> OrderExecution:
        order = Order(order_type, price, quantity, self._new_order_id())
        return self._manager.submit_order(self._name, order)

    @staticmethod
    def _validate_quantity(quantity: int) -> None:
        if quantity <= 0:
            raise InvalidOrderError(f"quantity must be positive, got {quantity}")

    def _validate(self, price: float, quantity: int) -> None:
        if price <= 0:
            raise InvalidOrderError(f"price must be positive, got {price}")
        self._validate_quantity(quantity)
        if price * quantity > self._capital:
            raise InvalidOrderError(
                f"order value {price * quantity} exceeds available capital {self._capital}"
            )

    def _new_order_id(self) -> str:
        return f"{self._name}_{secrets.token_hex(4).upper()}"