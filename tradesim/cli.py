"""Command-line simulation: a price feed thread and a trader buying periodically."""

from __future__ import annotations

import argparse
import random
import sys
import threading
from typing import Optional, Sequence, TextIO

from tradesim.order_book import Order, OrderType, generate_order_id
from tradesim.trading import OrderManager, Trader, UnknownTraderError, get_instance

TRADER_ID = "TRADER1"
ORDER_QUANTITY = 100


def price_update_loop(
    manager: OrderManager,
    stop_event: threading.Event,
    interval: float = 1.0,
    rng: Optional[random.Random] = None,
) -> None:
    """Nudge the market every ``interval`` seconds until ``stop_event`` is set."""
    rng = rng or random.Random()
    while not stop_event.is_set():
        current = manager.market_data()["mid_price"]
        manager.update_market_data(current + rng.uniform(-1.0, 1.0))
        stop_event.wait(interval)


def trading_loop(
    manager: OrderManager,
    trader_id: str,
    iterations: Optional[int] = None,
    interval: float = 5.0,
    out: Optional[TextIO] = None,
) -> None:
    """Print market data and submit a market buy, ``iterations`` times or forever."""
    out = out or sys.stdout
    wait = threading.Event()
    count = 0
    while iterations is None or count < iterations:
        data = manager.market_data()
        print("\nCurrent Market Data:", file=out)
        print(f"Best Bid: {data['best_bid']:g}", file=out)
        print(f"Best Ask: {data['best_ask']:g}", file=out)

        order = Order(OrderType.BUY_MARKET, 0.0, ORDER_QUANTITY, generate_order_id())
        try:
            manager.submit_order(trader_id, order)
        except UnknownTraderError:
            print("Failed to submit order", file=out)
        else:
            print(f"Order submitted successfully: {order.order_id}", file=out)

        count += 1
        if iterations is None or count < iterations:
            wait.wait(interval)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a simulated trading session.")
    parser.add_argument("--iterations", type=int, default=None,
                        help="number of orders to place (default: run forever)")
    parser.add_argument("--interval", type=float, default=5.0,
                        help="seconds between orders")
    parser.add_argument("--price-interval", type=float, default=1.0,
                        help="seconds between price updates")
    parser.add_argument("--capital", type=float, default=1_000_000.0,
                        help="trader's starting capital")
    args = parser.parse_args(argv)

    manager = get_instance()
    manager.register_trader(Trader(TRADER_ID, args.capital, manager))

    stop = threading.Event()
    feed = threading.Thread(
        target=price_update_loop,
        args=(manager, stop, args.price_interval),
        daemon=True,
    )
    feed.start()
    try:
        trading_loop(manager, TRADER_ID, args.iterations, args.interval)
    except KeyboardInterrupt:
        pass
    finally:
        stop.set()
        feed.join(timeout=5.0)
    return 0


if __name__ == "__main__":
    sys.exit(main())