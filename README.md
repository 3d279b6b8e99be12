# tradesim

tradesim is a small trading simulator. It keeps a limit order book with five
levels of liquidity on each side of a mid price. Buy and sell limit orders and
market orders are matched against that book. Each trader has capital, a
position, and realized and unrealized profit and loss.

## Installing

```
pip install .
```

To install with the test requirements as well:

```
pip install ".[test]"
```

## Running the simulation

```
tradesim
```

The command uses the process-wide `OrderManager` and registers one trader,
`TRADER1`, with it. It also starts a background thread that moves the mid
price. It then runs a loop. Each pass prints the best bid and best ask and
submits a 100-lot buy market order for `TRADER1`. After submitting, it prints
the order id, or `Failed to submit order` if the submission was rejected.
Press Ctrl+C to stop.

Options:

- `--iterations N`: the number of orders to place. By default it runs forever.
- `--interval SECONDS`: the wait between orders. Default 5.
- `--price-interval SECONDS`: the wait between price updates. Default 1.
- `--capital AMOUNT`: the trader's starting capital. Default 1,000,000.

## Using the library

```python
import random

from tradesim.order_book import Order, OrderBook, OrderType
from tradesim.trading import OrderManager, Trader

book = OrderBook(100.0, random.Random(7))
print(book.market_data())  # best_ask 99.0... see below
# {'best_ask': 101.0, 'best_bid': 99.0, 'mid_price': 100.0}

execution = book.process_order(
    Order(order_id="A1", type=OrderType.BUY_MARKET, price=0.0, quantity=150)
)
print(execution.status, execution.filled_quantity, execution.avg_price)
# FILLED 150, average of 100 @ 101 and 50 @ 102

manager = OrderManager(OrderBook(100.0, random.Random(7)))
trader = Trader("alice", 10_000.0, manager)
manager.register_trader(trader)

trader.place_buy_limit_order(102.0, 50)  # fills 50 at 101
print(trader.position, trader.available_capital, trader.unrealized_pnl(105.0))
# 50 4950.0 200.0
```

### `tradesim.order_book`

- `OrderBook(mid_price=100.0, rng=None)` builds the book at the given mid
  price. Bids sit at mid−1 … mid−5 and asks at mid+1 … mid+5. The level one
  step from the mid holds 100, the next 200, and so on up to 500.
- `initialize(mid_price)` resets the book to that layout.
- `refresh_liquidity(mid_price)` rebuilds the book with randomly spaced levels
  and random volumes between 50 and 150.
- `update_price_artificially()` moves the mid price by a random step of up to
  ±1 and rebuilds the fixed layout around it.
- `best_bid`, `best_ask` and `mid_price` are properties. A side with no orders
  reports 0.0. `market_data()` returns all three in a dict.
- `process_order(order)` matches an `Order` and returns an `OrderExecution`.
  The execution has `is_executed`, `is_partially_filled`, `avg_price`,
  `filled_quantity`, `remaining_quantity` and `status` (an `ExecutionStatus`:
  `FILLED`, `PARTIALLY_FILLED` or `NOT_FILLED`).
- `generate_order_id(rng=None)` returns an id made of `ORD`, the current
  epoch time in milliseconds and four random digits.

Matching rules:

- A buy limit order fills against asks priced at or below its limit, lowest
  price first.
- A sell limit order fills against bids priced at or above its limit, highest
  price first.
- A market order fills against whatever is left on the opposite side.
- Within a price level, resting orders fill in the order they arrived.

### `tradesim.trading`

- `OrderManager(order_book=None)` routes orders to a book. With no book given,
  it creates one at 100.0.
  - `register_trader(trader)` and `unregister_trader(trader_id)` add and remove
    traders.
  - `submit_order(trader_id, order)` returns the `OrderExecution` and credits
    any fill to the trader as a `Trade`. An unregistered trader id raises
    `UnknownTraderError`.
  - `update_market_data(price)` calls `update_price_artificially()` on the
    book. The `price` argument is not used; the book picks its own random step.
  - `market_data()` returns the book's market data.
- `get_instance()` returns a process-wide `OrderManager` and creates it on
  first use.
- `Trader(name, initial_capital, manager=None)` sends orders through the
  given manager, or through `get_instance()` if none is given.
  - Order methods: `place_buy_limit_order(price, quantity)`,
    `place_sell_limit_order(price, quantity)`,
    `place_buy_market_order(quantity)` and
    `place_sell_market_order(quantity)`.
  - Limit orders raise `InvalidOrderError` in three cases: the price is not
    positive, the quantity is not positive, or price × quantity exceeds the
    available capital.
  - Market orders raise `InvalidOrderError` only when the quantity is not
    positive.
  - `position`, `available_capital`, `realized_pnl` and `trade_history` are
    properties.
  - `unrealized_pnl(current_price)` marks the open position against the
    average price of all buys.
  - `total_pnl(current_price)` adds realized and unrealized P&L.
  - `update_capital(amount)` adjusts the available capital.
  - `update_position(trade)` applies a fill. On a sell, P&L is realized
    against the trader's earlier buys in history order.

## What it does not do

- A trader's orders never rest on the book. Any quantity that does not fill
  right away is dropped.
- Orders cannot be cancelled.
- There is no storage. Everything lives in memory for the life of the process.
- There is no network interface or server.

## Tests

```
pytest
```