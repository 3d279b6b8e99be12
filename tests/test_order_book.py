import random
import re

import pytest

from tradesim.order_book import (
    ExecutionStatus,
    Order,
    OrderBook,
    OrderExecution,
    OrderType,
    generate_order_id,
)


@pytest.fixture
def book():
    return OrderBook(100.0, random.Random(7))


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("buy_limit", True),
        ("buy_market", True),
        ("sell_limit", False),
        ("sell_market", False),
    ],
)
def test_order_type_is_buy(type_name, expected):
    order = Order(type_name, 1.0, 1)
    assert order.type.is_buy is expected


def test_order_accepts_string_type():
    order = Order("sell_market", 0.0, 10)
    assert order.type is OrderType.SELL_MARKET


def test_order_rejects_unknown_type():
    with pytest.raises(ValueError):
        Order("hold", 1.0, 1)


def test_execution_defaults():
    execution = OrderExecution()
    assert execution.status is ExecutionStatus.NOT_FILLED
    assert execution.filled_quantity == 0
    assert execution.avg_price == 0.0
    assert not execution.is_executed


def test_generate_order_id_format():
    order_id = generate_order_id(random.Random(1))
    assert re.fullmatch(r"ORD\d+", order_id)
    assert 1000 <= int(order_id[-4:]) <= 9999


def test_generate_order_id_seeded_suffix_repeats():
    first = generate_order_id(random.Random(42))
    second = generate_order_id(random.Random(42))
    assert first[-4:] == second[-4:]


def test_initial_market_data(book):
    data = book.market_data()
    assert data["mid_price"] == 100.0
    assert data["best_bid"] == 99.0
    assert data["best_ask"] == 101.0
    assert book.best_bid == 99.0
    assert book.best_ask == 101.0


def test_buy_market_fills_at_best_ask(book):
    execution = book.process_order(Order(OrderType.BUY_MARKET, 0.0, 100))
    assert execution.status is ExecutionStatus.FILLED
    assert execution.avg_price == 101.0
    assert execution.filled_quantity == 100
    assert execution.remaining_quantity == 0
    assert book.best_ask > 101.0


def test_buy_market_walks_levels(book):
    execution = book.process_order(Order(OrderType.BUY_MARKET, 0.0, 350))
    assert execution.status is ExecutionStatus.FILLED
    assert 101.0 < execution.avg_price < 103.0
    assert execution.filled_quantity == 350


def test_buy_market_exhausts_book(book):
    execution = book.process_order(Order(OrderType.BUY_MARKET, 0.0, 10_000))
    assert execution.status is ExecutionStatus.PARTIALLY_FILLED
    assert execution.is_partially_filled
    assert execution.filled_quantity + execution.remaining_quantity == 10_000
    assert book.best_ask == 0.0
    again = book.process_order(Order(OrderType.BUY_MARKET, 0.0, 1))
    assert again.status is ExecutionStatus.NOT_FILLED
    assert not again.is_executed


def test_buy_limit_below_ask_not_filled(book):
    execution = book.process_order(Order(OrderType.BUY_LIMIT, 100.5, 10))
    assert execution.status is ExecutionStatus.NOT_FILLED
    assert book.best_ask == 101.0


def test_buy_limit_stops_at_limit_price(book):
    execution = book.process_order(Order(OrderType.BUY_LIMIT, 102.0, 1000))
    assert execution.status is ExecutionStatus.PARTIALLY_FILLED
    assert execution.filled_quantity + execution.remaining_quantity == 1000
    assert execution.avg_price <= 102.0
    assert book.best_ask > 102.0


def test_sell_limit_above_bid_not_filled(book):
    execution = book.process_order(Order(OrderType.SELL_LIMIT, 99.5, 10))
    assert execution.status is ExecutionStatus.NOT_FILLED
    assert book.best_bid == 99.0


def test_sell_limit_partial_level_then_next(book):
    first = book.process_order(Order(OrderType.SELL_LIMIT, 98.0, 50))
    assert first.status is ExecutionStatus.FILLED
    assert first.avg_price == 99.0
    assert book.best_bid == 99.0
    second = book.process_order(Order(OrderType.SELL_LIMIT, 98.0, 100))
    assert second.status is ExecutionStatus.FILLED
    assert 98.0 < second.avg_price < 99.0
    assert book.best_bid == 98.0


def test_sell_market_exhausts_bids(book):
    execution = book.process_order(Order(OrderType.SELL_MARKET, 0.0, 5000))
    assert execution.is_partially_filled
    assert book.best_bid == 0.0
    assert book.best_ask == 101.0


def test_zero_quantity_not_filled(book):
    execution = book.process_order(Order(OrderType.BUY_MARKET, 0.0, 0))
    assert execution.status is ExecutionStatus.NOT_FILLED


def test_initialize_resets_book(book):
    book.process_order(Order(OrderType.BUY_MARKET, 0.0, 10_000))
    book.initialize(50.0)
    assert book.mid_price == 50.0
    assert book.best_bid == 49.0
    assert book.best_ask == 51.0


def test_refresh_liquidity_invariants():
    book = OrderBook(100.0, random.Random(3))
    book.refresh_liquidity(200.0)
    assert book.mid_price == 200.0
    assert 198.5 <= book.best_bid <= 199.5
    assert 200.5 <= book.best_ask <= 201.5
    sold = book.process_order(Order(OrderType.SELL_MARKET, 0.0, 10_000))
    assert 250 <= sold.filled_quantity <= 750
    bought = book.process_order(Order(OrderType.BUY_MARKET, 0.0, 10_000))
    assert 250 <= bought.filled_quantity <= 750


def test_update_price_artificially_moves_mid():
    book = OrderBook(100.0, random.Random(11))
    book.update_price_artificially()
    mid = book.mid_price
    assert 99.0 <= mid <= 101.0
    assert book.best_bid == pytest.approx(mid - 1)
    assert book.best_ask == pytest.approx(mid + 1)
    assert book.market_data()["mid_price"] == mid