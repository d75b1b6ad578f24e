"""Checkout is all-or-nothing.

A fault is injected at every line of a multi-line cart, and at the order
insert, on each unit-of-work strategy.  Whatever fails, the store must
look exactly as it did before the checkout started.
"""

import logging

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import CustomerDetails, OrderItemSpec
from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.order_repository import DocumentOrderRepository
from storefront.infrastructure.persistence.product_repository import (
    DocumentProductRepository,
)
from storefront.infrastructure.persistence.unit_of_work import (
    CompensatingUnitOfWork,
    unit_of_work_factory,
)
from tests.fakes import (
    RecordingNotificationSink,
    SequenceOrderNumberGenerator,
    make_product,
    make_store,
    seed_products,
    stock_of,
)

CUSTOMER = CustomerDetails(name="Amara Okafor", email="amara@example.com")
CART_SIZE = 4


class StoreFault(RuntimeError):
    pass


class _FaultyProducts:
    """Delegates to the real repository but fails the n-th decrement."""

    def __init__(self, inner, fail_on_call: int) -> None:
        self._inner = inner
        self._fail_on_call = fail_on_call
        self._calls = 0

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def conditional_decrement(self, product_id: str, quantity: int) -> int:
        self._calls += 1
        if self._calls == self._fail_on_call:
            raise StoreFault(f"connection lost while decrementing {product_id}")
        return self._inner.conditional_decrement(product_id, quantity)


class _FaultInjectingUnitOfWork(UnitOfWork):

    def __init__(self, inner: UnitOfWork, fail_on_call: int) -> None:
        super().__init__()
        self._inner = inner
        self._fail_on_call = fail_on_call

    def begin(self) -> None:
        self._inner.begin()
        self.products = _FaultyProducts(self._inner.products, self._fail_on_call)
        self.orders = self._inner.orders

    def _commit(self) -> None:
        self._inner.commit()

    def rollback(self) -> None:
        self._inner.rollback()


class _FailingOrderNumbers(SequenceOrderNumberGenerator):

    def next_number(self) -> str:
        raise StoreFault("order number service unavailable")


def _seed_cart(store) -> list[str]:
    return seed_products(
        store,
        *(make_product(f"Product {i}", "20.00", stock=5) for i in range(CART_SIZE)),
    )


def _snapshot(store, product_ids):
    return [stock_of(store, pid) for pid in product_ids], DocumentOrderRepository(store).list_all()


def _cart(product_ids):
    return [OrderItemSpec(pid, 2) for pid in product_ids]


@pytest.mark.parametrize("fail_at", range(1, CART_SIZE + 1))
def test_fault_at_any_line_leaves_store_unchanged(store, fail_at):
    product_ids = _seed_cart(store)
    before = _snapshot(store, product_ids)
    real_factory = unit_of_work_factory(store)
    handler = CreateOrderHandler(
        uow_factory=lambda: _FaultInjectingUnitOfWork(real_factory(), fail_at),
        order_numbers=SequenceOrderNumberGenerator(),
        notifications=RecordingNotificationSink(),
    )

    with pytest.raises(StoreFault):
        handler.handle(CUSTOMER, _cart(product_ids))

    assert _snapshot(store, product_ids) == before


@pytest.mark.parametrize("short_line", range(CART_SIZE))
def test_out_of_stock_at_any_line_leaves_store_unchanged(store, short_line):
    product_ids = _seed_cart(store)
    DocumentProductRepository(store).update_fields(product_ids[short_line], stock_quantity=1)
    before = _snapshot(store, product_ids)
    handler = CreateOrderHandler(
        uow_factory=unit_of_work_factory(store),
        order_numbers=SequenceOrderNumberGenerator(),
        notifications=RecordingNotificationSink(),
    )

    with pytest.raises(InsufficientStockError):
        handler.handle(CUSTOMER, _cart(product_ids))

    assert _snapshot(store, product_ids) == before


def test_fault_at_order_insert_leaves_store_unchanged(store):
    product_ids = _seed_cart(store)
    before = _snapshot(store, product_ids)
    sink = RecordingNotificationSink()
    handler = CreateOrderHandler(
        uow_factory=unit_of_work_factory(store),
        order_numbers=_FailingOrderNumbers(),
        notifications=sink,
    )

    with pytest.raises(StoreFault):
        handler.handle(CUSTOMER, _cart(product_ids))

    assert _snapshot(store, product_ids) == before
    assert sink.events == []


class TestCompensatingUnitOfWork:
    """The compensating path is not atomic by itself, so pin it down directly."""

    def test_rollback_restores_decrements_in_reverse(self):
        store = make_store("compensating")
        a, b = seed_products(store, make_product("A", stock=5), make_product("B", stock=5))

        with CompensatingUnitOfWork(store) as uow:
            assert uow.products.conditional_decrement(a, 2) == 1
            assert uow.products.conditional_decrement(b, 3) == 1
            # applied immediately, no isolation
            assert stock_of(store, a) == 3
            assert stock_of(store, b) == 2

        assert stock_of(store, a) == 5
        assert stock_of(store, b) == 5

    def test_failed_decrement_is_not_journaled(self):
        store = make_store("compensating")
        (a,) = seed_products(store, make_product("A", stock=1))

        with CompensatingUnitOfWork(store) as uow:
            assert uow.products.conditional_decrement(a, 2) == 0

        assert stock_of(store, a) == 1

    def test_commit_keeps_decrements(self):
        store = make_store("compensating")
        (a,) = seed_products(store, make_product("A", stock=5))

        with CompensatingUnitOfWork(store) as uow:
            uow.products.conditional_decrement(a, 4)
            uow.commit()

        assert stock_of(store, a) == 1

    def test_vanished_product_is_logged_and_others_restored(self, caplog):
        store = make_store("compensating")
        a, b = seed_products(store, make_product("A", stock=5), make_product("B", stock=5))

        with caplog.at_level(logging.ERROR):
            with CompensatingUnitOfWork(store) as uow:
                uow.products.conditional_decrement(a, 1)
                uow.products.conditional_decrement(b, 1)
                DocumentProductRepository(store).delete(b)

        assert stock_of(store, a) == 5
        assert "Compensation skipped" in caplog.text
