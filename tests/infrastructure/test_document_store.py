"""Tests for the document store backends and the order repository on top."""

import json
import threading
from datetime import datetime, timezone

import pytest

from storefront.domain.exceptions import DuplicateOrderNumberError
from storefront.domain.model.order import Order, OrderLineItem, RefundStatus, ShippingDetails
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.document_store import (
    DuplicateKeyError,
    JsonDocumentStore,
    MemoryDocumentStore,
)
from storefront.infrastructure.persistence.order_repository import DocumentOrderRepository
from storefront.infrastructure.persistence.product_repository import (
    DocumentProductRepository,
)
from tests.fakes import make_product, make_store


def _order(number: str) -> Order:
    item = OrderLineItem("p1", "Heritage Print Collection", Quantity(2), Money.of("161.49"))
    return Order.create(
        number, "Amara Okafor", "amara@example.com", [item],
        user_id="u1", shipping=ShippingDetails("12 Marina Road", "Lagos", "101001", "Nigeria"),
    )


class TestDocumentStore:

    def test_insert_assigns_id(self, store):
        doc = store.insert_one("things", {"name": "a"})
        assert doc["id"]
        assert store.find_one("things", doc["id"]) == doc

    def test_returned_documents_are_copies(self, store):
        doc = store.insert_one("things", {"tags": ["a"]})
        doc["tags"].append("b")
        assert store.find_one("things", doc["id"])["tags"] == ["a"]

    def test_update_with_failing_where_changes_nothing(self, store):
        doc = store.insert_one("things", {"n": 1})
        assert store.update_one("things", doc["id"], where=lambda d: d["n"] > 5, inc={"n": -1}) is None
        assert store.find_one("things", doc["id"])["n"] == 1

    def test_update_inc_and_set(self, store):
        doc = store.insert_one("things", {"n": 1})
        updated = store.update_one("things", doc["id"], set_fields={"s": "x"}, inc={"n": 2})
        assert updated["n"] == 3
        assert updated["s"] == "x"

    def test_update_missing_document(self, store):
        assert store.update_one("things", "nope", inc={"n": 1}) is None

    def test_unique_index(self, store):
        store.insert_one("orders", {"order_number": "SS26AAAAAA"})
        with pytest.raises(DuplicateKeyError):
            store.insert_one("orders", {"order_number": "SS26AAAAAA"})

    def test_delete(self, store):
        doc = store.insert_one("things", {})
        assert store.delete_one("things", doc["id"]) == 1
        assert store.delete_one("things", doc["id"]) == 0


class TestMemoryTransactions:

    def test_rollback_restores_every_collection(self):
        store = MemoryDocumentStore()
        kept = store.insert_one("a", {"n": 1})
        tx = store.begin_transaction()
        store.update_one("a", kept["id"], inc={"n": 10})
        store.insert_one("b", {"x": 1})
        tx.rollback()
        assert store.find_one("a", kept["id"])["n"] == 1
        assert store.find("b") == []

    def test_commit_keeps_writes(self):
        store = MemoryDocumentStore()
        tx = store.begin_transaction()
        store.insert_one("a", {"n": 1})
        tx.commit()
        assert len(store.find("a")) == 1

    def test_failed_snapshot_releases_lock(self):
        class Uncopyable:
            def __deepcopy__(self, memo):
                raise RuntimeError("cannot copy")

        store = MemoryDocumentStore()
        store._collections = {"a": {"x": {"id": "x", "v": Uncopyable()}}}
        with pytest.raises(RuntimeError, match="cannot copy"):
            store.begin_transaction()

        store._collections = {}
        inserted = []
        worker = threading.Thread(target=lambda: inserted.append(store.insert_one("a", {})))
        worker.start()
        worker.join(timeout=5)
        assert len(inserted) == 1

    def test_store_without_transactions_refuses(self):
        with pytest.raises(NotImplementedError):
            MemoryDocumentStore(transactions=False).begin_transaction()
        assert not MemoryDocumentStore(transactions=False).supports_transactions


class TestJsonDocumentStore:

    def test_one_file_per_collection(self, tmp_path):
        store = JsonDocumentStore(tmp_path)
        store.insert_one("products", {"name": "Dress"})
        raw = json.loads((tmp_path / "products.json").read_text())
        assert [d["name"] for d in raw] == ["Dress"]

    def test_survives_reopen(self, tmp_path):
        doc = JsonDocumentStore(tmp_path).insert_one("products", {"name": "Dress"})
        assert JsonDocumentStore(tmp_path).find_one("products", doc["id"])["name"] == "Dress"

    def test_missing_file_is_empty_collection(self, tmp_path):
        assert JsonDocumentStore(tmp_path / "nothing-here").find("products") == []


class TestOrderRepository:

    def test_round_trip(self, store):
        repo = DocumentOrderRepository(store)
        saved = repo.insert(_order("SS26AAAAAA"))
        loaded = repo.get_by_id(saved.id)
        assert loaded == saved
        assert loaded.total == Money.of("322.98")

    def test_duplicate_number_raises_domain_error(self, store):
        repo = DocumentOrderRepository(store)
        repo.insert(_order("SS26AAAAAA"))
        with pytest.raises(DuplicateOrderNumberError):
            repo.insert(_order("SS26AAAAAA"))

    def test_conditional_refund_update(self, store):
        repo = DocumentOrderRepository(store)
        order = repo.insert(_order("SS26AAAAAA"))
        first = repo.update_refund(order.id, RefundStatus.REQUESTED, "Too small", RefundStatus.NONE)
        second = repo.update_refund(order.id, RefundStatus.REQUESTED, "Again", RefundStatus.NONE)
        assert first.refund_reason == "Too small"
        assert second is None
        assert repo.get_by_id(order.id).refund_reason == "Too small"


class TestProductRepository:

    def test_conditional_decrement_never_goes_negative(self):
        store = make_store("compensating")
        repo = DocumentProductRepository(store)
        product = repo.add(make_product(stock=3))
        assert repo.conditional_decrement(product.id, 2) == 1
        assert repo.conditional_decrement(product.id, 2) == 0
        assert repo.get_by_id(product.id).stock_quantity == 1

    def test_increment_missing_product(self):
        repo = DocumentProductRepository(make_store("compensating"))
        assert repo.increment_stock("ghost", 1) == 0

    def test_new_catalog_fields_round_trip(self, store):
        repo = DocumentProductRepository(store)
        product = make_product("Ankara Maxi Dress", created_at=datetime(2026, 3, 1, tzinfo=timezone.utc))
        product.sizes = ["S", "M"]
        product.colors = ["Indigo"]
        repo.add(product)
        loaded = repo.get_by_id(product.id)
        assert loaded == product
        assert loaded.image == "https://images.example.com/product.jpg"

    def test_update_fields_writes_only_named_fields(self, store):
        repo = DocumentProductRepository(store)
        product = repo.add(make_product("Dress", "100.00", stock=5))
        assert repo.conditional_decrement(product.id, 2) == 1

        updated = repo.update_fields(product.id, price=Money.of("80.00"), sizes=["L"])

        assert updated.price == Money.of("80.00")
        assert updated.sizes == ["L"]
        assert updated.stock_quantity == 3
        assert updated.name == "Dress"

    def test_update_fields_missing_product(self, store):
        assert DocumentProductRepository(store).update_fields("ghost", name="Nope") is None

    def test_update_fields_rejects_unknown_field(self, store):
        repo = DocumentProductRepository(store)
        product = repo.add(make_product())
        with pytest.raises(ValueError, match="created_at"):
            repo.update_fields(product.id, created_at="2020-01-01")
