"""Unit tests for ProductDjangoStore.

Covers:
- Lifecycle (idempotent connect, disconnect).
- Queries (find_unique, find_many, count) against the live filter.
- Commands (create, update) and tagged store errors.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from modules.core.repositories.interfaces import StoreErrorCode, StoreKnownRequestError
from modules.products.models import Product
from modules.products.repositories import get_product_store
from modules.products.repositories.django_repository import ProductDjangoStore
from modules.products.repositories.interfaces import IProductStore

pytestmark = pytest.mark.unit

LIVE = {"available": True}


@pytest.fixture()
def store():
    return ProductDjangoStore()


# ===========================================================================
# Instantiation / lifecycle
# ===========================================================================


class TestStoreLifecycle:
    def test_is_instance_of_interface(self, store):
        assert isinstance(store, IProductStore)

    def test_factory_returns_shared_instance(self):
        assert get_product_store() is get_product_store()

    def test_connect_is_idempotent(self, store):
        async_to_sync(store.connect)()
        async_to_sync(store.connect)()
        assert store.connected is True

    def test_disconnect_resets_state(self, store):
        async_to_sync(store.connect)()
        async_to_sync(store.disconnect)()
        assert store.connected is False

    def test_disconnect_without_connect_is_noop(self, store):
        async_to_sync(store.disconnect)()
        assert store.connected is False


# ===========================================================================
# find_unique
# ===========================================================================


class TestFindUnique:
    def test_returns_matching_product(self, store, make_product):
        product = make_product()
        result = async_to_sync(store.find_unique)({"id": product.id, **LIVE})
        assert result is not None
        assert result.id == product.id

    def test_returns_none_when_not_live(self, store, make_product):
        product = make_product(available=False)
        assert async_to_sync(store.find_unique)({"id": product.id, **LIVE}) is None

    def test_returns_none_when_missing(self, store):
        assert async_to_sync(store.find_unique)({"id": 999_999, **LIVE}) is None

    def test_numeric_string_id_is_accepted(self, store, make_product):
        product = make_product()
        result = async_to_sync(store.find_unique)({"id": str(product.id), **LIVE})
        assert result.id == product.id

    def test_malformed_id_is_tagged(self, store):
        with pytest.raises(StoreKnownRequestError) as exc_info:
            async_to_sync(store.find_unique)({"id": "not-a-number", **LIVE})
        assert exc_info.value.code is StoreErrorCode.INVALID_IDENTIFIER


# ===========================================================================
# find_many / count
# ===========================================================================


class TestFindManyAndCount:
    def test_count_only_live(self, store, make_product):
        make_product(name="A")
        make_product(name="B")
        make_product(name="C", available=False)
        assert async_to_sync(store.count)(LIVE) == 2

    def test_find_many_slices_in_id_order(self, store, product_batch):
        results = async_to_sync(store.find_many)(skip=10, take=10, where=LIVE)
        assert [p.id for p in results] == [p.id for p in product_batch[10:20]]

    def test_find_many_last_partial_page(self, store, product_batch):
        results = async_to_sync(store.find_many)(skip=20, take=10, where=LIVE)
        assert len(results) == 5

    def test_find_many_excludes_soft_deleted(self, store, make_product):
        live = make_product(name="live")
        make_product(name="gone", available=False)
        results = async_to_sync(store.find_many)(skip=0, take=10, where=LIVE)
        assert [p.id for p in results] == [live.id]


# ===========================================================================
# create / update
# ===========================================================================


class TestCreate:
    def test_creates_live_product(self, store):
        product = async_to_sync(store.create)({"name": "X", "price": Decimal("10")})
        assert product.id is not None
        assert product.available is True
        assert Product.objects.filter(id=product.id).exists()

    def test_unknown_field_raises_untagged(self, store):
        with pytest.raises(TypeError):
            async_to_sync(store.create)({"name": "X", "price": 1, "colour": "red"})


class TestUpdate:
    def test_applies_data(self, store, make_product):
        product = make_product(price=Decimal("10"))
        updated = async_to_sync(store.update)(
            where={"id": product.id}, data={"price": Decimal("20")}
        )
        product.refresh_from_db()
        assert updated.price == Decimal("20")
        assert product.price == Decimal("20")

    def test_refreshes_updated_at(self, store, make_product):
        product = make_product()
        before = product.updated_at
        async_to_sync(store.update)(where={"id": product.id}, data={"name": "New"})
        product.refresh_from_db()
        assert product.updated_at >= before
        assert product.name == "New"

    def test_missing_record_is_tagged(self, store):
        with pytest.raises(StoreKnownRequestError) as exc_info:
            async_to_sync(store.update)(where={"id": 999_999}, data={"name": "X"})
        assert exc_info.value.code is StoreErrorCode.RECORD_NOT_FOUND

    def test_empty_data_returns_product_untouched(self, store, make_product):
        product = make_product(name="Same")
        result = async_to_sync(store.update)(where={"id": product.id}, data={})
        assert result.name == "Same"
