"""
Tests for ProductService.
"""

import pytest

from rest_api.services.domain import ProductService
from shared.utils.exceptions import NotFoundError, ValidationError


def _data(**overrides):
    data = {"name": "Lamp", "description": "Desk lamp", "quantity": 5, "price": 19.99}
    data.update(overrides)
    return data


class TestProductService:
    """Test product business rules."""

    def test_create_stores_cents(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data())

        assert product.price == 19.99
        assert product.status is True
        entity = service.get_entity(product.id)
        assert entity.price_cents == 1999

    def test_create_rounds_half_up(self, db_session):
        product = ProductService(db_session).create(_data(price=0.125))
        assert product.price == 0.13

    @pytest.mark.parametrize("field,value", [("quantity", -1), ("price", -0.01)])
    def test_create_rejects_negative(self, db_session, field, value):
        with pytest.raises(ValidationError):
            ProductService(db_session).create(_data(**{field: value}))

    @pytest.mark.parametrize(
        "field,value",
        [
            ("price", float("nan")),
            ("price", float("inf")),
            ("price", 1e300),
            ("price", 1_000_000.01),
            ("quantity", 1_000_001),
        ],
    )
    def test_create_rejects_out_of_range(self, db_session, field, value):
        with pytest.raises(ValidationError):
            ProductService(db_session).create(_data(**{field: value}))

    def test_update_rejects_nan_price(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data())

        with pytest.raises(ValidationError):
            service.update(product.id, {"price": float("nan")})
        assert service.get_entity(product.id).price_cents == 1999

    def test_max_price_allowed(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data(price=1_000_000))
        assert service.get_entity(product.id).price_cents == 1_000_000_00

    def test_zero_values_allowed(self, db_session):
        product = ProductService(db_session).create(_data(quantity=0, price=0))
        assert product.quantity == 0
        assert product.price == 0

    def test_get_missing(self, db_session):
        with pytest.raises(NotFoundError):
            ProductService(db_session).get_by_id("missing")

    def test_list_only_active(self, db_session):
        service = ProductService(db_session)
        kept = service.create(_data(name="Kept"))
        gone = service.create(_data(name="Gone"))
        service.delete(gone.id)

        assert [p.id for p in service.list_active()] == [kept.id]

    def test_update_partial(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data())

        updated = service.update(product.id, {"price": 25})
        assert updated.price == 25.0
        assert updated.name == "Lamp"
        assert updated.quantity == 5

    def test_update_status_false_deactivates(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data())

        updated = service.update(product.id, {"status": False})
        assert updated.status is False
        entity = service.repo.find_by_id(product.id, include_inactive=True)
        assert entity.deleted_at is not None
        with pytest.raises(NotFoundError):
            service.get_by_id(product.id)

    def test_update_inactive_not_found(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data())
        service.delete(product.id)

        with pytest.raises(NotFoundError):
            service.update(product.id, {"name": "Back"})

    def test_delete_twice_not_found(self, db_session):
        service = ProductService(db_session)
        product = service.create(_data())
        deleted = service.delete(product.id)
        assert deleted.status is False

        with pytest.raises(NotFoundError):
            service.delete(product.id)
