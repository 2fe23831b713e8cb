"""Unit tests for Product DTOs.

Covers:
- CreateProductDTO: validation, name normalisation, frozen immutability.
- UpdateProductDTO: optional fields, id accepted, available ignored.
- PaginationDTO: defaults and positive bounds.
- ProductOutputDTO: from_entity factory.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import (
    CreateProductDTO,
    PaginationDTO,
    ProductOutputDTO,
    UpdateProductDTO,
)

pytestmark = pytest.mark.unit


# ===========================================================================
# CreateProductDTO
# ===========================================================================


class TestCreateProductDTO:
    def test_create_with_valid_data(self):
        dto = CreateProductDTO(name="Widget", price=Decimal("19.99"))
        assert dto.name == "Widget"
        assert dto.price == Decimal("19.99")

    def test_price_coerced_from_number(self):
        dto = CreateProductDTO(name="Widget", price=10)
        assert dto.price == Decimal("10")

    def test_name_is_stripped(self):
        dto = CreateProductDTO(name="  Widget  ", price=1)
        assert dto.name == "Widget"

    def test_zero_price_allowed(self):
        assert CreateProductDTO(name="Free", price=0).price == Decimal("0")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            CreateProductDTO(name="Widget", price=Decimal("-1"))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Name must not be empty"):
            CreateProductDTO(name="   ", price=1)

    def test_missing_fields_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Widget")

    def test_is_frozen(self):
        dto = CreateProductDTO(name="Widget", price=1)
        with pytest.raises(ValidationError):
            dto.name = "Other"


# ===========================================================================
# UpdateProductDTO
# ===========================================================================


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        assert UpdateProductDTO().model_dump(exclude_unset=True) == {}

    def test_only_supplied_fields_are_dumped(self):
        dto = UpdateProductDTO(price=Decimal("20"))
        assert dto.model_dump(exclude_unset=True) == {"price": Decimal("20")}

    def test_id_is_ignored(self):
        dto = UpdateProductDTO.model_validate({"id": "abc", "name": "Renamed"})
        assert dto.model_dump(exclude_unset=True) == {"name": "Renamed"}

    def test_available_is_not_exposed(self):
        dto = UpdateProductDTO.model_validate({"available": False, "name": "Y"})
        assert "available" not in dto.model_dump(exclude_unset=True)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(price=Decimal("-0.01"))

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProductDTO(name="")

    @pytest.mark.parametrize("field", ["name", "price"])
    def test_explicit_null_rejected(self, field):
        with pytest.raises(ValidationError) as exc_info:
            UpdateProductDTO.model_validate({field: None})
        assert exc_info.value.errors()[0]["loc"] == (field,)


# ===========================================================================
# PaginationDTO
# ===========================================================================


class TestPaginationDTO:
    def test_defaults(self):
        dto = PaginationDTO()
        assert dto.page == 1
        assert dto.limit == 10

    def test_query_strings_are_coerced(self):
        dto = PaginationDTO.model_validate({"page": "2", "limit": "5"})
        assert (dto.page, dto.limit) == (2, 5)

    @pytest.mark.parametrize("field", ["page", "limit"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, field, value):
        with pytest.raises(ValidationError, match="positive"):
            PaginationDTO(**{field: value})


# ===========================================================================
# ProductOutputDTO
# ===========================================================================


class TestProductOutputDTO:
    def test_from_entity(self, make_product):
        product = make_product(name="Widget", price=Decimal("10.50"))

        dto = ProductOutputDTO.from_entity(product)

        assert dto.id == product.id
        assert dto.name == "Widget"
        assert dto.price == Decimal("10.50")
        assert dto.available is True

    def test_json_dump_is_serialisable(self, make_product):
        product = make_product(price=Decimal("10.50"))

        data = ProductOutputDTO.from_entity(product).model_dump(mode="json")

        assert data["price"] == "10.50"
        assert isinstance(data["created_at"], str)
