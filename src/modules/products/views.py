"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  The
service is built with ``HttpErrorTranslator``, so every failure leaves
the service as a DRF ``APIException`` and is rendered by the project
exception handler; the view never catches service errors itself.
"""

from __future__ import annotations

from typing import Any, Mapping, Type, TypeVar

from asgiref.sync import async_to_sync
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import CreateProductDTO, PaginationDTO, UpdateProductDTO
from modules.products.models import Product
from modules.products.serializers import ProductSerializer
from modules.products.services import get_product_service
from modules.products.translators import HttpErrorTranslator

D = TypeVar("D", bound=BaseModel)


def _build_dto(dto_class: Type[D], data: Mapping[str, Any]) -> D:
    """Validate ``data`` into ``dto_class`` or raise a DRF 400."""
    if not isinstance(data, Mapping):
        raise ValidationError({"non_field_errors": ["Expected a JSON object."]})
    try:
        return dto_class.model_validate(dict(data))
    except PydanticValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            attr = ".".join(str(part) for part in error["loc"]) or "non_field_errors"
            errors.setdefault(attr, []).append(error["msg"])
        raise ValidationError(errors) from exc


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Does **not** extend ``ModelViewSet``: all store access goes through
    the service.  ``queryset`` is only used for schema generation.
    """

    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = get_product_service(HttpErrorTranslator())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/products/?page=&limit="""
        query = {
            key: value
            for key, value in request.query_params.items()
            if key in ("page", "limit")
        }
        pagination = _build_dto(PaginationDTO, query)
        result = async_to_sync(self._service.find_all)(pagination)
        return Response(result.to_dict(lambda product: ProductSerializer(product).data))

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        product = async_to_sync(self._service.find_one)(pk)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        dto = _build_dto(CreateProductDTO, request.data)
        product = async_to_sync(self._service.create)(dto.model_dump())
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/

        An ``id`` in the body is accepted and ignored.
        """
        dto = _build_dto(UpdateProductDTO, request.data)
        product = async_to_sync(self._service.update)(
            pk, dto.model_dump(exclude_unset=True)
        )
        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/

        Soft delete: responds with the product, now ``available=false``.
        """
        product = async_to_sync(self._service.remove)(pk)
        return Response(ProductSerializer(product).data)
