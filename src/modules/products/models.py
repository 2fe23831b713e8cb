"""Product model with soft delete through the ``available`` flag.

Business rules implemented:
- Price cannot be negative.
- Soft delete: ``available`` is flipped to ``False`` and the row is kept.
  Only live products (``available=True``) are visible to the service layer.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import TimestampedModel


class Product(TimestampedModel):
    """Catalog product.

    ``available`` is indexed because every read path filters on it.
    """

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    available = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"
