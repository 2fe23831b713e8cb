from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.models import Product

CATALOG = [
    ('Monitor 27"', Decimal("1299.90")),
    ("Mechanical Keyboard", Decimal("399.90")),
    ("Gaming Mouse", Decimal("249.90")),
    ('Notebook 14"', Decimal("3999.00")),
    ("Headset", Decimal("299.90")),
    ("Office Desk", Decimal("899.00")),
    ("Ergonomic Chair", Decimal("1499.00")),
    ("Bookshelf", Decimal("699.00")),
    ("Cabinet", Decimal("1199.00")),
    ("Two-seat Sofa", Decimal("2299.00")),
    ("A4 Paper", Decimal("29.90")),
    ("Blue Pen", Decimal("4.90")),
    ("Notebook", Decimal("19.90")),
    ("Stapler", Decimal("39.90")),
    ("Sticky Notes", Decimal("12.90")),
    ("Planner", Decimal("49.90")),
    ("Highlighter", Decimal("9.90")),
    ("Calculator", Decimal("89.90")),
    ("LED Lamp", Decimal("59.90")),
    ("Laptop Stand", Decimal("149.90")),
]


class Command(BaseCommand):
    help = "Seed database with development products."

    def add_arguments(self, parser):
        parser.add_argument(
            "--removed",
            type=int,
            default=0,
            help="Soft-delete the last N seeded products.",
        )

    def handle(self, *args, **options):
        self.stdout.write("Creating products...")
        products: list[Product] = []
        created = 0
        for name, price in CATALOG:
            product, was_created = Product.objects.get_or_create(
                name=name, defaults={"price": price}
            )
            products.append(product)
            created += int(was_created)

        removed = options["removed"]
        if removed > 0:
            ids = [product.id for product in products[-removed:]]
            Product.objects.filter(id__in=ids).update(available=False)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={len(products)}, "
                f"created={created}, removed={max(removed, 0)}"
            )
        )
