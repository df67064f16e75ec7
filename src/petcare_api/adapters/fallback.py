# src/petcare_api/adapters/fallback.py
from __future__ import annotations

from petcare_api.domain.models import Product

# (id, Titel-Template, Bild, Preis, Rating, Reviews)
_CATALOGUE: tuple[tuple[str, str, str, float, float, int], ...] = (
    (
        "B08F2V1Y62",
        "{term} Premium Nutritious Pet Food",
        "https://images.unsplash.com/photo-1589924691995-400dc9ecc119?w=500",
        34.99,
        4.8,
        1250,
    ),
    (
        "B07H8N3Q2G",
        "{term} Interactive Durable Chew Toy",
        "https://images.unsplash.com/photo-1576201836106-041d501f3c5e?w=500",
        12.50,
        4.5,
        890,
    ),
    (
        "B01N26A18Q",
        "Orthopedic {term} Bed for Dogs",
        "https://images.unsplash.com/photo-1591946614421-1fbf121fca3c?w=500",
        89.00,
        4.9,
        2100,
    ),
)


def _capitalize(term: str) -> str:
    # Nur der erste Buchstabe, der Rest bleibt unverändert (anders als str.capitalize)
    return term[:1].upper() + term[1:]


def fallback_products(query: str) -> list[Product]:
    """Deterministische Ersatzdaten, falls der Provider nicht verfügbar ist."""
    term = _capitalize(query)
    return [
        Product(
            id=product_id,
            title=template.format(term=term),
            image=image,
            price=price,
            rating=rating,
            reviews_count=reviews,
            link=f"https://www.amazon.com/dp/{product_id}",
        )
        for product_id, template, image, price, rating, reviews in _CATALOGUE
    ]
