"""Static catalog datasets bundled with the service.

The seed dataset backs demo/offline operation and acts as the standing safety
net behind the remote catalog service. The emergency dataset is the last
resort when even the seed cannot be loaded.
"""

from __future__ import annotations

from functools import lru_cache

from src.models.product import Product

_SEED_PRODUCTS: list[dict] = [
    {
        "id": "seed-car-camry-2023",
        "title": "Toyota Camry 2023 mid trim, excellent condition",
        "description": "Single owner, full agency maintenance history.",
        "tags": ["sedan", "automatic", "gps", "leather seats"],
        "category": "cars",
        "condition": "used",
        "price": 450000,
        "original_price": 480000,
        "stock_quantity": 1,
        "views": 1250,
        "rating": 4.8,
        "review_count": 32,
        "created_at": "2024-01-15T10:00:00+00:00",
        "make": "Toyota",
        "model": "Camry",
        "year": 2023,
        "mileage": 15000,
        "location": "New Cairo, Cairo",
    },
    {
        "id": "seed-car-tucson-2024",
        "title": "Hyundai Tucson 2024 brand new, 5 year warranty",
        "description": "Panoramic sunroof, heated seats, AWD.",
        "tags": ["suv", "awd", "panoramic sunroof"],
        "category": "cars",
        "condition": "new",
        "price": 520000,
        "stock_quantity": 3,
        "views": 890,
        "rating": 4.7,
        "review_count": 18,
        "created_at": "2024-02-01T09:30:00+00:00",
        "make": "Hyundai",
        "model": "Tucson",
        "year": 2024,
        "mileage": 0,
        "location": "Giza, Giza",
    },
    {
        "id": "seed-car-elantra-2019",
        "title": "Hyundai Elantra 2019, manual, economical",
        "description": "Well kept daily driver.",
        "tags": ["sedan", "manual"],
        "category": "cars",
        "condition": "used",
        "price": 285000,
        "stock_quantity": 1,
        "views": 640,
        "rating": 4.2,
        "review_count": 9,
        "created_at": "2023-11-20T14:00:00+00:00",
        "make": "Hyundai",
        "model": "Elantra",
        "year": 2019,
        "mileage": 98000,
        "location": "Alexandria, Alexandria",
    },
    {
        "id": "seed-part-brake-pads",
        "title": "Ceramic brake pads, front axle",
        "description": "Low dust ceramic compound for Japanese and Korean sedans.",
        "tags": ["brakes", "toyota", "hyundai"],
        "category": "parts",
        "condition": "new",
        "price": 1850,
        "original_price": 2100,
        "stock_quantity": 40,
        "views": 2100,
        "rating": 4.6,
        "review_count": 120,
        "created_at": "2024-03-05T08:00:00+00:00",
    },
    {
        "id": "seed-part-alternator",
        "title": "Refurbished alternator 120A",
        "description": "Bench tested, six month warranty.",
        "tags": ["electrical", "charging"],
        "category": "parts",
        "condition": "refurbished",
        "price": 3200,
        "stock_quantity": 6,
        "views": 430,
        "rating": 4.1,
        "review_count": 14,
        "created_at": "2024-01-28T12:00:00+00:00",
    },
    {
        "id": "seed-acc-dashcam",
        "title": "Full HD dash camera with night vision",
        "description": "Loop recording and parking mode.",
        "tags": ["electronics", "camera", "safety"],
        "category": "accessories",
        "condition": "new",
        "price": 1450,
        "stock_quantity": 25,
        "views": 1780,
        "rating": 4.4,
        "review_count": 76,
        "created_at": "2024-02-18T16:45:00+00:00",
    },
    {
        "id": "seed-acc-seat-covers",
        "title": "Leather seat covers, universal fit",
        "description": "Five seat set, beige.",
        "tags": ["interior", "leather"],
        "category": "accessories",
        "condition": "new",
        "price": 2600,
        "stock_quantity": 0,
        "views": 520,
        "rating": 3.9,
        "review_count": 11,
        "created_at": "2023-12-10T11:15:00+00:00",
    },
    {
        "id": "seed-svc-full-service",
        "title": "Full maintenance service package",
        "description": "Oil, filters, brake inspection and 60 point check.",
        "tags": ["maintenance", "oil change"],
        "category": "services",
        "condition": "new",
        "price": 1200,
        "original_price": 1500,
        "stock_quantity": 50,
        "views": 3050,
        "rating": 4.9,
        "review_count": 210,
        "created_at": "2024-03-12T07:00:00+00:00",
        "location": "Nasr City, Cairo",
    },
    {
        "id": "seed-tool-torque-wrench",
        "title": "Click torque wrench 1/2 inch drive",
        "description": "40-210 Nm range with storage case.",
        "tags": ["hand tools", "wheels"],
        "category": "tools",
        "condition": "new",
        "price": 950,
        "stock_quantity": 12,
        "views": 310,
        "rating": 4.5,
        "review_count": 22,
        "created_at": "2024-02-25T13:20:00+00:00",
    },
    {
        "id": "seed-tire-michelin-205",
        "title": "Michelin Primacy 4 205/55 R16",
        "description": "Summer touring tire, sold individually.",
        "tags": ["michelin", "r16", "summer"],
        "category": "tires",
        "condition": "new",
        "price": 3900,
        "stock_quantity": 16,
        "views": 1420,
        "rating": 4.7,
        "review_count": 58,
        "created_at": "2024-03-01T10:10:00+00:00",
    },
    {
        "id": "seed-tire-used-set",
        "title": "Set of 4 used tires 195/65 R15",
        "description": "About 60% tread remaining.",
        "tags": ["r15", "set"],
        "category": "tires",
        "condition": "used",
        "price": 4000,
        "stock_quantity": 2,
        "views": 275,
        "rating": 3.8,
        "review_count": 5,
        "created_at": "2023-10-30T15:00:00+00:00",
        "location": "Giza, Giza",
    },
]

_EMERGENCY_PRODUCTS: list[dict] = [
    {
        "id": "emergency-svc-inspection",
        "title": "Pre-purchase car inspection",
        "description": "Book a certified inspection before you buy.",
        "category": "services",
        "condition": "new",
        "price": 750,
        "stock_quantity": 10,
        "created_at": "2024-01-01T00:00:00+00:00",
    },
    {
        "id": "emergency-part-oil-filter",
        "title": "Oil filter, universal spin-on",
        "category": "parts",
        "condition": "new",
        "price": 180,
        "stock_quantity": 100,
        "created_at": "2024-01-01T00:00:00+00:00",
    },
]


@lru_cache(maxsize=1)
def _load_seed() -> tuple[Product, ...]:
    return tuple(Product.model_validate(item) for item in _SEED_PRODUCTS)


@lru_cache(maxsize=1)
def _load_emergency() -> tuple[Product, ...]:
    return tuple(Product.model_validate(item) for item in _EMERGENCY_PRODUCTS)


def load_seed_catalog() -> list[Product]:
    return list(_load_seed())


def load_emergency_catalog() -> list[Product]:
    return list(_load_emergency())
