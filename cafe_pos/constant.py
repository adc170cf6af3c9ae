"""Editable seed catalog, waiter roster and receipt identity."""

from __future__ import annotations

INITIAL_PRODUCTS: list[dict[str, str]] = [
    {"id": "1", "name": "Espresso", "category": "Café", "price": "2.50"},
    {"id": "2", "name": "Cappuccino", "category": "Café", "price": "3.50"},
    {"id": "3", "name": "Latte", "category": "Café", "price": "4.00"},
    {"id": "4", "name": "Croissant", "category": "Boulangerie", "price": "2.00"},
    {"id": "5", "name": "Pain au Chocolat", "category": "Boulangerie", "price": "2.20"},
    {"id": "6", "name": "Avocado Toast", "category": "Nourriture", "price": "8.50"},
    {"id": "7", "name": "Thé Glacé Maison", "category": "Boissons", "price": "3.50"},
    {"id": "8", "name": "Cheesecake", "category": "Dessert", "price": "5.00"},
]

# PINs are compared in plain text; they identify the operator at the till, nothing more.
WAITERS: list[dict[str, str]] = [
    {"id": "w1", "name": "Jean Dupont", "pin": "123"},
    {"id": "w2", "name": "Sarah Martin", "pin": "000"},
    {"id": "w3", "name": "Michel Roux", "pin": "111"},
]

SUGGESTED_CATEGORIES: list[str] = ["Café", "Thé", "Boulangerie", "Nourriture", "Boissons", "Dessert"]

ALL_CATEGORIES_LABEL = "Tout"
UNKNOWN_WAITER_LABEL = "Inconnu"

CAFE_NAME = "Lumière Café"
CAFE_ADDRESS = "123 Avenue de la République"
CAFE_PHONE = "Tél: 01 23 45 67 89"
RECEIPT_FAREWELL: list[str] = ["Merci de votre visite !", "À bientôt."]
