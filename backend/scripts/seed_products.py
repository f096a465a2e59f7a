#!/usr/bin/env python3
"""
Seed the products database from a JSON file.

The file may be a list of entries or an object with an `items` list. Field
names are normalized (nombre/name/title, precio/price, ...). Products are
upserted by case-insensitive name, so the script can be re-run safely.

Usage:
    python scripts/seed_products.py --file data/productos.json
"""
import argparse
import json
import os
import sys
from decimal import Decimal, InvalidOperation

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from inventory.db.products import SessionLocal, init_db
from inventory.models.product import Product, name_key
from inventory.repositories.product_repo import ProductRepository
from inventory.utils.money import to_cents

DEFAULT_PRODUCTS = [
    {"nombre": "Widget", "descripcion": "Demo widget", "categoria": "General", "precio": "10.00", "stock": 5},
    {"nombre": "Mouse", "descripcion": "Optical mouse", "categoria": "Perifericos", "precio": "12.50", "stock": 25},
    {"nombre": "Teclado", "descripcion": "USB keyboard", "categoria": "Perifericos", "precio": "29.90", "stock": 8},
]


def _normalize_entry(entry):
    """Return a dict with keys: name, description, category, image, price, stock."""
    name = entry.get("nombre") or entry.get("name") or entry.get("title") or ""
    raw_price = entry.get("precio", entry.get("price", 0))
    try:
        price = Decimal(str(raw_price))
    except (InvalidOperation, ValueError):
        price = Decimal("0")
    try:
        stock = int(entry.get("stock", entry.get("quantity", 0)) or 0)
    except (TypeError, ValueError):
        stock = 0
    image = entry.get("imagen") or entry.get("image")
    if not image:
        imgs = entry.get("images") or []
        image = imgs[0] if isinstance(imgs, (list, tuple)) and imgs else None
    return {
        "name": name.strip(),
        "description": entry.get("descripcion") or entry.get("description"),
        "category": entry.get("categoria") or entry.get("category"),
        "image": image,
        "price": to_cents(price),
        "stock": max(stock, 0),
    }


def load_entries(path):
    if path is None:
        return DEFAULT_PRODUCTS
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("items") if isinstance(data.get("items"), list) else list(data.values())
    return data if isinstance(data, list) else []


def seed(entries):
    init_db(reset=False)
    db = SessionLocal()
    repo = ProductRepository(db)
    created = updated = skipped = 0
    try:
        for entry in entries:
            e = _normalize_entry(entry)
            if not e["name"] or e["price"] <= 0:
                skipped += 1
                continue
            e["name_key"] = name_key(e["name"])
            p = repo.find_by_name(e["name"])
            if p:
                for field, value in e.items():
                    setattr(p, field, value)
                updated += 1
            else:
                repo.add(Product(**e))
                created += 1
        db.commit()
        print(f"Seeded products: created={created} updated={updated} skipped={skipped}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to product json; built-in demo set when omitted")
    args = parser.parse_args()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed(load_entries(args.file))
