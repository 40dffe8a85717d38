import argparse
import os
from decimal import Decimal

from database import db
from models import Product
from products import load_catalog
from services import format_money

# (id, name, category, price)
SEED_PRODUCTS = [
    (1, "Classic White T-Shirt", "Clothing", Decimal("12.99")),
    (2, "Denim Jeans", "Clothing", Decimal("39.50")),
    (3, "Flannel Shirt", "Clothing", Decimal("24.00")),
    (4, "Wool Beanie", "Accessories", Decimal("9.75")),
    (5, "Leather Belt", "Accessories", Decimal("18.00")),
    (6, "Canvas Backpack", "Accessories", Decimal("45.00")),
    (7, "Running Shoes", "Footwear", Decimal("79.99")),
    (8, "Hiking Boots", "Footwear", Decimal("119.00")),
    (9, "Wireless Earbuds", "Electronics", Decimal("59.90")),
    (10, "USB-C Charger", "Electronics", Decimal("19.99")),
    (11, "Coffee Mug", "Home", Decimal("7.50")),
    (12, "Scented Candle", "Home", Decimal("14.25")),
]


def catalog_needs_seed(store=None):
    store = store or db
    path = store.catalog_path
    if not os.path.exists(path):
        return True
    with open(path, 'r', encoding='utf-8-sig') as fh:
        return not fh.read().strip()


def seed(store=None, force=False):
    """Write the starter catalog. Existing catalogs are left alone unless `force`."""
    store = store or db
    if not force and not catalog_needs_seed(store):
        print(f"Catalog already present at {store.catalog_path}; use --force to overwrite.")
        return False
    records = [
        Product(id=pid, name=name, category=category, price=price).model_dump(mode='json')
        for pid, name, category, price in SEED_PRODUCTS
    ]
    store.write_records(store.catalog_path, records)
    print("Catalog Seeded.")
    return True


def list_products(store=None):
    """Print the catalog as a table: id, name, category, price."""
    catalog = load_catalog(store or db)
    print(f"{'ID':<4} {'Name':<30} {'Category':<20} {'Price':>10}")
    print('-' * 67)
    for p in catalog.values():
        print(f"{p.id:<4} {p.name:<30} {p.category:<20} {format_money(p.price):>10}")
    return len(catalog)


def list_receipts(store=None):
    """Print the receipt log: date, number of items, total."""
    receipts = (store or db).load_receipts()
    print(f"{'Date':<20} {'Items':>6} {'Total':>12}")
    print('-' * 40)
    for r in receipts:
        count = sum(it.quantity for it in r.items)
        print(f"{r.date.strftime('%Y-%m-%d %H:%M:%S'):<20} {count:>6} {format_money(r.total):>12}")
    return len(receipts)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument('--seed', action='store_true', help='Write the starter catalog')
    parser.add_argument('--force', action='store_true', help='Overwrite an existing catalog when seeding')
    parser.add_argument('--list', action='store_true', help='Print the current catalog')
    parser.add_argument('--receipts', action='store_true', help='Print the receipt log')
    args = parser.parse_args()

    if args.list:
        list_products()
    elif args.receipts:
        list_receipts()
    else:
        # Default to seeding when no flags provided
        seed(force=args.force)
