import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import datetime
from decimal import Decimal
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import inserting
from database import JsonStore
from models import Product, CartItem
from products import load_catalog, get_categories


class InsertingTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.store = JsonStore(data_dir=os.path.join(self.tmpdir, 'data'))

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_seed_writes_catalog(self):
        self.assertTrue(inserting.catalog_needs_seed(self.store))
        with redirect_stdout(io.StringIO()):
            self.assertTrue(inserting.seed(self.store))
        catalog = load_catalog(self.store)
        self.assertEqual(len(catalog), len(inserting.SEED_PRODUCTS))
        self.assertIn('Clothing', get_categories(catalog))
        self.assertFalse(inserting.catalog_needs_seed(self.store))

    def test_seed_keeps_existing_catalog_unless_forced(self):
        self.store.write_records(self.store.catalog_path, [
            {'id': 99, 'name': 'Custom', 'category': 'Own', 'price': 1},
        ])
        with redirect_stdout(io.StringIO()):
            self.assertFalse(inserting.seed(self.store))
            self.assertEqual(list(load_catalog(self.store)), [99])
            self.assertTrue(inserting.seed(self.store, force=True))
        self.assertNotIn(99, load_catalog(self.store))

    def test_blank_catalog_needs_seed(self):
        os.makedirs(self.store.data_dir)
        with open(self.store.catalog_path, 'w', encoding='utf-8') as fh:
            fh.write('\n')
        self.assertTrue(inserting.catalog_needs_seed(self.store))

    def test_list_products_prints_table(self):
        with redirect_stdout(io.StringIO()):
            inserting.seed(self.store)
        out = io.StringIO()
        with redirect_stdout(out):
            count = inserting.list_products(self.store)
        self.assertEqual(count, len(inserting.SEED_PRODUCTS))
        self.assertIn('Denim Jeans', out.getvalue())
        self.assertIn('$39.50', out.getvalue())

    def test_list_receipts_prints_log(self):
        mug = Product(id=2, name='Coffee Mug', category='Home', price=Decimal('7.50'))
        self.store.save_receipt((CartItem(product=mug, quantity=3),), Decimal('22.50'), when=datetime(2025, 4, 1, 10, 15))
        out = io.StringIO()
        with redirect_stdout(out):
            count = inserting.list_receipts(self.store)
        self.assertEqual(count, 1)
        self.assertIn('2025-04-01 10:15:00', out.getvalue())
        self.assertIn('$22.50', out.getvalue())

    def test_list_receipts_empty_log(self):
        with redirect_stdout(io.StringIO()):
            self.assertEqual(inserting.list_receipts(self.store), 0)


if __name__ == '__main__':
    unittest.main()
