import os
import unittest
from decimal import Decimal
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

try:
    from PyQt5.QtWidgets import QApplication
    from view import ShopPanel, ReceiptDialog
    PYQT_AVAILABLE = True
except ImportError:
    PYQT_AVAILABLE = False

from models import Product, ALL_CATEGORIES

PRODUCTS = [
    Product(id=1, name='Flannel Shirt', category='Clothing', price=Decimal('24.00')),
    Product(id=2, name='Coffee Mug', category='Home', price=Decimal('7.50')),
]


class ViewTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not PYQT_AVAILABLE:
            raise unittest.SkipTest('PyQt5 not available in test environment')
        cls.app = QApplication.instance() or QApplication([])

    def test_populate_categories_keeps_all_first(self):
        panel = ShopPanel()
        panel.populate_categories(['Clothing', 'Home'])
        items = [panel.cmb_category.itemText(i) for i in range(panel.cmb_category.count())]
        self.assertEqual(items, [ALL_CATEGORIES, 'Clothing', 'Home'])

    def test_product_selection(self):
        panel = ShopPanel()
        panel.update_products(PRODUCTS)
        self.assertEqual(panel.product_table.rowCount(), 2)
        self.assertIsNone(panel.selected_product_id())
        panel.product_table.selectRow(1)
        self.assertEqual(panel.selected_product_id(), 2)

    def test_cart_display_and_total(self):
        panel = ShopPanel()
        panel.update_cart_display([
            {'id': 2, 'name': 'Coffee Mug', 'quantity': 2, 'line_total': Decimal('15.00')},
        ], Decimal('15.00'))
        self.assertEqual(panel.cart_table.item(0, 2).text(), '$15.00')
        self.assertEqual(panel.lbl_total.text(), 'Total: $15.00')
        panel.cart_table.selectRow(0)
        self.assertEqual(panel.selected_cart_product_id(), 2)

    def test_search_and_category_signals(self):
        panel = ShopPanel()
        panel.populate_categories(['Clothing'])
        seen = []
        panel.search_query.connect(lambda q: seen.append(('search', q)))
        panel.category_selected.connect(lambda c: seen.append(('category', c)))
        panel.search_input.setText('mug')
        panel.search_input.returnPressed.emit()
        panel.cmb_category.setCurrentIndex(1)
        panel.clear_filters()
        self.assertEqual(seen, [('search', 'mug'), ('category', 'Clothing')])
        self.assertEqual(panel.search_input.text(), '')
        self.assertEqual(panel.cmb_category.currentText(), ALL_CATEGORIES)

    def test_search_text_reads_box_without_submitting(self):
        panel = ShopPanel()
        seen = []
        panel.search_query.connect(seen.append)
        panel.search_input.setText('jeans')
        self.assertEqual(panel.search_text(), 'jeans')
        self.assertEqual(seen, [])

    def test_receipt_dialog_without_image(self):
        dlg = ReceiptDialog(png_path=None)
        self.assertEqual(dlg.windowTitle(), 'Receipt')


if __name__ == '__main__':
    unittest.main()
