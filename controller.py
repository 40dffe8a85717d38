from PyQt5.QtWidgets import QMainWindow, QMessageBox
import logging

from view import ShopPanel, ReceiptDialog
from database import db
from model import ReceiptGenerator
from products import get_product, get_categories
from services import ProductService, CartService, CheckoutService, calculate_total, format_money

logger = logging.getLogger(__name__)


class MainController(QMainWindow):
    def __init__(self, store=None):
        super().__init__()
        self.setWindowTitle("Simple Store")
        self.resize(1000, 700)

        self.store = store or db
        self.products = ProductService(self.store)
        self.carts = CartService(self.store)
        self.checkouts = CheckoutService(self.store)

        # Data State
        self.state = self.products.initial_state()

        self.shop = ShopPanel()
        self.setCentralWidget(self.shop)

        # Connect Signals
        self.shop.search_query.connect(self.filter_search)
        self.shop.category_selected.connect(self.filter_category)
        self.shop.reset_requested.connect(self.reset_filters)
        self.shop.add_clicked.connect(self.add_selected)
        self.shop.remove_clicked.connect(self.remove_selected)
        self.shop.checkout_requested.connect(self.checkout)

        # Initial Load
        self.shop.populate_categories(get_categories(self.state.catalog))
        self.load_items()
        self.update_cart_ui()

    # --- DATA ---
    def load_items(self):
        self.shop.update_products(self.state.displayed)

    def filter_category(self, category):
        # picking a category also applies whatever is typed in the search box
        self.state = self.products.filter(self.state, category=category, query=self.shop.search_text())
        self.load_items()

    def filter_search(self, text):
        self.state = self.products.filter(self.state, query=text)
        self.load_items()

    def reset_filters(self):
        self.shop.clear_filters()
        self.state = self.products.reset(self.state)
        self.load_items()

    # --- CART LOGIC ---
    def add_selected(self):
        product_id = self.shop.selected_product_id()
        if product_id is None:
            QMessageBox.information(self, "Add to Cart", "Please select a product first.")
            return
        self.add_to_cart(product_id)

    def add_to_cart(self, product_id):
        product = get_product(self.state.catalog, product_id)
        if product is None:
            QMessageBox.information(self, "Add to Cart", "That product is no longer available.")
            return
        self.state = self.carts.add(self.state, product)
        self.update_cart_ui()

    def remove_selected(self):
        product_id = self.shop.selected_cart_product_id()
        if product_id is None:
            QMessageBox.information(self, "Remove", "Please select an item in the cart first.")
            return
        self.remove_from_cart(product_id)

    def remove_from_cart(self, product_id):
        self.state = self.carts.remove(self.state, product_id)
        self.update_cart_ui()

    def update_cart_ui(self):
        display_list = []
        for item in self.state.cart:
            display_list.append({
                'id': item.product.id,
                'name': item.product.name,
                'quantity': item.quantity,
                'line_total': item.line_total,
            })
        self.shop.update_cart_display(display_list, calculate_total(self.state.cart))

    # --- CHECKOUT ---
    def checkout(self):
        if not self.state.cart:
            QMessageBox.information(self, "Checkout", "Cart is empty!")
            return

        self.state, receipt = self.checkouts.checkout(self.state)
        if receipt is None:
            QMessageBox.warning(self, "Checkout", "Could not save the receipt. Your cart has been kept.")
            return

        self.update_cart_ui()
        QMessageBox.information(self, "Checkout", f"Receipt saved! Total paid: {format_money(receipt.total)}")
        self.show_receipt(receipt)

    def show_receipt(self, receipt):
        try:
            png = ReceiptGenerator.generate(receipt)
        except (OSError, ValueError) as e:
            logger.warning("Could not render receipt image: %s", e)
            return
        dlg = ReceiptDialog(png_path=png, parent=self)
        dlg.exec_()
