from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit,
    QHeaderView, QTableWidget, QTableWidgetItem, QDialog, QSplitter,
    QComboBox, QAbstractItemView
)
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QPixmap, QFont
import os

from models import ALL_CATEGORIES
from services import format_money


def _make_table(headers):
    table = QTableWidget()
    table.setColumnCount(len(headers))
    table.setHorizontalHeaderLabels(headers)
    table.setSelectionBehavior(QAbstractItemView.SelectRows)
    table.setSelectionMode(QAbstractItemView.SingleSelection)
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.verticalHeader().setVisible(False)
    return table


def _id_cell(text, product_id):
    cell = QTableWidgetItem(text)
    cell.setData(Qt.UserRole, product_id)
    return cell


def _selected_id(table):
    rows = table.selectionModel().selectedRows()
    if not rows:
        return None
    cell = table.item(rows[0].row(), 0)
    if cell is None:
        return None
    return cell.data(Qt.UserRole)


class ShopPanel(QWidget):
    # Signals to Controller
    search_query = pyqtSignal(str)
    category_selected = pyqtSignal(str)
    reset_requested = pyqtSignal()
    add_clicked = pyqtSignal()
    remove_clicked = pyqtSignal()
    checkout_requested = pyqtSignal()

    def __init__(self):
        super().__init__()
        self.setObjectName("ShopPanel")

        main_layout = QVBoxLayout()

        # 1. Search & filter bar
        top_bar = QWidget()
        top_bar.setObjectName("TopBar")
        top_layout = QHBoxLayout()

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search products...")
        self.search_input.setMinimumWidth(200)
        self.search_input.returnPressed.connect(self._emit_search)

        btn_search = QPushButton("Go")
        btn_search.clicked.connect(self._emit_search)

        self.cmb_category = QComboBox()
        self.cmb_category.setMinimumWidth(150)
        self.cmb_category.addItem(ALL_CATEGORIES)
        self.cmb_category.currentTextChanged.connect(self.category_selected.emit)

        btn_reset = QPushButton("Reset")
        btn_reset.clicked.connect(self.reset_requested.emit)

        top_layout.addWidget(QLabel("Search:"))
        top_layout.addWidget(self.search_input)
        top_layout.addWidget(btn_search)
        top_layout.addWidget(QLabel("Category:"))
        top_layout.addWidget(self.cmb_category)
        top_layout.addWidget(btn_reset)
        top_layout.addStretch()
        top_bar.setLayout(top_layout)

        # 2. Products (left) | Cart (right)
        splitter = QSplitter(Qt.Horizontal)

        left_panel = QWidget()
        left_vbox = QVBoxLayout()
        left_vbox.setContentsMargins(0, 0, 0, 0)
        self.product_table = _make_table(["ID", "Name", "Category", "Price"])
        self.product_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.product_table.doubleClicked.connect(lambda _: self.add_clicked.emit())

        self.btn_add = QPushButton("Add to Cart")
        self.btn_add.setObjectName("AddBtn")
        self.btn_add.setMinimumHeight(40)
        self.btn_add.clicked.connect(self.add_clicked.emit)

        left_vbox.addWidget(self.product_table)
        left_vbox.addWidget(self.btn_add)
        left_panel.setLayout(left_vbox)

        self.cart_panel = QWidget()
        self.cart_panel.setObjectName("CartPanel")
        cart_layout = QVBoxLayout()
        cart_layout.setContentsMargins(0, 0, 0, 0)

        lbl_cart = QLabel("My Cart")
        lbl_cart.setFont(QFont("Arial", 14, QFont.Bold))

        self.cart_table = _make_table(["Product", "Qty", "Price"])
        self.cart_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.cart_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeToContents)
        self.cart_table.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeToContents)

        self.lbl_total = QLabel(f"Total: {format_money(0)}")
        self.lbl_total.setObjectName("TotalLabel")
        self.lbl_total.setFont(QFont("Arial", 14, QFont.Bold))

        btns = QHBoxLayout()
        self.btn_remove = QPushButton("Remove Selected")
        self.btn_remove.clicked.connect(self.remove_clicked.emit)
        self.btn_checkout = QPushButton("Checkout")
        self.btn_checkout.setObjectName("CheckoutBtn")
        self.btn_checkout.clicked.connect(self.checkout_requested.emit)
        btns.addWidget(self.btn_remove)
        btns.addWidget(self.btn_checkout)

        cart_layout.addWidget(lbl_cart)
        cart_layout.addWidget(self.cart_table)
        cart_layout.addWidget(self.lbl_total)
        cart_layout.addLayout(btns)
        self.cart_panel.setLayout(cart_layout)

        splitter.addWidget(left_panel)
        splitter.addWidget(self.cart_panel)
        splitter.setSizes([600, 400])

        main_layout.addWidget(top_bar)
        main_layout.addWidget(splitter, 1)
        self.setLayout(main_layout)

    def search_text(self):
        return self.search_input.text()

    def _emit_search(self):
        self.search_query.emit(self.search_text())

    def populate_categories(self, categories):
        self.cmb_category.blockSignals(True)
        self.cmb_category.clear()
        self.cmb_category.addItem(ALL_CATEGORIES)
        self.cmb_category.addItems(categories)
        self.cmb_category.setCurrentIndex(0)
        self.cmb_category.blockSignals(False)

    def clear_filters(self):
        # reset the widgets without re-emitting filter signals
        self.cmb_category.blockSignals(True)
        self.search_input.setText("")
        self.cmb_category.setCurrentIndex(0)
        self.cmb_category.blockSignals(False)

    def update_products(self, products):
        self.product_table.setRowCount(0)
        self.product_table.setRowCount(len(products))
        for row, p in enumerate(products):
            self.product_table.setItem(row, 0, _id_cell(str(p.id), p.id))
            self.product_table.setItem(row, 1, QTableWidgetItem(p.name))
            self.product_table.setItem(row, 2, QTableWidgetItem(p.category))
            self.product_table.setItem(row, 3, QTableWidgetItem(format_money(p.price)))

    def update_cart_display(self, cart_items, total):
        self.cart_table.setRowCount(0)
        self.cart_table.setRowCount(len(cart_items))
        for row, item in enumerate(cart_items):
            self.cart_table.setItem(row, 0, _id_cell(item['name'], item['id']))
            self.cart_table.setItem(row, 1, QTableWidgetItem(str(item['quantity'])))
            self.cart_table.setItem(row, 2, QTableWidgetItem(format_money(item['line_total'])))
        self.lbl_total.setText(f"Total: {format_money(total)}")

    def selected_product_id(self):
        return _selected_id(self.product_table)

    def selected_cart_product_id(self):
        return _selected_id(self.cart_table)


class ReceiptDialog(QDialog):
    def __init__(self, png_path=None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Receipt")
        self.setMinimumSize(420, 560)
        layout = QVBoxLayout()

        lbl = QLabel()
        lbl.setAlignment(Qt.AlignCenter)
        pm = QPixmap(png_path) if png_path and os.path.exists(png_path) else QPixmap()
        if not pm.isNull():
            lbl.setPixmap(pm.scaled(380, 480, Qt.KeepAspectRatio, Qt.SmoothTransformation))
        else:
            lbl.setText("Receipt preview not available")
        layout.addWidget(lbl)

        btn_close = QPushButton("Close")
        btn_close.clicked.connect(self.accept)
        layout.addWidget(btn_close)
        self.setLayout(layout)
