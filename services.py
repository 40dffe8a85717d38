from dataclasses import replace
from decimal import Decimal
import logging

from database import db
from models import CartItem, StoreState, ALL_CATEGORIES
from products import load_catalog

logger = logging.getLogger(__name__)


def _products(catalog):
    # accept either the {id: Product} catalog or an already filtered list
    if isinstance(catalog, dict):
        return list(catalog.values())
    return list(catalog)


#Cart
def add_to_cart(product, cart):
    items = list(cart)
    for index, item in enumerate(items):
        if item.product.id == product.id:
            items[index] = item.model_copy(update={'quantity': item.quantity + 1})
            return tuple(items)
    items.append(CartItem(product=product, quantity=1))
    return tuple(items)


def remove_from_cart(product_id, cart):
    items = []
    for item in cart:
        if item.product.id != product_id:
            items.append(item)
        elif item.quantity > 1:
            items.append(item.model_copy(update={'quantity': item.quantity - 1}))
    return tuple(items)


#Pricing
def calculate_total(cart):
    return sum((item.line_total for item in cart), Decimal('0'))


def format_money(amount):
    return f"${amount:,.2f}"


#Search
def filter_by_category(category, catalog):
    """Products whose category equals `category` exactly (case-sensitive)."""
    return [p for p in _products(catalog) if p.category == category]


def search_products(query, catalog):
    """Products whose name or category contains `query`, ignoring case."""
    needle = query.strip().lower()
    return [
        p for p in _products(catalog)
        if needle in p.name.lower() or needle in p.category.lower()
    ]


def apply_filters(catalog, category=ALL_CATEGORIES, query=""):
    if category == ALL_CATEGORIES:
        products = _products(catalog)
    else:
        products = filter_by_category(category, catalog)
    if query and query.strip():
        products = search_products(query, products)
    return products


#Product service
class ProductService:

    def __init__(self, store=None):
        self.store = store or db

    def initial_state(self):
        catalog = load_catalog(self.store)
        cart = self.store.load_cart()
        return StoreState(catalog=catalog, cart=cart, displayed=tuple(catalog.values()))

    def filter(self, state, category=None, query=None):
        category = state.category if category is None else category
        query = state.query if query is None else query
        displayed = apply_filters(state.catalog, category, query)
        return replace(state, category=category, query=query, displayed=tuple(displayed))

    def reset(self, state):
        return self.filter(state, ALL_CATEGORIES, "")


#Cart service
class CartService:

    def __init__(self, store=None):
        self.store = store or db

    def add(self, state, product):
        cart = add_to_cart(product, state.cart)
        self.store.save_cart(cart)
        return replace(state, cart=cart)

    def remove(self, state, product_id):
        cart = remove_from_cart(product_id, state.cart)
        if cart != state.cart:
            self.store.save_cart(cart)
        return replace(state, cart=cart)


#Check-out service
class CheckoutService:

    def __init__(self, store=None):
        self.store = store or db

    def checkout(self, state):
        """Write a receipt for the cart and empty it.

        Returns (next_state, receipt). The receipt is None when the cart was
        empty or the receipt log could not be written; the cart is kept then.
        """
        if not state.cart:
            return state, None

        total = calculate_total(state.cart)
        receipt = self.store.save_receipt(state.cart, total)
        if receipt is None:
            return state, None

        logger.info("Checkout complete: %d line(s), total %s", len(receipt.items), format_money(total))
        self.store.save_cart(())
        return replace(state, cart=()), receipt
