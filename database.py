import json
import logging
import os
import tempfile
from datetime import datetime
from decimal import Decimal

from pydantic import ValidationError

from models import CartItem, Receipt

logger = logging.getLogger(__name__)

# Keep data files next to this module so the application finds the same files
# regardless of the current working directory when launched.
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, "data")

CATALOG_FILE = "products.json"
CART_FILE = "cart.json"
RECEIPTS_FILE = "receipts.json"


def _encode(value):
    # amounts are kept as exact decimal strings
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonStore:
    """Flat JSON files holding the catalog, the cart and the receipt log.

    Every write replaces the whole file. Amounts are written as decimal strings
    so they read back exactly. Read failures never reach the caller: they are
    logged and treated as an empty list.
    """

    def __init__(self, data_dir=DATA_DIR):
        self.data_dir = data_dir
        self.catalog_path = os.path.join(data_dir, CATALOG_FILE)
        self.cart_path = os.path.join(data_dir, CART_FILE)
        self.receipts_path = os.path.join(data_dir, RECEIPTS_FILE)

    def read_records(self, path):
        """Return the list stored in `path`, or None if the file is missing or blank.

        Raises ValueError when the content is not a JSON list.
        """
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding='utf-8-sig') as fh:
            content = fh.read()
        if not content.strip():
            return None
        records = json.loads(content, parse_float=Decimal)
        if not isinstance(records, list):
            raise ValueError(f"{path}: expected a list of records, got {type(records).__name__}")
        return records

    def write_records(self, path, records):
        directory = os.path.dirname(path) or '.'
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f".{os.path.basename(path)}.", suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(records, fh, indent=2, ensure_ascii=False, default=_encode)
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def _read_or_empty(self, path, what):
        try:
            records = self.read_records(path)
        except (OSError, ValueError) as e:
            logger.warning("Could not read %s from %s: %s", what, path, e)
            return []
        return records or []

    # --- CART ---
    def load_cart(self):
        records = self._read_or_empty(self.cart_path, "cart")
        try:
            return tuple(CartItem.model_validate(r) for r in records)
        except ValidationError as e:
            logger.warning("Error loading cart from %s: %s", self.cart_path, e)
            return ()

    def save_cart(self, cart):
        try:
            self.write_records(self.cart_path, [item.model_dump(mode='json') for item in cart])
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving cart to %s: %s", self.cart_path, e)
            return False
        return True

    # --- RECEIPTS ---
    def load_receipts(self):
        records = self._read_or_empty(self.receipts_path, "receipts")
        try:
            return [Receipt.model_validate(r) for r in records]
        except ValidationError as e:
            logger.warning("Error loading receipts from %s: %s", self.receipts_path, e)
            return []

    def save_receipt(self, cart, total, when=None):
        """Append a receipt for `cart` to the log and return it.

        Returns None when the log could not be written.
        """
        existing = self._read_or_empty(self.receipts_path, "receipts")
        receipt = Receipt(date=when or datetime.now(), items=tuple(cart), total=total)
        existing.append(receipt.model_dump(mode='json'))
        try:
            self.write_records(self.receipts_path, existing)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving receipt to %s: %s", self.receipts_path, e)
            return None
        return receipt


db = JsonStore()
