import logging

from pydantic import ValidationError

from database import db
from models import Product

logger = logging.getLogger(__name__)


def load_catalog(store=None):
    """Read the catalog file into an {id: Product} mapping.

    A missing, blank or unreadable file gives an empty catalog. When two
    records share an id the later one wins.
    """
    store = store or db
    path = store.catalog_path
    try:
        records = store.read_records(path)
    except (OSError, ValueError) as e:
        logger.warning("Could not load products from %s: %s", path, e)
        return {}
    if records is None:
        logger.warning("%s not found or empty. Starting with empty catalog.", path)
        return {}

    try:
        products = [Product.model_validate(r) for r in records]
    except ValidationError as e:
        logger.warning("Could not load products from %s: %s", path, e)
        return {}

    catalog = {}
    for product in products:
        catalog[product.id] = product
    return catalog


def get_product(catalog, product_id):
    return catalog.get(product_id)


def get_categories(catalog):
    # feeds the category drop-down
    return sorted({p.category for p in catalog.values()})
