"""
Product Loader.

Responsibilities:
- Read one fixed-size batch of products from the store.
- Select an explicit column list so extra store columns never leak in.

Non-Responsibilities:
- No ordering guarantees beyond what the store returns.
- No pagination or retry.
"""

from typing import List

from sqlalchemy.orm import Session

from .database import Product, translate_store_errors
from .models import SourceProduct

BATCH_SIZE = 10

PRODUCT_COLUMNS = (
    Product.id,
    Product.product_guid,
    Product.name,
    Product.short_description,
)


def load_batch(session: Session, limit: int = BATCH_SIZE) -> List[SourceProduct]:
    """
    Load up to `limit` products.

    Args:
        session: Open store session
        limit: Maximum number of products (positive integer)

    Returns:
        Products in the order the store returned them

    Raises:
        ValueError: If limit is not a positive integer
        StoreError: If the query fails
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")

    with translate_store_errors("Loading products"):
        rows = session.query(*PRODUCT_COLUMNS).limit(limit).all()

    return [
        SourceProduct(
            id=row.id,
            guid=row.product_guid,
            name=row.name,
            description=row.short_description,
        )
        for row in rows
    ]
