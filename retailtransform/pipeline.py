"""
Export pipeline: load a batch of products, resolve authors, build records.

The run is all-or-nothing. Any error from the loader or resolver propagates
and no records are returned.
"""

from threading import Event
from typing import List, Optional

from sqlalchemy.orm import Session

from .assembler import assemble
from .errors import PipelineCancelled, RetailTransformError
from .loader import BATCH_SIZE, load_batch
from .logger import StructuredLogger, get_logger
from .models import DEFAULT_ROLE_FILTER, OutputRecord, RoleFilter
from .resolver import resolve_author


def run_pipeline(
    session: Session,
    limit: int = BATCH_SIZE,
    role_filter: RoleFilter = DEFAULT_ROLE_FILTER,
    logger: Optional[StructuredLogger] = None,
    cancel_event: Optional[Event] = None,
) -> List[OutputRecord]:
    """
    Export one batch of products with their authors.

    Args:
        session: Open store session, owned by the caller
        limit: Batch size
        role_filter: Role label patterns selecting the author association
        logger: Logger receiving progress and metrics (default: global logger)
        cancel_event: When set, the run stops before the next product

    Returns:
        One record per loaded product, in load order

    Raises:
        RetailTransformError: On any store, integrity or cancellation failure
    """
    if logger is None:
        logger = get_logger()

    try:
        products = load_batch(session, limit)
        logger.record_products_loaded(len(products))
        logger.info(f"Loaded {len(products)} products", limit=limit)

        records: List[OutputRecord] = []
        for product in products:
            if cancel_event is not None and cancel_event.is_set():
                raise PipelineCancelled(
                    f"Cancelled after {len(records)} of {len(products)} products"
                )

            identity = resolve_author(session, product.id, role_filter)
            logger.record_author(identity is not None)
            if identity is None:
                logger.debug("No author found", product_id=product.id, guid=product.guid)

            records.append(assemble(product, identity))
            logger.record_emitted()
    except RetailTransformError as e:
        logger.record_error(type(e).__name__)
        raise

    logger.log_metrics_summary()
    return records
