from typing import Optional

from .models import Identity, OutputRecord, SourceProduct


def assemble(product: SourceProduct, identity: Optional[Identity]) -> OutputRecord:
    """Merge a product and its (possibly missing) author into an output record."""
    return OutputRecord(
        external_id=product.guid,
        title=product.name,
        description=product.description or "",
        author=identity.name if identity is not None else "",
    )
