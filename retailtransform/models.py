"""
In-memory record types passed between loader, resolver and assembler.

Rows are copied out of the ORM into these frozen dataclasses so nothing
downstream of the loader holds a live session object.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

# Record kind tag expected by the ingestion sink for product pages.
RECORD_TYPE = "PP"


@dataclass(frozen=True)
class SourceProduct:
    """One row of the products table."""

    id: int
    guid: str
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Association:
    """A character_products row linking a product to a character with a role."""

    product_id: int
    identity_id: int
    role: str


@dataclass(frozen=True)
class Identity:
    id: int
    name: str


@dataclass(frozen=True)
class RoleFilter:
    """
    Substring filter applied to association role labels.

    A label matches when it contains `include` and does not contain
    `exclude`. The exclusion is the narrower role and usually contains
    `include` itself.
    """

    include: str
    exclude: str


# Store labels: "author" and "author (original language)".
DEFAULT_ROLE_FILTER = RoleFilter(include="作者", exclude="作者(原文)")


@dataclass(frozen=True)
class OutputRecord:
    """Flattened product record as consumed by the ingestion sink."""

    external_id: str
    title: str
    description: str = ""
    author: str = ""
    record_type: str = RECORD_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """Return the record with its wire field names, in wire order."""
        return {
            "type": self.record_type,
            "id": self.external_id,
            "title": self.title,
            "description": self.description,
            "author": self.author,
        }
