"""
Author Resolver.

Responsibilities:
- Find the association that marks a character as a product's author.
- Look up that character's display name.

Non-Responsibilities:
- No ranking between several matching associations.
- No output formatting.

Invariant:
A product without a matching association resolves to None.
An association whose character is missing is a DataIntegrityError, never None.
"""

from typing import Optional

from sqlalchemy.exc import NoResultFound
from sqlalchemy.orm import Session

from .database import Character, CharacterProduct, translate_store_errors
from .errors import DataIntegrityError
from .models import DEFAULT_ROLE_FILTER, Association, Identity, RoleFilter


def find_association(
    session: Session,
    product_id: int,
    role_filter: RoleFilter = DEFAULT_ROLE_FILTER,
) -> Optional[Association]:
    """
    Return one association whose role matches the filter, or None.

    With several matches, whichever row the store returns first wins; no
    ORDER BY is applied.
    """
    role = CharacterProduct.character_type
    with translate_store_errors(f"Loading author association for product {product_id}"):
        row = (
            session.query(
                CharacterProduct.product_id,
                CharacterProduct.character_id,
                role.label("role"),
            )
            .filter(
                CharacterProduct.product_id == product_id,
                role.contains(role_filter.include, autoescape=True),
                ~role.contains(role_filter.exclude, autoescape=True),
            )
            .first()
        )

    if row is None:
        return None
    return Association(
        product_id=row.product_id,
        identity_id=row.character_id,
        role=row.role,
    )


def fetch_identity(session: Session, association: Association) -> Identity:
    """
    Load the character an association points at.

    Raises:
        DataIntegrityError: If the character row does not exist
        StoreError: If the query fails
    """
    try:
        with translate_store_errors(f"Loading character {association.identity_id}"):
            row = (
                session.query(Character.id, Character.name)
                .filter(Character.id == association.identity_id)
                .one()
            )
    except NoResultFound as e:
        raise DataIntegrityError(association.product_id, association.identity_id) from e

    return Identity(id=row.id, name=row.name)


def resolve_author(
    session: Session,
    product_id: int,
    role_filter: RoleFilter = DEFAULT_ROLE_FILTER,
) -> Optional[Identity]:
    """
    Resolve the author of a product.

    Args:
        session: Open store session
        product_id: Internal product id
        role_filter: Role label inclusion/exclusion patterns

    Returns:
        The author identity, or None when no association matches
    """
    association = find_association(session, product_id, role_filter)
    if association is None:
        return None
    return fetch_identity(session, association)
