"""
Seed a local store from a JSON fixture.

Fixture layout mirrors the three source tables:

    {
      "products": [{"id": 1, "product_guid": "...", "name": "...", "short_description": null}],
      "characters": [{"id": 10, "name": "..."}],
      "character_products": [{"product_id": 1, "character_id": 10, "charter_type": "作者"}]
    }

Foreign keys are not checked, so fixtures can describe broken data on purpose.
"""

import json
from pathlib import Path
from typing import Any, Dict

from sqlalchemy.orm import Session

from .database import Character, CharacterProduct, Product


def load_fixture(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def seed_database(session: Session, data: Dict[str, Any]) -> Dict[str, int]:
    """
    Insert fixture rows and commit.

    Args:
        session: Session on the target database
        data: Fixture dict (see module docstring)

    Returns:
        Number of rows inserted per table
    """
    products = data.get("products", [])
    characters = data.get("characters", [])
    links = data.get("character_products", [])

    for item in products:
        session.add(Product(
            id=item["id"],
            product_guid=item["product_guid"],
            name=item["name"],
            short_description=item.get("short_description"),
            eslite_sn=item.get("eslite_sn"),
        ))
    for item in characters:
        session.add(Character(id=item["id"], name=item["name"]))
    # Flush parents first so link rows insert after them.
    session.flush()
    for item in links:
        session.add(CharacterProduct(
            product_id=item["product_id"],
            character_id=item["character_id"],
            character_type=item["charter_type"],
        ))

    session.commit()
    return {
        "products": len(products),
        "characters": len(characters),
        "character_products": len(links),
    }
