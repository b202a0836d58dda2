import json
from typing import IO, Sequence

from .models import OutputRecord


def serialize_records(records: Sequence[OutputRecord]) -> str:
    """Render records as an indented JSON array (``[]`` when empty)."""
    return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)


def write_records(records: Sequence[OutputRecord], stream: IO[str]) -> None:
    stream.write(serialize_records(records))
    stream.write("\n")
    stream.flush()
