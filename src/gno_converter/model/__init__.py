from __future__ import annotations

from .entities import (
    Event,
    Family,
    GenealogyModel,
    NameParts,
    Person,
    Place,
    Source,
    SourceCitation,
)
from .backfill import add_child, assign_spouse, backfill_relationships

__all__ = [
    "Event",
    "Family",
    "GenealogyModel",
    "NameParts",
    "Person",
    "Place",
    "Source",
    "SourceCitation",
    "add_child",
    "assign_spouse",
    "backfill_relationships",
]
