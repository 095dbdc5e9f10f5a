from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ConversionContext:
    """
    Shared pipeline context.
    Carries configuration and per-call options between orchestration layers.
    """

    config: Any
    logger: Any

    dialect: Optional[str] = None
    gzip: bool = False
    zip: bool = False
    tree_name: Optional[str] = None

    stats: Dict[str, Any] = field(default_factory=dict)
    errors: list = field(default_factory=list)
