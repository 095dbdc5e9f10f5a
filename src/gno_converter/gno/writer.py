"""
Canonical model -> GNO XML text.
"""

from __future__ import annotations

from typing import Optional, Union

from gno_converter.gno.dialects import renderer_for
from gno_converter.gno.renderer import Dialect
from gno_converter.logging import get_logger
from gno_converter.model import GenealogyModel

log = get_logger(__name__)


def render_gno(model: GenealogyModel, dialect: Optional[Union[Dialect, str]] = None) -> str:
    """
    Render ``model`` in the requested dialect (GenoPro when omitted).

    Raises UnsupportedOptionError for an unknown dialect name.
    """
    renderer = renderer_for(dialect or Dialect.GENOPRO, model)
    log.info("Rendering GNO XML, dialect=%s", renderer.dialect.value)
    return renderer.render()
