from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from gno_converter.config import get_config
from gno_converter.core.context import ConversionContext
from gno_converter.core.exceptions import ConversionError
from gno_converter.gedcom import GedcomWriter, parse_gedcom
from gno_converter.gno import Dialect, parse_gno, render_gno
from gno_converter.logging import get_logger
from gno_converter.transport import compress, read_gno_xml

GnoInput = Union[bytes, bytearray, memoryview, str, Path]


class Pipeline:
    """
    Orchestrates one conversion in either direction.
    No business logic lives here.
    """

    def __init__(self, context: ConversionContext):
        self.ctx = context
        self.log = context.logger

    def _guard(self, label: str, step):
        self.log.info("Pipeline starting: %s", label)
        try:
            result = step()
        except ConversionError as exc:
            self.ctx.errors.append(str(exc))
            self.log.error("Pipeline %s rejected input: %s", label, exc)
            raise
        except Exception as exc:
            self.ctx.errors.append(str(exc))
            self.log.exception("Pipeline %s execution failed", label)
            raise ConversionError(str(exc)) from exc
        self.log.info("Pipeline completed successfully: %s", label)
        return result

    def ged_to_gno(self, ged_text: str) -> bytes:
        def step() -> bytes:
            dialect = Dialect.parse(self.ctx.dialect or self.ctx.config.default_dialect)
            model = parse_gedcom(ged_text)
            self.ctx.stats.update(model.counts())
            xml_text = render_gno(model, dialect)
            return compress(xml_text.encode("utf-8"), gzip=self.ctx.gzip, zip=self.ctx.zip)

        return self._guard("ged-to-gno", step)

    def gno_to_ged(self, source: GnoInput) -> str:
        def step() -> str:
            model = parse_gno(read_gno_xml(source))
            self.ctx.stats.update(model.counts())
            writer = GedcomWriter(model, tree_name=self.ctx.tree_name, config=self.ctx.config)
            return writer.render()

        return self._guard("gno-to-ged", step)


def _context(**options) -> ConversionContext:
    return ConversionContext(
        config=get_config(),
        logger=get_logger("pipeline"),
        **options,
    )


def ged_to_gno(
    ged_text: str,
    dialect: Optional[Union[Dialect, str]] = None,
    gzip: bool = False,
    zip: bool = False,
) -> bytes:
    """
    Convert GEDCOM text to a GNO payload.

    ``dialect`` falls back to ``conversion.default_dialect`` from the config.
    Raises UnsupportedOptionError for ``zip=True`` or an unknown dialect.
    """
    ctx = _context(dialect=dialect, gzip=gzip, zip=zip)
    return Pipeline(ctx).ged_to_gno(ged_text)


def gno_to_ged(source: GnoInput, tree_name: Optional[str] = None) -> str:
    """
    Convert a GNO payload (bytes, or a path to a .gno file) to GEDCOM text.

    Raises TransportError / FormatValidationError for unreadable input.
    """
    ctx = _context(tree_name=tree_name)
    return Pipeline(ctx).gno_to_ged(source)
