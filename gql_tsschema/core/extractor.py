"""Extraction of SDL text from a parsed TypeScript source."""

import logging
from dataclasses import dataclass, field

from .errors import NoDefinitionsFound
from .lowering import ArgsTable, lower_declaration
from .type_ast import SourceFile

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """SDL text produced from one source, plus its argument declarations."""
    schema_text: str
    args_table: ArgsTable = field(default_factory=ArgsTable)
    fragment_count: int = 0


def extract(source: SourceFile) -> ExtractionResult:
    """Lower every declaration of `source` in order and concatenate the fragments.

    Args:
        source: The parsed declarations

    Returns:
        The SDL text and the ArgsTable of `Mutation*Args` / `Query*Args`
        declarations

    Raises:
        NoDefinitionsFound: If no declaration produced any SDL
    """
    fragments = []
    args_table = ArgsTable()

    for declaration in source.declarations:
        lowered = lower_declaration(declaration)
        if lowered.args_name and lowered.args_fragment:
            args_table.add(lowered.args_name, lowered.args_fragment)
        if lowered.fragment:
            logger.debug("Lowered %s", getattr(declaration, "name", "embedded literal"))
            fragments.append(lowered.fragment)

    schema_text = "".join(fragments)
    if not schema_text.strip():
        raise NoDefinitionsFound()

    return ExtractionResult(
        schema_text=schema_text,
        args_table=args_table,
        fragment_count=len(fragments),
    )
