"""End-to-end conversion: TypeScript source -> rewritten GraphQL SDL."""

import logging
from dataclasses import dataclass
from pathlib import Path

from graphql import DocumentNode, GraphQLError, parse, print_ast

from .errors import SchemaSyntaxError, SourceReadError, WriteError
from .extractor import ExtractionResult, extract
from .hooks import HookRunner
from .rewriter import SchemaRewriter
from .source_parser import parse_source

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of one conversion run."""
    extraction: ExtractionResult
    document: DocumentNode
    sdl: str
    bound_fields: list[str]
    reclassified: list[str]
    pruned: list[str]


def parse_schema_text(schema_text: str) -> DocumentNode:
    """Parse extracted SDL with graphql-core, wrapping its syntax errors."""
    try:
        return parse(schema_text)
    except GraphQLError as e:
        raise SchemaSyntaxError(f"Generated schema is not valid SDL: {e.message}", schema_text) from e


def convert_source(source: str, hooks: HookRunner | None = None) -> ConversionResult:
    """Convert TypeScript declaration source text to GraphQL SDL.

    Args:
        source: TypeScript source text
        hooks: Optional hooks applied to the rewritten document and printed SDL

    Returns:
        The conversion result, including the printed SDL

    Raises:
        SourceSyntaxError: If no declaration can be read from a source with syntax errors
        NoDefinitionsFound: If the source contains no convertible declaration
        SchemaSyntaxError: If the extracted SDL does not parse
    """
    source_file = parse_source(source)
    logger.debug("Read %d declarations", len(source_file.declarations))

    extraction = extract(source_file)
    document = parse_schema_text(extraction.schema_text)

    rewriter = SchemaRewriter(document)
    document = rewriter.rewrite()

    if hooks:
        document = hooks.run_pre_print_hooks(document)
    sdl = print_ast(document) + "\n"
    if hooks:
        sdl = hooks.run_post_print_hooks(sdl)

    return ConversionResult(
        extraction=extraction,
        document=document,
        sdl=sdl,
        bound_fields=rewriter.bound_fields,
        reclassified=rewriter.reclassified,
        pruned=rewriter.pruned,
    )


def read_source(input_path: str | Path) -> str:
    path = Path(input_path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(str(path), str(e)) from e


def write_schema(output_path: str | Path, sdl: str):
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(sdl, encoding="utf-8")
    except OSError as e:
        raise WriteError(str(path), str(e)) from e


def convert_file(
    input_path: str | Path,
    output_path: str | Path | None = None,
    hooks: HookRunner | None = None,
) -> ConversionResult:
    """Convert a TypeScript file, writing the SDL to `output_path` when given.

    Nothing is written unless the whole conversion succeeds.
    """
    source = read_source(input_path)
    result = convert_source(source, hooks=hooks)
    if output_path is not None:
        write_schema(output_path, result.sdl)
        logger.info("Wrote schema to %s", output_path)
    return result
