"""Core modules for TypeScript to GraphQL schema conversion."""

from .errors import (
    ConversionError,
    NoDefinitionsFound,
    SchemaSyntaxError,
    SourceReadError,
    SourceSyntaxError,
    WriteError,
)
from .extractor import ExtractionResult, extract
from .hooks import (
    AddHeaderHook,
    FilterDefinitionsHook,
    HookRunner,
    PostPrintHook,
    PrePrintHook,
)
from .lowering import ArgsTable, Lowered, lower_declaration, operation_args_key, split_args_name
from .pipeline import ConversionResult, convert_file, convert_source
from .rewriter import SchemaRewriter, rewrite_document
from .source_parser import SourceParser, parse_source
from .type_ast import (
    ArrayShape,
    EmbeddedLiteral,
    EnumDeclaration,
    IndexedAccess,
    IntersectionShape,
    KeywordShape,
    LiteralShape,
    Member,
    ObjectShape,
    OpaqueShape,
    SourceFile,
    TypeAlias,
    TypeReference,
    UnionShape,
)
from .type_mapper import lower_member, map_type

__all__ = [
    # Errors
    "ConversionError",
    "NoDefinitionsFound",
    "SchemaSyntaxError",
    "SourceReadError",
    "SourceSyntaxError",
    "WriteError",
    # Type AST
    "ArrayShape",
    "EmbeddedLiteral",
    "EnumDeclaration",
    "IndexedAccess",
    "IntersectionShape",
    "KeywordShape",
    "LiteralShape",
    "Member",
    "ObjectShape",
    "OpaqueShape",
    "SourceFile",
    "TypeAlias",
    "TypeReference",
    "UnionShape",
    # Source parser
    "SourceParser",
    "parse_source",
    # Lowering
    "map_type",
    "lower_member",
    "ArgsTable",
    "Lowered",
    "lower_declaration",
    "split_args_name",
    "operation_args_key",
    "ExtractionResult",
    "extract",
    # Rewriter
    "SchemaRewriter",
    "rewrite_document",
    # Hooks
    "PrePrintHook",
    "PostPrintHook",
    "AddHeaderHook",
    "FilterDefinitionsHook",
    "HookRunner",
    # Pipeline
    "ConversionResult",
    "convert_file",
    "convert_source",
]
