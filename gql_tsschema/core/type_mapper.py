"""Maps TypeScript type shapes to GraphQL type names.

Only a fixed set of wrappers is understood: `Maybe<T>` is unwrapped,
`Array<T>` becomes a list, and `Scalars['X']` / `Scalars<'X'>` name a
custom scalar. Anything else degrades to `Unknown` with a warning.
"""

import logging

from .type_ast import (
    IndexedAccess,
    KeywordShape,
    LiteralShape,
    Member,
    ObjectShape,
    Shape,
    TypeReference,
)

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"

KEYWORD_SCALARS = {
    "string": "String",
    "number": "Int",
    "boolean": "Boolean",
    "any": "String",
}

SCALARS_TYPE = "Scalars"
MAYBE_TYPE = "Maybe"
ARRAY_TYPE = "Array"


def _fallback(shape: Shape | None) -> str:
    logger.warning("Cannot map type %r to a GraphQL type; using %s", shape, UNKNOWN)
    return UNKNOWN


def map_type(shape: Shape | None) -> str:
    """Return the GraphQL type name for a TypeScript type shape.

    Nullability is not expressed here: `Maybe<T>` maps to the same name as
    `T`, the non-null marker comes from the enclosing member.
    """
    if isinstance(shape, ObjectShape):
        return "String"
    if isinstance(shape, KeywordShape):
        if shape.keyword in KEYWORD_SCALARS:
            return KEYWORD_SCALARS[shape.keyword]
        return _fallback(shape)
    if isinstance(shape, TypeReference):
        return _map_reference(shape)
    if isinstance(shape, IndexedAccess):
        return _map_indexed_access(shape)
    return _fallback(shape)


def _map_reference(shape: TypeReference) -> str:
    if shape.name == SCALARS_TYPE:
        if shape.type_arguments:
            argument = shape.type_arguments[0]
            if isinstance(argument, LiteralShape) and isinstance(argument.value, str):
                return argument.value
        return _fallback(shape)

    if shape.name == MAYBE_TYPE:
        if not shape.type_arguments:
            return _fallback(shape)
        return map_type(shape.type_arguments[0])

    if shape.name == ARRAY_TYPE:
        if not shape.type_arguments:
            return _fallback(shape)
        return f"[{map_type(shape.type_arguments[0])}]"

    # User-defined type, lowered elsewhere
    return shape.name


def _map_indexed_access(shape: IndexedAccess) -> str:
    if isinstance(shape.object_type, IndexedAccess):
        # Scalars['ID']['input']
        return _map_indexed_access(shape.object_type)
    if shape.object_name == SCALARS_TYPE:
        if shape.literal_key is not None:
            return shape.literal_key
        return _fallback(shape)
    if shape.object_name is not None:
        return shape.object_name
    return _fallback(shape)


def lower_member(member: Member) -> str:
    """Render a member as an SDL field line: `  name: Type!`.

    The `!` marker is written when the member is *not* optional. Members
    without a name or a type render as an empty string.
    """
    if not member.name or member.value_shape is None:
        return ""
    marker = "" if member.optional else "!"
    return f"  {member.name}: {map_type(member.value_shape)}{marker}"
