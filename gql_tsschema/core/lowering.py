"""Lowering of TypeScript declarations to SDL fragments.

Each top-level declaration produces at most one SDL fragment. Declarations
named `Mutation<Op>Args` or `Query<Op>Args` additionally produce an
argument-list fragment that is collected into an ArgsTable.
"""

import re
from dataclasses import dataclass

from .type_ast import (
    Declaration,
    EmbeddedLiteral,
    EnumDeclaration,
    IntersectionShape,
    Member,
    ObjectShape,
    Shape,
    TypeAlias,
)
from .type_mapper import SCALARS_TYPE, lower_member

QUERY = "Query"
MUTATION = "Mutation"

ARGS_NAME_PATTERN = re.compile(r"^(Mutation|Query)(\w+)Args$", re.IGNORECASE)


def split_args_name(name: str) -> tuple[str, str] | None:
    """Split `QuerygetUserArgs` into `("Query", "getUser")`.

    The convention is matched case-insensitively; the parts are returned as
    written. Returns None when the name does not follow it.
    """
    match = ARGS_NAME_PATTERN.match(name)
    if not match:
        return None
    return match.group(1), match.group(2)


def is_args_name(name: str) -> bool:
    return split_args_name(name) is not None


def args_key(declaration_name: str) -> str:
    """Normalized key of an `*Args` declaration name."""
    return declaration_name.lower()


def operation_args_key(operation_type: str, field_name: str) -> str:
    """Key of the `*Args` declaration that belongs to `operation_type.field_name`."""
    return args_key(f"{operation_type}{field_name}Args")


class ArgsTable:
    """Argument-list fragments of `*Args` declarations, keyed by declaration name."""

    def __init__(self):
        self._fragments: dict[str, str] = {}

    def add(self, declaration_name: str, fragment: str):
        """Record the argument-list fragment of an `*Args` declaration."""
        if not is_args_name(declaration_name):
            raise ValueError(f"Not an arguments declaration name: {declaration_name}")
        self._fragments[declaration_name] = fragment

    def names(self) -> list[str]:
        return list(self._fragments)

    def __getitem__(self, declaration_name: str) -> str:
        return self._fragments[declaration_name]


@dataclass
class Lowered:
    """Result of lowering one declaration."""
    fragment: str = ""
    args_name: str | None = None
    args_fragment: str = ""


def _object_members(shape: Shape) -> list[Member] | None:
    """Members of an object shape, or of the first object part of an intersection."""
    if isinstance(shape, ObjectShape):
        return shape.members
    if isinstance(shape, IntersectionShape):
        for part in shape.parts:
            if isinstance(part, ObjectShape):
                return part.members
    return None


def _lower_members(members: list[Member]) -> list[str]:
    lines = (lower_member(m) for m in members)
    return [line for line in lines if line]


def lower_scalars(alias: TypeAlias) -> str:
    """`type Scalars = { A: ...; B: ... }` becomes `scalar A` and `scalar B`."""
    if not isinstance(alias.shape, ObjectShape):
        return ""
    names = [m.name for m in alias.shape.members if m.name]
    return "".join(f"scalar {name}\n" for name in names)


def lower_arguments(alias: TypeAlias) -> str:
    """Render an `*Args` declaration as `(id: String!, limit: Int)`."""
    members = _object_members(alias.shape)
    if not members:
        return ""
    lines = _lower_members(members)
    if not lines:
        return ""
    return "(" + ", ".join(line.strip() for line in lines) + ")"


def lower_object_type(alias: TypeAlias) -> str:
    members = _object_members(alias.shape)
    if not members:
        return ""
    lines = _lower_members(members)
    if not lines:
        return ""
    body = "\n".join(lines)
    return f"type {alias.name} {{\n{body}\n}}\n"


def lower_enum(enum: EnumDeclaration) -> str:
    if not enum.members:
        return ""
    values = ", ".join(member.upper() for member in enum.members)
    return f"enum {enum.name} {{\n{values}\n}}\n"


def lower_declaration(declaration: Declaration) -> Lowered:
    """Lower one declaration to its SDL fragment.

    `*Args` declarations yield both their argument-list fragment and a
    regular `type` fragment; the type is bound to its operation field and
    pruned later by the schema rewriter.
    """
    if isinstance(declaration, EmbeddedLiteral):
        if not declaration.raw_text.strip():
            return Lowered()
        return Lowered(fragment=declaration.raw_text + "\n")

    if isinstance(declaration, EnumDeclaration):
        return Lowered(fragment=lower_enum(declaration))

    if isinstance(declaration, TypeAlias):
        if declaration.name == SCALARS_TYPE:
            return Lowered(fragment=lower_scalars(declaration))
        lowered = Lowered(fragment=lower_object_type(declaration))
        if is_args_name(declaration.name):
            lowered.args_name = declaration.name
            lowered.args_fragment = lower_arguments(declaration)
        return lowered

    return Lowered()
