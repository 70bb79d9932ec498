"""Type AST for TypeScript declaration sources.

This module defines dataclasses that represent the subset of TypeScript
declarations the converter understands: type aliases, enums and embedded
`gql`/`graphql` tagged template literals, plus the type shapes that can
appear on the right-hand side of an alias.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass
class KeywordShape:
    """A keyword type such as `string`, `number`, `boolean` or `any`."""
    keyword: str


@dataclass
class LiteralShape:
    """A literal type: `'Query'`, `42` or `true`."""
    value: str | int | float | bool


@dataclass
class TypeReference:
    """A named type, optionally with type arguments (`Maybe<User>`)."""
    name: str
    type_arguments: list["Shape"] = field(default_factory=list)


@dataclass
class IndexedAccess:
    """An indexed access type such as `Scalars['DateTime']`."""
    object_type: "Shape"
    index_type: "Shape"

    @property
    def object_name(self) -> str | None:
        """Name of the indexed type when it is a plain type reference."""
        if isinstance(self.object_type, TypeReference):
            return self.object_type.name
        return None

    @property
    def literal_key(self) -> str | None:
        """The index when it is a string literal, e.g. `DateTime`."""
        if isinstance(self.index_type, LiteralShape) and isinstance(self.index_type.value, str):
            return self.index_type.value
        return None


@dataclass
class Member:
    """A property signature inside an object type literal.

    Index signatures, mapped-type members and methods are kept as members
    with no name and/or no value shape so member order is preserved.
    """
    name: str | None
    value_shape: "Shape | None"
    optional: bool = False


@dataclass
class ObjectShape:
    """An object type literal: `{ id: string; name?: string }`."""
    members: list[Member] = field(default_factory=list)


@dataclass
class IntersectionShape:
    """An intersection type: `A & { b: string }`."""
    parts: list["Shape"] = field(default_factory=list)


@dataclass
class UnionShape:
    """A union type: `T | null`."""
    types: list["Shape"] = field(default_factory=list)


@dataclass
class ArrayShape:
    """Array suffix syntax: `T[]`."""
    element: "Shape"


@dataclass
class OpaqueShape:
    """A type the reader recognizes but does not model (functions, `keyof`, ...)."""
    text: str


Shape = Union[
    KeywordShape,
    LiteralShape,
    TypeReference,
    IndexedAccess,
    ObjectShape,
    IntersectionShape,
    UnionShape,
    ArrayShape,
    OpaqueShape,
]


@dataclass
class TypeAlias:
    """A `type Name<T> = shape` declaration."""
    name: str
    shape: Shape
    type_parameters: list[str] = field(default_factory=list)


@dataclass
class EnumDeclaration:
    """An `enum Name { A, B }` declaration; members are kept in source order."""
    name: str
    members: list[str] = field(default_factory=list)


@dataclass
class EmbeddedLiteral:
    """A `gql` or `graphql` tagged template whose text is passed through verbatim."""
    raw_text: str
    tag: str = "gql"


Declaration = Union[TypeAlias, EnumDeclaration, EmbeddedLiteral]


@dataclass
class SourceFile:
    """All recognized declarations of one source, in source order."""
    declarations: list[Declaration] = field(default_factory=list)

    @property
    def type_aliases(self) -> list[TypeAlias]:
        return [d for d in self.declarations if isinstance(d, TypeAlias)]

    @property
    def enums(self) -> list[EnumDeclaration]:
        return [d for d in self.declarations if isinstance(d, EnumDeclaration)]

    @property
    def embedded_literals(self) -> list[EmbeddedLiteral]:
        return [d for d in self.declarations if isinstance(d, EmbeddedLiteral)]
