"""TypeScript declaration reader.

Parses TypeScript source with tree-sitter's TSX grammar and produces a
SourceFile of the declarations the converter understands:

    export type Scalars = { DateTime: any };
    export type User = { id: Scalars['ID']; name?: Maybe<string> };
    export enum Role { Admin = 'ADMIN', User = 'USER' }
    const typeDefs = gql`type Query { ping: String }`;

The whole syntax tree is walked in document order, so declarations nested in
namespaces or `declare module` blocks are found too. Everything else
(imports, functions, interfaces, JSX, runtime code) is stepped over. A
declaration that contains a syntax error is skipped with a warning; a source
in which nothing could be read at all raises SourceSyntaxError.
"""

import logging

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .errors import SourceSyntaxError
from .type_ast import (
    ArrayShape,
    Declaration,
    EmbeddedLiteral,
    EnumDeclaration,
    IndexedAccess,
    IntersectionShape,
    KeywordShape,
    LiteralShape,
    Member,
    ObjectShape,
    OpaqueShape,
    Shape,
    SourceFile,
    TypeAlias,
    TypeReference,
    UnionShape,
)

logger = logging.getLogger(__name__)

TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

# Template tags whose text is SDL
SCHEMA_TAGS = ("gql", "graphql")

# Literal types that behave like keywords
KEYWORD_LITERALS = ("null", "undefined")

# Type annotations on index signatures and mapped types; `?:` and `+?:` make the member optional
ANNOTATION_TYPES = {
    "type_annotation": False,
    "omitting_type_annotation": False,
    "opting_type_annotation": True,
    "adding_type_annotation": True,
}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


def _text(node: Node) -> str:
    return node.text.decode("utf-8")


def _children(node: Node) -> list[Node]:
    """Named children without comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _position(node: Node) -> tuple[int, int]:
    row, column = node.start_point
    return row + 1, column + 1


def _unquote(node: Node) -> str:
    text = _text(node)
    if node.type == "string" and len(text) >= 2:
        return text[1:-1]
    return text


def _cook_escape(sequence: str) -> str:
    """Value of a single escape sequence inside a template literal."""
    body = sequence[1:]
    if body in _ESCAPES:
        return _ESCAPES[body]
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if body[:1] in ("x", "u") and len(body) > 1:
        return chr(int(body[1:], 16))
    if body in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        # Line continuation
        return ""
    return body


def _number_value(text: str) -> int | float:
    text = text.replace("_", "").replace(" ", "").rstrip("n")
    try:
        return int(text, 0)
    except ValueError:
        return float(text)


class SourceParser:
    """Parses TypeScript declaration source into a SourceFile."""

    def __init__(self, source: str):
        """Initialize a parser with the full source text."""
        self.source = source
        self.parser = Parser(TSX_LANGUAGE)

    def parse(self) -> SourceFile:
        """Walk the whole syntax tree and return its recognized declarations.

        Raises:
            SourceSyntaxError: If the source has syntax errors and not a single
                declaration could be read
        """
        tree = self.parser.parse(self.source.encode("utf-8"))
        root = tree.root_node
        declarations: list[Declaration] = []

        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR":
                line, column = _position(node)
                logger.warning("Skipping unparsable source at line %d, column %d", line, column)
                continue
            declaration = self._read_declaration(node)
            if declaration is not None:
                declarations.append(declaration)
            if node.type in ("type_alias_declaration", "enum_declaration"):
                continue
            stack.extend(reversed(node.children))

        if root.has_error and not declarations:
            node = _first_error(root)
            line, column = _position(node)
            raise SourceSyntaxError(f"Cannot parse source near {_text(node)[:40]!r}", line, column)

        return SourceFile(declarations=declarations)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _read_declaration(self, node: Node) -> Declaration | None:
        if node.type == "type_alias_declaration":
            return self._read_type_alias(node)
        if node.type == "enum_declaration":
            return self._read_enum(node)
        if node.type == "call_expression":
            return self._read_embedded_literal(node)
        return None

    def _read_type_alias(self, node: Node) -> TypeAlias | None:
        name_node = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        name = _text(name_node) if name_node is not None else "<anonymous>"
        if node.has_error or value is None:
            line, _ = _position(node)
            logger.warning("Skipping type alias %s at line %d: syntax error", name, line)
            return None
        return TypeAlias(
            name=name,
            shape=self._read_shape(value),
            type_parameters=self._read_type_parameters(node.child_by_field_name("type_parameters")),
        )

    def _read_type_parameters(self, node: Node | None) -> list[str]:
        if node is None:
            return []
        names = []
        for parameter in _children(node):
            name = parameter.child_by_field_name("name")
            if name is not None:
                names.append(_text(name))
        return names

    def _read_enum(self, node: Node) -> EnumDeclaration | None:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        name = _text(name_node) if name_node is not None else "<anonymous>"
        if node.has_error or name_node is None or body is None:
            line, _ = _position(node)
            logger.warning("Skipping enum %s at line %d: syntax error", name, line)
            return None
        members = []
        for member in _children(body):
            if member.type == "enum_assignment":
                member = member.child_by_field_name("name")
            members.append(_unquote(member))
        return EnumDeclaration(name=name, members=members)

    def _read_embedded_literal(self, node: Node) -> EmbeddedLiteral | None:
        tag = node.child_by_field_name("function")
        template = node.child_by_field_name("arguments")
        if tag is None or tag.type != "identifier" or _text(tag) not in SCHEMA_TAGS:
            return None
        if template is None or template.type != "template_string":
            return None
        if template.has_error:
            line, _ = _position(node)
            logger.warning("Skipping %s template at line %d: syntax error", _text(tag), line)
            return None
        return EmbeddedLiteral(raw_text=self._cooked_template(template), tag=_text(tag))

    def _cooked_template(self, template: Node) -> str:
        """Template text with escapes applied and `${...}` substitutions dropped."""
        source = template.text
        offset = template.start_byte
        parts = []
        position = 1
        for child in template.named_children:
            if child.type not in ("escape_sequence", "template_substitution"):
                continue
            start = child.start_byte - offset
            parts.append(source[position:start].decode("utf-8"))
            if child.type == "escape_sequence":
                parts.append(_cook_escape(_text(child)))
            position = child.end_byte - offset
        parts.append(source[position:-1].decode("utf-8"))
        return "".join(parts)

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def _read_shape(self, node: Node) -> Shape:
        kind = node.type

        if kind == "predefined_type":
            return KeywordShape(keyword=_text(node))
        if kind in ("type_identifier", "nested_type_identifier"):
            return TypeReference(name=_text(node))
        if kind == "generic_type":
            arguments = node.child_by_field_name("type_arguments")
            return TypeReference(
                name=_text(node.child_by_field_name("name")),
                type_arguments=[self._read_shape(a) for a in _children(arguments)] if arguments is not None else [],
            )
        if kind == "literal_type":
            return self._read_literal(node)
        if kind == "object_type":
            return ObjectShape(members=[self._read_member(m) for m in _children(node)])
        if kind in ("union_type", "intersection_type"):
            operands = [self._read_shape(t) for t in self._flatten(node, kind)]
            if len(operands) == 1:
                return operands[0]
            if kind == "union_type":
                return UnionShape(types=operands)
            return IntersectionShape(parts=operands)
        if kind == "array_type":
            return ArrayShape(element=self._read_shape(_children(node)[0]))
        if kind == "lookup_type":
            object_type, index_type = _children(node)
            return IndexedAccess(object_type=self._read_shape(object_type), index_type=self._read_shape(index_type))
        if kind in ("parenthesized_type", "readonly_type"):
            return self._read_shape(_children(node)[0])
        # Function, conditional, tuple, keyof, typeof, template literal types
        return OpaqueShape(text=_text(node))

    def _flatten(self, node: Node, kind: str) -> list[Node]:
        """Operands of a left-nested `A | B | C` (or `&`) chain."""
        operands = []
        for child in _children(node):
            if child.type == kind:
                operands.extend(self._flatten(child, kind))
            else:
                operands.append(child)
        return operands

    def _read_literal(self, node: Node) -> Shape:
        value = _children(node)[0] if _children(node) else node
        if value.type in KEYWORD_LITERALS:
            return KeywordShape(keyword=value.type)
        if value.type == "string":
            return LiteralShape(value=_unquote(value))
        if value.type in ("true", "false"):
            return LiteralShape(value=value.type == "true")
        if value.type in ("number", "unary_expression"):
            return LiteralShape(value=_number_value(_text(value)))
        return OpaqueShape(text=_text(node))

    def _read_member(self, node: Node) -> Member:
        if node.type == "property_signature":
            annotation = node.child_by_field_name("type")
            return Member(
                name=_unquote(node.child_by_field_name("name")),
                value_shape=self._read_shape(_children(annotation)[0]) if annotation is not None else None,
                optional=any(child.type == "?" for child in node.children),
            )
        if node.type == "method_signature":
            return Member(
                name=_unquote(node.child_by_field_name("name")),
                value_shape=None,
                optional=any(child.type == "?" for child in node.children),
            )
        if node.type == "index_signature":
            # Index signature or mapped type member
            annotation = node.child_by_field_name("type")
            if annotation is None or annotation.type not in ANNOTATION_TYPES:
                return Member(name=None, value_shape=None)
            return Member(
                name=None,
                value_shape=self._read_shape(_children(annotation)[0]),
                optional=ANNOTATION_TYPES[annotation.type],
            )
        # Call and construct signatures
        return Member(name=None, value_shape=None)


def _first_error(node: Node) -> Node:
    """The first ERROR or missing node below `node`, in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(reversed([c for c in current.children if c.has_error or c.is_missing]))
    return node


def parse_source(source: str) -> SourceFile:
    """Parse TypeScript declaration source into a SourceFile."""
    return SourceParser(source).parse()
