"""Structural rewrite of the generated schema document.

The SDL produced by extraction still carries the `Mutation<Op>Args` and
`Query<Op>Args` helper types as plain object types. The rewriter turns it
into the final schema in four ordered stages:

1. Reposition: move `type Query` to the end of the document.
2. Bind Mutation arguments: `Mutation.op` receives the fields of
   `Mutation<Op>Args` as its arguments.
3. Bind Query arguments: the same for `Query.op` and `Query<Op>Args`.
4. Prune: drop every remaining `*Args` helper definition.

`*Args` definitions are matched to operation fields by their whole name,
case-insensitively.

Object types used as argument types are reclassified as input types.
Definitions are graphql-core nodes; a reclassified definition is replaced by a
new `InputObjectTypeDefinitionNode` at the same position.
"""

import logging

from graphql import (
    DefinitionNode,
    DocumentNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    TypeNode,
)

from .lowering import MUTATION, QUERY, args_key, is_args_name, operation_args_key

logger = logging.getLogger(__name__)


def named_type(type_node: TypeNode) -> str:
    """Return the name of a type after unwrapping list and non-null wrappers."""
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    if not isinstance(type_node, NamedTypeNode):
        raise TypeError(f"Expected a NamedTypeNode, got {type(type_node).__name__}")
    return type_node.name.value


def definition_name(definition: DefinitionNode) -> str | None:
    name = getattr(definition, "name", None)
    return name.value if name is not None else None


def to_input_value(field: FieldDefinitionNode | InputValueDefinitionNode) -> InputValueDefinitionNode:
    """Convert an object field into an input value (argument or input field)."""
    if isinstance(field, InputValueDefinitionNode):
        return field
    return InputValueDefinitionNode(
        description=field.description,
        name=field.name,
        directives=field.directives or (),
        type=field.type,
        default_value=None,
        loc=field.loc,
    )


def to_input_object(definition: ObjectTypeDefinitionNode) -> InputObjectTypeDefinitionNode:
    """Build the input type equivalent of an object type, keeping its fields."""
    return InputObjectTypeDefinitionNode(
        description=definition.description,
        name=definition.name,
        directives=definition.directives or (),
        fields=tuple(to_input_value(f) for f in definition.fields or ()),
        loc=definition.loc,
    )


def _with_fields(definition: ObjectTypeDefinitionNode, fields, interfaces=None) -> ObjectTypeDefinitionNode:
    return ObjectTypeDefinitionNode(
        description=definition.description,
        name=definition.name,
        interfaces=tuple(definition.interfaces or ()) if interfaces is None else tuple(interfaces),
        directives=definition.directives or (),
        fields=tuple(fields),
        loc=definition.loc,
    )


def _with_arguments(field: FieldDefinitionNode, arguments) -> FieldDefinitionNode:
    return FieldDefinitionNode(
        description=field.description,
        name=field.name,
        arguments=tuple(arguments),
        type=field.type,
        directives=field.directives or (),
        loc=field.loc,
    )


class SchemaRewriter:
    """Rewrites a parsed schema document into its final shape.

    The input document is left untouched; `rewrite()` returns a new one.
    """

    def __init__(self, document: DocumentNode):
        self.document = document
        self.definitions: list[DefinitionNode] = list(document.definitions)
        self.bound_fields: list[str] = []
        self.reclassified: list[str] = []
        self.pruned: list[str] = []

    def rewrite(self) -> DocumentNode:
        """Run all stages and return the rewritten document."""
        self.definitions = list(self.document.definitions)
        self.bound_fields = []
        self.reclassified = []
        self.pruned = []

        for operation_type in (QUERY, MUTATION):
            self._merge_duplicates(operation_type)
        self._reposition_query()

        args_index = self._index_args_definitions()
        self._bind_arguments(MUTATION, args_index)
        self._bind_arguments(QUERY, args_index)
        self._prune_args_definitions()

        return DocumentNode(definitions=tuple(self.definitions), loc=self.document.loc)

    def _find_object_type(self, name: str) -> int | None:
        """Position of the first object type named exactly `name`."""
        for position, definition in enumerate(self.definitions):
            if isinstance(definition, ObjectTypeDefinitionNode) and definition.name.value == name:
                return position
        return None

    def _merge_duplicates(self, name: str):
        """Fold repeated `type Query` / `type Mutation` definitions into the first one."""
        positions = [
            position
            for position, definition in enumerate(self.definitions)
            if isinstance(definition, ObjectTypeDefinitionNode) and definition.name.value == name
        ]
        if len(positions) < 2:
            return

        first = self.definitions[positions[0]]
        fields = list(first.fields or ())
        interfaces = list(first.interfaces or ())
        seen_fields = {f.name.value for f in fields}
        seen_interfaces = {i.name.value for i in interfaces}
        for position in positions[1:]:
            duplicate = self.definitions[position]
            for field in duplicate.fields or ():
                if field.name.value not in seen_fields:
                    fields.append(field)
                    seen_fields.add(field.name.value)
            for interface in duplicate.interfaces or ():
                if interface.name.value not in seen_interfaces:
                    interfaces.append(interface)
                    seen_interfaces.add(interface.name.value)

        logger.debug("Merging %d definitions of type %s", len(positions), name)
        self.definitions[positions[0]] = _with_fields(first, fields, interfaces)
        for position in reversed(positions[1:]):
            del self.definitions[position]

    def _reposition_query(self):
        position = self._find_object_type(QUERY)
        if position is None:
            return
        query = self.definitions.pop(position)
        self.definitions.append(query)

    def _index_args_definitions(self) -> dict[str, ObjectTypeDefinitionNode]:
        """Index `*Args` object types by their lower-cased name.

        The earliest definition wins when two names differ only by case.
        """
        index: dict[str, ObjectTypeDefinitionNode] = {}
        for definition in self.definitions:
            if not isinstance(definition, ObjectTypeDefinitionNode):
                continue
            name = definition.name.value
            if not is_args_name(name):
                continue
            key = args_key(name)
            if key in index:
                logger.warning(
                    "Ignoring %s: the same arguments are already defined by %s",
                    name, index[key].name.value,
                )
                continue
            index[key] = definition
        return index

    def _bind_arguments(self, operation_type: str, args_index: dict[str, ObjectTypeDefinitionNode]):
        """Attach `<operation_type><Field>Args` fields as arguments of each operation field."""
        position = self._find_object_type(operation_type)
        if position is None:
            return
        operation = self.definitions[position]

        fields = []
        argument_types = []
        for field in operation.fields or ():
            args_definition = args_index.get(operation_args_key(operation_type, field.name.value))
            if args_definition is None:
                fields.append(field)
                continue
            arguments = [to_input_value(f) for f in args_definition.fields or ()]
            fields.append(_with_arguments(field, arguments))
            argument_types.extend(named_type(a.type) for a in arguments)
            self.bound_fields.append(f"{operation_type}.{field.name.value}")
            logger.debug("Bound %s to %s.%s", args_definition.name.value, operation_type, field.name.value)

        self.definitions[position] = _with_fields(operation, fields)
        for type_name in argument_types:
            self._reclassify_as_input(type_name)

    def _reclassify_as_input(self, type_name: str):
        position = self._find_object_type(type_name)
        if position is None:
            # Scalar, enum, unknown or already an input type
            return
        self.definitions[position] = to_input_object(self.definitions[position])
        self.reclassified.append(type_name)
        logger.debug("Reclassified %s as an input type", type_name)

    def _prune_args_definitions(self):
        kept = []
        for definition in self.definitions:
            name = definition_name(definition)
            if name is not None and is_args_name(name):
                self.pruned.append(name)
            else:
                kept.append(definition)
        self.definitions = kept


def rewrite_document(document: DocumentNode) -> DocumentNode:
    """Rewrite a parsed schema document; see SchemaRewriter."""
    return SchemaRewriter(document).rewrite()
