"""Conversion hooks for customizing the generated schema.

Provides protocols for hooks that run on the rewritten schema document
before it is printed, and on the printed SDL text afterwards.

Example usage:
    from gql_tsschema.core.hooks import HookRunner, AddHeaderHook, FilterDefinitionsHook

    hooks = HookRunner()
    hooks.add_pre_print_hook(FilterDefinitionsHook(exclude_prefix="_"))
    hooks.add_post_print_hook(AddHeaderHook("# Generated from schema.ts - do not edit"))
"""

from typing import Protocol, runtime_checkable

from graphql import DocumentNode

from .rewriter import definition_name


@runtime_checkable
class PrePrintHook(Protocol):
    """Protocol for hooks that run on the rewritten document.

    Example:
        class DropDeprecated(PrePrintHook):
            def pre_print(self, document: DocumentNode) -> DocumentNode:
                ...
    """

    def pre_print(self, document: DocumentNode) -> DocumentNode:
        """Called after rewriting, before the document is printed.

        Args:
            document: The rewritten schema document

        Returns:
            The (possibly modified) document to print
        """
        ...


@runtime_checkable
class PostPrintHook(Protocol):
    """Protocol for hooks that transform the printed SDL."""

    def post_print(self, sdl: str) -> str:
        """Called with the printed SDL; returns the text to write."""
        ...


class AddHeaderHook:
    """Built-in hook to add a comment header to the printed schema.

    Lines that are not already SDL comments are prefixed with `# `.

    Example:
        hook = AddHeaderHook("Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_print(self, sdl: str) -> str:
        """Add the header to the beginning of the schema."""
        lines = [
            line if line.startswith("#") else f"# {line}".rstrip()
            for line in self.header.rstrip("\n").splitlines()
        ]
        return "\n".join(lines) + "\n\n" + sdl


class FilterDefinitionsHook:
    """Built-in hook to filter definitions by name prefix/suffix.

    `Query` and `Mutation` are never filtered out.

    Example:
        # Remove all definitions starting with underscore
        hook = FilterDefinitionsHook(exclude_prefix="_")
    """

    KEEP = ("Query", "Mutation")

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str | None) -> bool:
        """Check if a definition should be kept."""
        if name is None or name in self.KEEP:
            return True
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_print(self, document: DocumentNode) -> DocumentNode:
        """Filter definitions from the document."""
        definitions = tuple(
            d for d in document.definitions if self._should_include(definition_name(d))
        )
        return DocumentNode(definitions=definitions, loc=document.loc)


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_print_hooks: list[PrePrintHook] = []
        self.post_print_hooks: list[PostPrintHook] = []

    def add_pre_print_hook(self, hook: PrePrintHook):
        """Add a hook that runs on the rewritten document."""
        self.pre_print_hooks.append(hook)

    def add_post_print_hook(self, hook: PostPrintHook):
        """Add a hook that runs on the printed SDL."""
        self.post_print_hooks.append(hook)

    def run_pre_print_hooks(self, document: DocumentNode) -> DocumentNode:
        """Run all document hooks in order."""
        for hook in self.pre_print_hooks:
            document = hook.pre_print(document)
        return document

    def run_post_print_hooks(self, sdl: str) -> str:
        """Run all SDL hooks in order."""
        for hook in self.post_print_hooks:
            sdl = hook.post_print(sdl)
        return sdl
