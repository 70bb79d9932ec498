"""Tests for conversion hooks."""

import pytest
from graphql import parse

from gql_tsschema.core.hooks import (
    AddHeaderHook,
    FilterDefinitionsHook,
    HookRunner,
    PostPrintHook,
    PrePrintHook,
)


@pytest.fixture
def sample_document():
    """Create a sample schema document for testing."""
    return parse(
        """
        scalar _Any
        enum Status { ACTIVE }
        enum _Internal { X }
        type User { id: ID! }
        type _Meta { version: String }
        input CreateUserInput { name: String }
        input _DebugInput { flag: Boolean }
        type Query { user: User }
        """
    )


def names(document):
    return [d.name.value for d in document.definitions]


class TestAddHeaderHook:
    """Tests for AddHeaderHook."""

    def test_adds_header(self):
        hook = AddHeaderHook("Auto-generated")
        result = hook.post_print("type User {\n  id: ID\n}\n")
        assert result.startswith("# Auto-generated\n\n")

    def test_preserves_content(self):
        hook = AddHeaderHook("Header")
        content = "type User {\n  id: ID\n}\n"
        assert hook.post_print(content).endswith(content)

    def test_existing_comment_lines_are_kept(self):
        hook = AddHeaderHook("# Line 1\nLine 2\n")
        assert hook.post_print("scalar Date\n") == "# Line 1\n# Line 2\n\nscalar Date\n"


class TestFilterDefinitionsHook:
    """Tests for FilterDefinitionsHook."""

    def test_exclude_prefix(self, sample_document):
        hook = FilterDefinitionsHook(exclude_prefix="_")
        result = hook.pre_print(sample_document)
        assert names(result) == ["Status", "User", "CreateUserInput", "Query"]

    def test_exclude_suffix(self, sample_document):
        hook = FilterDefinitionsHook(exclude_suffix="Input")
        result = hook.pre_print(sample_document)
        assert "CreateUserInput" not in names(result)
        assert "_DebugInput" not in names(result)

    def test_include_prefix_keeps_operations(self, sample_document):
        hook = FilterDefinitionsHook(include_prefix="Create")
        result = hook.pre_print(sample_document)
        assert names(result) == ["CreateUserInput", "Query"]


class TestHookRunner:
    """Tests for HookRunner."""

    def test_run_pre_print_hooks(self, sample_document):
        runner = HookRunner()
        runner.add_pre_print_hook(FilterDefinitionsHook(exclude_prefix="_"))
        result = runner.run_pre_print_hooks(sample_document)
        assert "_Meta" not in names(result)

    def test_run_post_print_hooks(self):
        runner = HookRunner()
        runner.add_post_print_hook(AddHeaderHook("Header"))
        assert runner.run_post_print_hooks("scalar Date\n").startswith("# Header")

    def test_multiple_post_print_hooks(self):
        runner = HookRunner()
        runner.add_post_print_hook(AddHeaderHook("Line 1"))
        runner.add_post_print_hook(AddHeaderHook("Line 0"))
        result = runner.run_post_print_hooks("scalar Date\n")
        # Second header wraps the first
        assert result.index("# Line 0") < result.index("# Line 1")

    def test_no_hooks(self):
        assert HookRunner().run_post_print_hooks("scalar Date\n") == "scalar Date\n"


class TestProtocolCompliance:
    """Tests for protocol compliance."""

    def test_add_header_is_post_print_hook(self):
        assert isinstance(AddHeaderHook("header"), PostPrintHook)

    def test_filter_is_pre_print_hook(self):
        assert isinstance(FilterDefinitionsHook(), PrePrintHook)

    def test_custom_pre_print_hook(self):
        class CustomHook:
            def pre_print(self, document):
                return document

        assert isinstance(CustomHook(), PrePrintHook)
