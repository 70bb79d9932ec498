"""Convert TypeScript type declarations to a GraphQL schema."""

__version__ = "0.1.0"
