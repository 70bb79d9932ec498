"""Exceptions raised while converting TypeScript declarations to SDL."""


class ConversionError(Exception):
    """Base class for errors that abort a conversion run."""


class SourceReadError(ConversionError):
    """Exception raised when the input source cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading {path}: {reason}")


class SourceSyntaxError(ConversionError):
    """Exception raised when the declaration source cannot be parsed as TypeScript."""

    def __init__(self, message: str, line: int, column: int):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column})")


class NoDefinitionsFound(ConversionError):
    """Exception raised when a source yields no schema definitions at all."""

    def __init__(self, message: str = "No GraphQL type definitions found in the source."):
        super().__init__(message)


class SchemaSyntaxError(ConversionError):
    """Exception raised when the generated SDL is rejected by the schema parser."""

    def __init__(self, message: str, schema_text: str):
        self.message = message
        self.schema_text = schema_text
        super().__init__(message)


class WriteError(ConversionError):
    """Exception raised when the converted schema cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error writing {path}: {reason}")
