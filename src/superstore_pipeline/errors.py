"""
Exceptions raised by the Superstore sales pipeline.

Row-level problems (an unparsable order date) are recoverable under the
``skip`` policy. Structural problems (a record that does not fit the fixed
14-field schema) always abort the run.
"""


class SalesPipelineError(Exception):
    """Base exception for all Superstore pipeline errors."""

    pass


class ConfigurationError(SalesPipelineError):
    """Raised when the pipeline configuration is missing or invalid."""

    pass


class SchemaMismatchError(SalesPipelineError):
    """Raised when a source record does not match the fixed raw schema."""

    def __init__(self, message, field_name=None, value=None, line=None):
        self.field_name = field_name
        self.value = value
        self.line = line

        parts = [message]
        if field_name:
            parts.append(f"Field: {field_name}")
        if value is not None:
            parts.append(f"Value: {value!r}")
        if line is not None:
            parts.append(f"Line: {line!r}")

        super().__init__(" | ".join(parts))


class DateParseError(SalesPipelineError, ValueError):
    """Raised when an order date is not in YYYY-MM-DD form."""

    def __init__(self, message, value=None, order_id=None):
        self.value = value
        self.order_id = order_id
        super().__init__(message)


class DivisionByZeroError(SalesPipelineError, ZeroDivisionError):
    """Raised when a profit margin is derived for a record with zero sales."""

    def __init__(self, message, order_id=None):
        self.order_id = order_id
        super().__init__(message)


class OutputValidationError(SalesPipelineError):
    """Raised when a finished run did not produce every expected output."""

    def __init__(self, message, paths=None):
        self.paths = list(paths or [])
        super().__init__(message)
