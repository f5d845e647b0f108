"""Exception hierarchy for record/row conversion."""


class ConversionError(Exception):
    """Base exception for record/row conversion errors.

    Provides dual messaging: a sanitized user-facing message and
    internal details for logging (e.g. offending values or config keys).
    """

    def __init__(
        self,
        user_message: str,
        internal_details: str = "",
        wrapped: Exception | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details or user_message
        self.wrapped = wrapped

    def internal(self) -> str:
        return self.internal_details


class EmptyInputError(ConversionError):
    """Raised when a schema is inferred from no data."""


class InvalidSchemaError(ConversionError):
    """Raised when a type description is not a flat record of typed fields."""


class UnsupportedTypeError(ConversionError):
    """Raised when a field type has no storage-engine counterpart."""


class UnsupportedColumnNameError(ConversionError):
    """Raised when a quoted column name is not an aggregate expression."""


class UnsupportedOperationError(ConversionError):
    """Raised when a read-only view is asked to mutate."""


class InvalidRowError(ConversionError):
    """Raised when a storage row does not line up with its schema."""


class InvalidConfigError(ConversionError):
    """Raised when session configuration fails validation."""


# Sanitized user-facing error message constants
ERR_MSG_EMPTY_INPUT = "cannot infer schema from empty collection"
ERR_MSG_INVALID_SCHEMA = "only flat record types are supported"
ERR_MSG_UNSUPPORTED_TYPE = "unsupported field type"
ERR_MSG_UNSUPPORTED_COLUMN_NAME = "quoted column names are not supported"
ERR_MSG_READ_ONLY = "table columns are read-only"
ERR_MSG_INVALID_ROW = "row does not match schema"
ERR_MSG_INVALID_CONFIG = "invalid session config"
