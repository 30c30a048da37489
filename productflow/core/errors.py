"""Custom exceptions used across ProductFlow."""


class ProductFlowError(Exception):
    """Base error for the application."""


class ConfigError(ProductFlowError):
    """Configuration related error."""


class FileRejectedError(ProductFlowError):
    """Raised when an uploaded file cannot become a dataset."""


class UnsupportedFileType(FileRejectedError):
    """Raised before parsing when the file is not CSV-like."""


class ParseFailure(FileRejectedError):
    """Raised when the file content is malformed."""


class EmptyDataset(ParseFailure):
    """Raised when parsing yields no header row or no non-empty rows."""


class MappingError(ProductFlowError):
    """Raised when a mapping names an unknown source or target header."""


class RowIndexError(ProductFlowError, IndexError):
    """Raised when a cell edit addresses a row or header that does not exist."""


class ExportError(ProductFlowError):
    """Raised when export is requested without data or in an unknown format."""
