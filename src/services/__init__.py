"""Service layer: catalog scanning, reporting and page assembly."""

from .aggregator import compute_totals
from .catalog import ARCHIVE_SUFFIX, CatalogService, archive_date, sort_newest_first
from .config import ConfigurationService, ValidationResult
from .counts import CountIndex
from .errors import (
    AppError,
    ConfigurationError,
    ErrorCategory,
    ErrorHandlingService,
    ErrorSeverity,
    FileSystemError,
    TemplateError,
    UserFriendlyError,
    ValidationError,
    get_error_service,
)
from .filesystem import FileSystemService
from .index_builder import IndexBuilderService
from .reporter import ReporterService
from .templates import TemplateSet

__all__ = [
    "ARCHIVE_SUFFIX",
    "AppError",
    "CatalogService",
    "ConfigurationError",
    "ConfigurationService",
    "CountIndex",
    "ErrorCategory",
    "ErrorHandlingService",
    "ErrorSeverity",
    "FileSystemError",
    "FileSystemService",
    "IndexBuilderService",
    "ReporterService",
    "TemplateError",
    "TemplateSet",
    "UserFriendlyError",
    "ValidationError",
    "ValidationResult",
    "archive_date",
    "compute_totals",
    "get_error_service",
    "sort_newest_first",
]
