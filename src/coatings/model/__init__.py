from __future__ import annotations

from coatings.model.application import (
    UNRESOLVED_REVISION,
    WILDCARD,
    ApplicationBundle,
    ApplicationSpecification,
    PreloadDirective,
    StyleReference,
    normalize_application_id,
)
from coatings.model.diagnostic import Diagnostic, ErrorKind, Severity
from coatings.model.page import (
    ContentModel,
    Namespace,
    Page,
    PageTitle,
    default_content_model,
)

__all__ = [
    # page
    "Namespace",
    "ContentModel",
    "PageTitle",
    "Page",
    "default_content_model",
    # application
    "WILDCARD",
    "UNRESOLVED_REVISION",
    "StyleReference",
    "PreloadDirective",
    "ApplicationSpecification",
    "ApplicationBundle",
    "normalize_application_id",
    # diagnostic
    "Severity",
    "ErrorKind",
    "Diagnostic",
]
