"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    DEFAULT_BASENAME,
    DEFAULT_DOCUMENT_TITLE,
    HTML_TEMPLATE,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "DEFAULT_BASENAME",
    "DEFAULT_DOCUMENT_TITLE",
    "HTML_TEMPLATE",
]
