"""Minimal readers for manifests and change documents."""

from .manifest import FieldNotFound, Manifest, ManifestError, Scalar, UnclosedString
from .markdown import Markdown

__all__ = [
    "FieldNotFound",
    "Manifest",
    "ManifestError",
    "Markdown",
    "Scalar",
    "UnclosedString",
]
