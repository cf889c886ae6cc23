"""Dispatch core: the root API class and its supporting machinery.

Modules:
    base: :class:`API`, the root of every API surface (options, callbacks,
        execution pipeline, request helpers).
    meta: :class:`APIMeta`, which classifies and wraps request methods.
    factory: :class:`Namespace` and :class:`Factory` for scoped sub-APIs.
    arguments: :class:`Arguments`, the request argument parser.
"""

from hubapi.api.arguments import Arguments
from hubapi.api.base import API
from hubapi.api.factory import Factory, Namespace, extract_class_name
from hubapi.api.meta import APIMeta, helper

__all__ = [
    "API",
    "APIMeta",
    "Arguments",
    "Factory",
    "Namespace",
    "extract_class_name",
    "helper",
]
