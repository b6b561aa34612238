"""
Parser package for dollarbrace ${...} substitution.

Provides the tokenizer, the filtering engine and the resolvers that turn
property names into values.
"""

from .tokenizer import tokens_split, placeholders_scan
from .base import (
    Filter,
    PropertyFilter,
    PropertyResolver,
    ResolutionSession,
    get_filter,
)
from .resolvers import (
    CompoundResolver,
    OneOfResolver,
    PropertiesResolver,
    RawResolver,
    SimplePropertyResolver,
)
from .lookup import EnvironmentResolver, SystemPropertyResolver, XmlPropertyResolver
from .expression import ExpressionResolver

__all__ = [
    "tokens_split",
    "placeholders_scan",
    "Filter",
    "PropertyFilter",
    "PropertyResolver",
    "ResolutionSession",
    "get_filter",
    "CompoundResolver",
    "OneOfResolver",
    "PropertiesResolver",
    "RawResolver",
    "SimplePropertyResolver",
    "EnvironmentResolver",
    "SystemPropertyResolver",
    "XmlPropertyResolver",
    "ExpressionResolver",
]
