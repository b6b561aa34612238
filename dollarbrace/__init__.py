"""
dollarbrace: recursive ${...} placeholder substitution.

Example:
    from dollarbrace import get_filter, OneOfResolver

    property_filter = get_filter(OneOfResolver(), {"host": "localhost"})
    property_filter.substitute("${host}:${oneof:${port},8080}")
    -> "localhost:8080"
"""

from dollarbrace.lib.errors import (
    CircularResolutionError,
    DollarBraceError,
    ExpressionEvaluationError,
    FilterIOError,
    PropertyNotFoundError,
    ResolutionError,
)
from dollarbrace.lib.parser import (
    CompoundResolver,
    EnvironmentResolver,
    ExpressionResolver,
    Filter,
    OneOfResolver,
    PropertiesResolver,
    PropertyFilter,
    PropertyResolver,
    RawResolver,
    SimplePropertyResolver,
    SystemPropertyResolver,
    XmlPropertyResolver,
    get_filter,
    tokens_split,
)
from dollarbrace.models.dataModel import Token

__all__ = [
    "CircularResolutionError",
    "DollarBraceError",
    "ExpressionEvaluationError",
    "FilterIOError",
    "PropertyNotFoundError",
    "ResolutionError",
    "CompoundResolver",
    "EnvironmentResolver",
    "ExpressionResolver",
    "Filter",
    "OneOfResolver",
    "PropertiesResolver",
    "PropertyFilter",
    "PropertyResolver",
    "RawResolver",
    "SimplePropertyResolver",
    "SystemPropertyResolver",
    "XmlPropertyResolver",
    "Token",
    "get_filter",
    "tokens_split",
]
