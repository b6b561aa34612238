"""
Property resolvers for dollarbrace.

Implements the resolution strategies and the ways of combining them:
- Lookup tables: static mappings with optional filtering of key and value
- Compound: an ordered chain of resolvers, first answer wins
- Oneof: the first of several comma separated alternatives that resolves
- Raw: passes text through unexpanded, the only way to emit a literal "${"

Resolvers hold configuration only. All per-call state lives in the
`PropertyFilter` they are handed, so one resolver may serve many
concurrent filters.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, Self
from dollarbrace.config.settings import appsettings
from dollarbrace.lib.errors import CircularResolutionError, PropertyNotFoundError
from dollarbrace.lib.log import LOG
from dollarbrace.lib.parser.base import PropertyFilter, PropertyResolver, prefix_matches
from dollarbrace.lib.parser.tokenizer import tokens_split


class SimplePropertyResolver(ABC):
    """Base for table-like resolvers.

    Wraps a plain `property_get` lookup with the filtering protocol:
    the requested name is substituted first, so "${key_${suffix}}" looks up
    a computed key, and the value found is substituted too, so values may
    refer to other properties.

    Attributes:
        prefix: Required name prefix, stripped before lookup, or None
        filter_name: Substitute placeholders in the name before lookup
        filter_result: Substitute placeholders in the value found
    """

    def __init__(
        self: Self,
        prefix: Optional[str] = None,
        filter_name: bool = True,
        filter_result: bool = True,
    ) -> None:
        self.prefix: Optional[str] = prefix
        self.filter_name: bool = filter_name
        self.filter_result: bool = filter_result

    def resolve(self: Self, name: str, property_filter: PropertyFilter) -> Optional[str]:
        if self.prefix:
            if not name.startswith(self.prefix):
                return None
            name = name[len(self.prefix) :]
        if self.filter_name:
            name = property_filter.substitute(name)

        value: Optional[str] = self.property_get(name)
        if value is None:
            return None
        if self.filter_result:
            return property_filter.substitute(value)
        return value

    @abstractmethod
    def property_get(self: Self, name: str) -> Optional[str]:
        """Look up `name`, returning None when it is unknown."""
        ...


class PropertiesResolver(SimplePropertyResolver):
    """Resolver backed by a static key to value mapping.

    The mapping is copied on construction and exposed read-only.
    """

    def __init__(
        self: Self,
        properties: Mapping[str, str],
        prefix: Optional[str] = None,
        filter_name: bool = True,
        filter_result: bool = True,
    ) -> None:
        super().__init__(prefix, filter_name, filter_result)
        self.properties: Mapping[str, str] = MappingProxyType(dict(properties))

    def property_get(self: Self, name: str) -> Optional[str]:
        return self.properties.get(name)


class CompoundResolver:
    """Ordered chain of resolvers.

    Resolvers are asked in insertion order and the first answer that is not
    None wins. A resolver whose prefix does not match the name is skipped
    without being called; a resolver without a prefix is asked about every
    name. A `PropertyNotFoundError` from one resolver only moves the search
    on to the next; circular resolution errors propagate immediately.

    Attributes:
        resolvers: The chain, nested compound resolvers flattened
        prefix: Always None, a chain may answer any name
    """

    prefix: Optional[str] = None

    def __init__(self: Self, *resolvers: PropertyResolver) -> None:
        chain: list[PropertyResolver] = []
        for resolver in resolvers:
            if isinstance(resolver, CompoundResolver):
                chain.extend(resolver.resolvers)
            else:
                chain.append(resolver)
        self.resolvers: tuple[PropertyResolver, ...] = tuple(chain)

    def resolve(self: Self, name: str, property_filter: PropertyFilter) -> str:
        last_error: Optional[PropertyNotFoundError] = None

        for resolver in self.resolvers:
            if not prefix_matches(resolver, name):
                continue
            try:
                value: Optional[str] = resolver.resolve(name, property_filter)
            except PropertyNotFoundError as e:
                LOG(f"{type(resolver).__name__} could not resolve '{name}': {e}")
                last_error = e
                continue
            if value is not None:
                return value

        raise PropertyNotFoundError(name, last_error)


class OneOfResolver:
    """Resolver selecting the first alternative that fully resolves.

    Handles names of the form "oneof:A,B,C". Each alternative may contain
    placeholders; if any of them is not found, the alternative is abandoned
    and evaluation restarts with the next one. Commas inside a placeholder
    belong to that placeholder.

    Example:
        "${oneof:${port},8080}" -> value of "port" if defined, else "8080"

    A circular resolution inside an alternative aborts the whole evaluation
    unless `strict` is disabled.
    """

    def __init__(self: Self, prefix: str = "oneof:", strict: Optional[bool] = None) -> None:
        self.prefix: str = prefix
        self.strict: bool = appsettings.strictOneOf if strict is None else strict

    def resolve(self: Self, name: str, property_filter: PropertyFilter) -> str:
        if not name.startswith(self.prefix):
            raise PropertyNotFoundError(name)
        body: str = name[len(self.prefix) :]

        fallthrough: tuple[type[Exception], ...] = (PropertyNotFoundError,)
        if not self.strict:
            fallthrough = (PropertyNotFoundError, CircularResolutionError)

        result: list[str] = []
        skip: bool = False
        last_error: Optional[PropertyNotFoundError] = None

        for token in tokens_split(body):
            if token.is_property:
                if skip:
                    continue
                try:
                    result.append(property_filter.resolve_name(token.value))
                except fallthrough as e:
                    LOG(f"Abandoning alternative at '{token.value}': {e}")
                    if isinstance(e, PropertyNotFoundError):
                        last_error = e
                    skip = True
                continue

            for index, part in enumerate(token.value.split(",")):
                if index > 0:
                    if not skip:
                        return "".join(result)
                    result = []
                    skip = False
                if not skip:
                    result.append(part)

        if skip:
            raise PropertyNotFoundError(name, last_error)
        return "".join(result)


class RawResolver:
    """Resolver returning the rest of the name completely unexpanded.

    Example:
        "${raw:${abc}}" -> "${abc}"
    """

    def __init__(self: Self, prefix: str = "raw:") -> None:
        self.prefix: str = prefix

    def resolve(self: Self, name: str, property_filter: PropertyFilter) -> str:
        if not name.startswith(self.prefix):
            raise PropertyNotFoundError(name)
        return name[len(self.prefix) :]
