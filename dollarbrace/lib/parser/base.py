r"""
Filtering engine for ${...} substitution.

Provides the protocols that connect resolvers and filters, the per-call
resolution session that detects circular references, and the public
`Filter` that callers hold on to.

The engine handles:
- Substitution of every placeholder in a string
- Resolution of a single property name
- Recursive resolution: resolvers receive the active filter and may use it
  to expand placeholders found in their own answers
- Cycle detection through the set of names currently being resolved
- In-place filtering of XML element trees and of text files

Each top-level call on a `Filter` runs in its own `ResolutionSession`, so a
single filter can be shared between threads.

Example:
    property_filter = get_filter({"name": "World", "greeting": "Hello ${name}"})
    property_filter.substitute("${greeting}!")
    -> "Hello World!"
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable, Self
from xml.etree.ElementTree import Element
from dollarbrace.config.settings import appsettings
from dollarbrace.lib.errors import (
    CircularResolutionError,
    FilterIOError,
    PropertyNotFoundError,
)
from dollarbrace.lib.log import LOG
from dollarbrace.lib.parser.document import tree_walk
from dollarbrace.lib.parser.tokenizer import tokens_split
from dollarbrace.models.dataModel import Token


@runtime_checkable
class PropertyFilter(Protocol):
    """Protocol of the substitution capability handed to resolvers.

    Every operation is guarded against circular resolution. Resolvers must
    use the filter they are given and never keep a reference to it.
    """

    def resolve_name(self: Self, name: str) -> str:
        """Resolve a single property name to its value.

        Args:
            name: Property name, without the surrounding "${" and "}"

        Returns:
            The resolved value

        Raises:
            PropertyNotFoundError: If no resolver knows the name
            CircularResolutionError: If the name is already being resolved
        """
        ...

    def substitute(self: Self, text: str) -> str:
        """Replace every placeholder in `text` with its value."""
        ...

    def substitute_tree(self: Self, element: Element) -> None:
        """Filter every attribute value and text node of an element tree."""
        ...

    def substitute_file(self: Self, source: Path | str, destination: Path | str) -> None:
        """Filter the content of `source` into `destination`."""
        ...


@runtime_checkable
class PropertyResolver(Protocol):
    """Protocol defining the resolver interface.

    Attributes:
        prefix: Literal prefix every name handled by this resolver starts
            with, or None if the resolver may answer any name. Compound
            resolvers skip resolvers whose prefix does not match.
    """

    prefix: Optional[str]

    def resolve(self: Self, name: str, property_filter: PropertyFilter) -> Optional[str]:
        """Resolve a property name.

        Args:
            name: Property name, possibly containing unexpanded placeholders
            property_filter: Filter of the active session, for recursive
                resolution of names found in `name` or in the answer

        Returns:
            The value, or None when the resolver does not know the name.
            An empty string is a valid value.

        Raises:
            PropertyNotFoundError: May be raised instead of returning None
        """
        ...


def prefix_matches(resolver: PropertyResolver, name: str) -> bool:
    """Check whether `resolver` may be asked about `name`."""
    prefix: Optional[str] = getattr(resolver, "prefix", None)
    return not prefix or name.startswith(prefix)


class ResolutionSession:
    """Filter bound to one top-level call.

    Owns the set of names currently being resolved. A session is created by
    `Filter` at the start of each call and dropped when the call returns; it
    is never shared between calls or threads.

    Attributes:
        resolver: Resolver answering property names
    """

    def __init__(self: Self, resolver: PropertyResolver) -> None:
        self.resolver: PropertyResolver = resolver
        self._in_progress: set[str] = set()

    def resolve_name(self: Self, name: str) -> str:
        if name in self._in_progress:
            LOG(f"Circular resolution of '{name}'")
            raise CircularResolutionError(name)

        LOG(f"Resolving property: {name}")
        self._in_progress.add(name)
        try:
            value: Optional[str] = self.resolver.resolve(name, self)
        finally:
            self._in_progress.remove(name)

        if value is None:
            raise PropertyNotFoundError(name)
        return value

    def substitute(self: Self, text: str) -> str:
        tokens: list[Token] = tokens_split(text)
        result: list[str] = []

        for token in tokens:
            if token.is_property:
                result.append(self.resolve_name(token.value))
            else:
                result.append(token.value)

        return "".join(result)

    def substitute_tree(self: Self, element: Element) -> None:
        tree_walk(element, self.substitute)

    def substitute_file(self: Self, source: Path | str, destination: Path | str) -> None:
        source, destination = Path(source), Path(destination)
        LOG(f"Filtering {source} -> {destination}")
        try:
            content: str = source.read_text(encoding=appsettings.encoding)
        except (OSError, UnicodeError) as e:
            raise FilterIOError(source, str(e)) from e

        result: str = self.substitute(content)

        try:
            destination.write_text(result, encoding=appsettings.encoding)
        except (OSError, UnicodeError) as e:
            raise FilterIOError(destination, str(e)) from e
        LOG(f"Wrote {len(result)} characters to {destination}")

    def substitute_mapping(self: Self, mapping: Mapping[str, str]) -> dict[str, str]:
        return {key: self.substitute(value) for key, value in mapping.items()}


class Filter:
    """Public, thread-safe filter.

    Every call starts a fresh `ResolutionSession` for the wrapped resolver,
    so concurrent calls never see each other's in-progress names.

    Attributes:
        resolver: Resolver (often a CompoundResolver) answering property names
    """

    def __init__(self: Self, resolver: PropertyResolver) -> None:
        self.resolver: PropertyResolver = resolver

    def session(self: Self) -> ResolutionSession:
        """Create the session for one top-level call."""
        return ResolutionSession(self.resolver)

    def resolve_name(self: Self, name: str) -> str:
        """Resolve a single property name.

        Unlike `substitute`, the name is not wrapped in "${...}" and the raw
        resolved value is returned.

        Raises:
            PropertyNotFoundError: If no resolver knows the name
            CircularResolutionError: If resolution loops back on itself
        """
        return self.session().resolve_name(name)

    def substitute(self: Self, text: str) -> str:
        """Replace every placeholder in `text`.

        Text without placeholders is returned unchanged. Either the whole
        text is expanded or an error is raised; there is no partial result.

        Raises:
            PropertyNotFoundError: If a placeholder cannot be resolved
            CircularResolutionError: If resolution loops back on itself
        """
        return self.session().substitute(text)

    def substitute_tree(self: Self, element: Element) -> None:
        """Filter an element tree in place.

        Raises at the first attribute or text node that cannot be resolved.
        """
        self.session().substitute_tree(element)

    def substitute_file(self: Self, source: Path | str, destination: Path | str) -> None:
        """Read `source`, substitute, and write the result to `destination`.

        Raises:
            FilterIOError: If either file cannot be read or written
            PropertyNotFoundError: If a placeholder cannot be resolved
            CircularResolutionError: If resolution loops back on itself
        """
        self.session().substitute_file(source, destination)

    def substitute_mapping(self: Self, mapping: Mapping[str, str]) -> dict[str, str]:
        """Substitute every value of `mapping` within a single session."""
        return self.session().substitute_mapping(mapping)


def get_filter(*resolvers: PropertyResolver | Mapping[str, str]) -> Filter:
    """Build a filter over one or more resolvers.

    Plain mappings are wrapped in a `PropertiesResolver`. Several resolvers
    are chained, in the given order, in a `CompoundResolver`.

    Raises:
        ValueError: If no resolver is given
    """
    from dollarbrace.lib.parser.resolvers import (
        CompoundResolver,
        PropertiesResolver,
    )  # Import here to avoid circular import

    if not resolvers:
        raise ValueError("At least one resolver is required")

    chain: list[PropertyResolver] = [
        PropertiesResolver(resolver) if isinstance(resolver, Mapping) else resolver
        for resolver in resolvers
    ]
    if len(chain) == 1:
        return Filter(chain[0])
    return Filter(CompoundResolver(*chain))
