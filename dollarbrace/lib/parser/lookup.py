"""
Lookup resolvers backed by the process and by documents.

- EnvironmentResolver: "env.NAME" reads environment variable NAME
- SystemPropertyResolver: runtime facts such as "python.version" or
  "user.home", plus caller supplied overrides
- XmlPropertyResolver: dotted paths into an XML element tree, such as
  "config.database.url" or "config.server.port" for an attribute
"""

import getpass
import os
import platform
import sys
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Optional, Self
from xml.etree.ElementTree import Element
from dollarbrace.lib.parser.resolvers import SimplePropertyResolver


class EnvironmentResolver(SimplePropertyResolver):
    """Resolver for environment variables addressed as "env.NAME"."""

    def __init__(
        self: Self,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = "env.",
        filter_result: bool = True,
    ) -> None:
        super().__init__(prefix=prefix, filter_result=filter_result)
        self.environ: Mapping[str, str] = os.environ if environ is None else environ

    def property_get(self: Self, name: str) -> Optional[str]:
        return self.environ.get(name)


def user_name() -> Optional[str]:
    """Login name of the current user, None if it cannot be determined."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return None


def runtime_properties() -> dict[str, str]:
    """Facts about the running interpreter and host."""
    properties: dict[str, str] = {
        "python.version": platform.python_version(),
        "python.implementation": platform.python_implementation(),
        "python.executable": sys.executable,
        "os.name": platform.system(),
        "os.version": platform.release(),
        "os.arch": platform.machine(),
        "user.home": str(Path.home()),
        "user.dir": os.getcwd(),
        "file.separator": os.sep,
        "path.separator": os.pathsep,
        "line.separator": os.linesep,
    }
    name: Optional[str] = user_name()
    if name is not None:
        properties["user.name"] = name
    return properties


class SystemPropertyResolver(SimplePropertyResolver):
    """Resolver for runtime properties.

    Answers any name without a prefix. `overrides` take precedence over the
    detected runtime facts.
    """

    def __init__(
        self: Self,
        overrides: Optional[Mapping[str, str]] = None,
        filter_result: bool = True,
    ) -> None:
        super().__init__(filter_result=filter_result)
        properties: dict[str, str] = runtime_properties()
        properties.update(overrides or {})
        self.properties: Mapping[str, str] = MappingProxyType(properties)

    def property_get(self: Self, name: str) -> Optional[str]:
        return self.properties.get(name)


def element_lookup(element: Element, path: str) -> Optional[str]:
    """Find the value addressed by a dotted `path` below `element`.

    Tag names may themselves contain dots, so each child whose tag is a
    prefix of the path is tried in document order. A path naming an
    attribute of `element` returns the attribute value; a path naming a
    child returns the child's stripped text.
    """
    if path in element.attrib:
        return element.attrib[path]

    for child in element:
        if child.tag == path:
            return (child.text or "").strip()
        if path.startswith(child.tag + "."):
            found: Optional[str] = element_lookup(child, path[len(child.tag) + 1 :])
            if found is not None:
                return found
    return None


class XmlPropertyResolver(SimplePropertyResolver):
    """Resolver reading values out of an XML element tree.

    Attributes:
        root: Root element of the document
        include_root: When True, paths start with the root tag
            ("config.a.value"); otherwise they start below it ("a.value")
    """

    def __init__(
        self: Self,
        root: Element,
        include_root: bool = True,
        filter_result: bool = True,
    ) -> None:
        super().__init__(filter_result=filter_result)
        self.root: Element = root
        self.include_root: bool = include_root

    def property_get(self: Self, name: str) -> Optional[str]:
        if not self.include_root:
            return element_lookup(self.root, name)
        if name == self.root.tag:
            return (self.root.text or "").strip()
        if name.startswith(self.root.tag + "."):
            return element_lookup(self.root, name[len(self.root.tag) + 1 :])
        return None
