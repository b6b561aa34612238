"""Tests for environment, runtime and XML resolvers."""

import os
import xml.etree.ElementTree as ET
import pytest
from dollarbrace.lib.errors import PropertyNotFoundError
from dollarbrace.lib.parser.base import get_filter
from dollarbrace.lib.parser.lookup import (
    EnvironmentResolver,
    SystemPropertyResolver,
    XmlPropertyResolver,
    element_lookup,
)

XML: str = (
    "<config>"
    "<a value='test'/>"
    "<b>test2</b>"
    "<c><d>test3</d></c>"
    "<e><f>test4</f><f>test5</f></e>"
    "<g.h><i>test6</i></g.h>"
    "</config>"
)


def test_env(monkeypatch):
    monkeypatch.setenv("DOLLARBRACE_TEST_VAR", "from environment")
    property_filter = get_filter(EnvironmentResolver())
    assert property_filter.substitute("env: ${env.DOLLARBRACE_TEST_VAR}") == (
        "env: from environment"
    )


def test_env_not_found(monkeypatch):
    monkeypatch.delenv("ASDFASICSAPWOECM_123", raising=False)
    with pytest.raises(PropertyNotFoundError):
        get_filter(EnvironmentResolver()).substitute("env: ${env.ASDFASICSAPWOECM_123}")


def test_env_injected_mapping():
    resolver = EnvironmentResolver(environ={"HOME": "/home/test"})
    assert get_filter(resolver).resolve_name("env.HOME") == "/home/test"


def test_env_requires_prefix():
    resolver = EnvironmentResolver(environ={"HOME": "/home/test"})
    with pytest.raises(PropertyNotFoundError):
        get_filter(resolver).resolve_name("HOME")


def test_system_runtime_properties():
    property_filter = get_filter(SystemPropertyResolver())
    assert property_filter.resolve_name("file.separator") == os.sep
    assert property_filter.resolve_name("user.dir") == os.getcwd()
    assert property_filter.resolve_name("python.version")


def test_system_overrides_and_recursion():
    resolver = SystemPropertyResolver(
        overrides={
            "first": "value",
            "second": "${first} ${first}",
            "third": "${first} ${second}",
        }
    )
    assert get_filter(resolver).substitute("${third}") == "value value value"


def test_system_unknown_property():
    with pytest.raises(PropertyNotFoundError):
        get_filter(SystemPropertyResolver()).resolve_name("no.such.property")


@pytest.fixture
def document() -> ET.Element:
    return ET.fromstring(XML)


def test_xml(document):
    property_filter = get_filter(XmlPropertyResolver(document, include_root=True))
    assert property_filter.resolve_name("config.a.value") == "test"
    assert property_filter.resolve_name("config.b") == "test2"
    assert property_filter.resolve_name("config.c.d") == "test3"
    assert property_filter.resolve_name("config.e.f") == "test4"
    assert property_filter.resolve_name("config.g.h.i") == "test6"


def test_xml_without_root(document):
    property_filter = get_filter(XmlPropertyResolver(document, include_root=False))
    assert property_filter.resolve_name("a.value") == "test"
    assert property_filter.resolve_name("g.h.i") == "test6"


def test_xml_missing_path(document):
    property_filter = get_filter(XmlPropertyResolver(document))
    with pytest.raises(PropertyNotFoundError):
        property_filter.resolve_name("config.missing")
    with pytest.raises(PropertyNotFoundError):
        property_filter.resolve_name("other.b")


def test_xml_values_are_filtered():
    root = ET.fromstring("<app><url>http://${host}/</url></app>")
    property_filter = get_filter(XmlPropertyResolver(root), {"host": "example.org"})
    assert property_filter.resolve_name("app.url") == "http://example.org/"


def test_element_lookup_backtracks(document):
    assert element_lookup(document, "c.d") == "test3"
    assert element_lookup(document, "c.x") is None
