"""Tests for structerr.hierarchy module."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from structerr.core.config import Settings, set_settings
from structerr.core.exceptions import ConfigurationError, InheritanceLimitError
from structerr.error import StructuredError
from structerr.events import Event
from structerr.hierarchy import (
    TypeDescriptor,
    count_ancestors,
    descriptor_of,
    events_of,
    parent_of,
    spec_of,
)


def _chain(depth: int) -> type[StructuredError]:
    cls: type[StructuredError] = StructuredError
    for i in range(depth):
        cls = cls.extend(name=f"Level{i + 1}")
    return cls


class TestDepthLimit:
    """Test the inheritance limit."""

    def test_nine_extensions_succeed(self) -> None:
        cls = _chain(9)
        assert count_ancestors(descriptor_of(cls)) == 9
        assert cls().name == "Level9"

    def test_tenth_extension_fails(self) -> None:
        cls = _chain(9)
        with pytest.raises(InheritanceLimitError) as exc:
            cls.extend(name="Level10")
        assert exc.value.type_name == "Level9"
        assert exc.value.limit == 10

    def test_limit_error_is_a_type_error(self) -> None:
        cls = _chain(9)
        with pytest.raises(TypeError):
            cls.extend()
        with pytest.raises(ConfigurationError):
            cls.extend()

    def test_siblings_do_not_share_depth(self) -> None:
        base = _chain(8)
        left = base.extend(name="Left")
        right = base.extend(name="Right")
        assert count_ancestors(descriptor_of(left)) == 9
        assert count_ancestors(descriptor_of(right)) == 9

    def test_configured_limit(self) -> None:
        set_settings(Settings(inheritance_limit=3))
        cls = _chain(2)
        with pytest.raises(InheritanceLimitError):
            cls.extend()

    def test_limit_of_one_forbids_extension(self) -> None:
        set_settings(Settings(inheritance_limit=1))
        with pytest.raises(InheritanceLimitError):
            StructuredError.extend(name="Nope")

    def test_limit_is_logged(self) -> None:
        cls = _chain(9)
        with capture_logs() as logs, pytest.raises(InheritanceLimitError):
            cls.extend()
        assert logs == [
            {
                "event": "inheritance_limit_reached",
                "log_level": "warning",
                "type_name": "Level9",
                "limit": 10,
            }
        ]


class TestTypeCreation:
    """Test the minted types."""

    def test_isinstance_holds_for_every_ancestor(self) -> None:
        a = StructuredError.extend(name="A")
        b = a.extend(name="B")
        c = b.extend(name="C")
        err = c()
        for cls in (c, b, a, StructuredError, Exception):
            assert isinstance(err, cls)
        assert not isinstance(a(), b)

    def test_class_name_follows_spec_name(self) -> None:
        cls = StructuredError.extend(name="DiskFull")
        assert cls.__name__ == "DiskFull"
        assert cls.__qualname__ == "DiskFull"

    def test_class_name_fallback(self) -> None:
        cls = StructuredError.extend(name=None)
        assert cls.__name__ == "StructuredErrorExtension"

    def test_parent_of(self) -> None:
        child = StructuredError.extend(name="Child")
        grandchild = child.extend(name="Grandchild")
        assert parent_of(StructuredError) is None
        assert parent_of(child) is StructuredError
        assert parent_of(grandchild) is child

    def test_each_type_owns_its_spec(self) -> None:
        child = StructuredError.extend()
        assert spec_of(child) == spec_of(StructuredError)
        assert spec_of(child) is not spec_of(StructuredError)

    def test_root_spec(self) -> None:
        assert dict(spec_of(StructuredError)) == {
            "name": "StructuredError",
            "message": "{{name}} aggregated error",
            "serialize_stack": False,
        }
        assert dict(events_of(StructuredError)) == {}

    def test_descriptor_links(self) -> None:
        child = StructuredError.extend(name="Child", on_push=print)
        descriptor = descriptor_of(child)
        assert isinstance(descriptor, TypeDescriptor)
        assert descriptor.parent is descriptor_of(StructuredError)
        assert descriptor.events[Event.PUSH] == (print,)
        assert descriptor.depth == 1

    def test_descriptor_is_frozen(self) -> None:
        descriptor = descriptor_of(StructuredError)
        with pytest.raises(AttributeError):
            descriptor.name = "Other"  # type: ignore[misc]

    def test_descriptor_of_rejects_other_types(self) -> None:
        with pytest.raises(TypeError, match="not a structured error type"):
            descriptor_of(ValueError)

    def test_extend_accepts_mapping_and_keywords(self) -> None:
        cls = StructuredError.extend({"error-code": "E1", "name": "FromMapping"}, name="FromKw")
        assert spec_of(cls)["error-code"] == "E1"
        assert spec_of(cls)["name"] == "FromKw"
