"""Tests for the property value model and parameter table."""

import copy
import gc
from typing import Any

import pytest

from mimedir.const import DocumentType
from mimedir.document import Document
from mimedir.exceptions import NodeAccessError
from mimedir.property import Property
from mimedir.types import TextProperty, UnknownProperty


def test_abstract_property(icalendar: Document) -> None:
    """Test that a property requires a value kind."""
    with pytest.raises(TypeError):
        Property(icalendar, "SUMMARY")  # type: ignore[abstract]


def test_no_value(icalendar: Document) -> None:
    """Test a property that was never assigned a value."""
    prop = TextProperty(icalendar, "CATEGORIES")
    assert prop.get_value() is None
    assert prop.get_parts() == []
    assert str(prop) == ""


def test_single_value(icalendar: Document) -> None:
    """Test a property with a single value."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting")
    assert prop.get_value() == "Meeting"
    assert prop.get_parts() == ["Meeting"]
    assert str(prop) == "Meeting"


@pytest.mark.parametrize(
    ("parts", "expected"),
    [
        ([], None),
        (["x"], "x"),
        (["x", "y"], "x,y"),
        (["a,b", "c"], "a\\,b,c"),
    ],
    ids=("empty", "single", "multiple", "escaped"),
)
def test_get_value_from_parts(
    icalendar: Document, parts: list[str], expected: str | None
) -> None:
    """Test that multiple values are returned in their raw encoded form."""
    prop = TextProperty(icalendar, "CATEGORIES")
    prop.set_parts(parts)
    assert prop.get_value() == expected
    assert prop.get_parts() == parts


@pytest.mark.parametrize(
    "value",
    [None, "x", ["x"], ["x", "y"]],
    ids=("absent", "scalar", "single", "multiple"),
)
def test_set_parts_preserves_value(icalendar: Document, value: str | None) -> None:
    """Test that setting the parts from get_parts does not change the value."""
    prop = TextProperty(icalendar, "CATEGORIES", value)
    before = (prop.get_value(), prop.get_parts(), prop.get_raw_mimedir_value())
    prop.set_parts(prop.get_parts())
    assert (prop.get_value(), prop.get_parts(), prop.get_raw_mimedir_value()) == before


def test_parts_are_copied(icalendar: Document) -> None:
    """Test that modifying the returned parts does not modify the property."""
    parts = ["a", "b"]
    prop = TextProperty(icalendar, "CATEGORIES")
    prop.set_parts(parts)
    parts.append("c")
    prop.get_parts().append("d")
    assert prop.get_parts() == ["a", "b"]


def test_add_parameter_merges(icalendar: Document) -> None:
    """Test that adding a parameter with an existing name appends the value."""
    prop = TextProperty(icalendar, "TEL", "+1-555-0100")
    prop.add("TYPE", "WORK")
    prop.add("type", "FAX")
    assert list(prop.parameters) == ["TYPE"]
    param = prop.get_parameter("TYPE")
    assert param
    assert param.get_parts() == ["WORK", "FAX"]


def test_constructor_parameters_merge(icalendar: Document) -> None:
    """Test that constructor parameters are added in order and merged."""
    prop = UnknownProperty(
        icalendar,
        "X-PROP",
        "value",
        {"TYPE": "WORK", "X-OTHER": "1", "type": ["FAX", "VOICE"]},
    )
    assert list(prop.parameters) == ["TYPE", "X-OTHER"]
    param = prop.get_parameter("type")
    assert param
    assert param.get_parts() == ["WORK", "FAX", "VOICE"]


def test_add_parameter_without_name(vcard21: Document) -> None:
    """Test that the parameter name is inferred when omitted."""
    prop = TextProperty(vcard21, "TEL", "+1-555-0100")
    prop.add(None, "WORK")
    prop.add(None, "FAX")
    prop.add(None, "QUOTED-PRINTABLE")
    assert list(prop.parameters) == ["TYPE", "ENCODING"]
    param = prop.get_parameter("TYPE")
    assert param
    assert param.no_name
    assert param.get_parts() == ["WORK", "FAX"]


def test_get_parameter_case_insensitive(icalendar: Document) -> None:
    """Test parameter lookup ignores case."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting", {"language": "en"})
    assert list(prop.parameters) == ["LANGUAGE"]
    assert prop.get_parameter("LANGUAGE") is prop.get_parameter("Language")
    assert prop.has_parameter("language")
    assert prop.get_parameter("ALTREP") is None
    assert not prop.has_parameter("ALTREP")


def test_remove_parameter(icalendar: Document) -> None:
    """Test removing parameters."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting", {"LANGUAGE": "en"})
    param = prop.get_parameter("LANGUAGE")
    assert param
    prop.remove_parameter("language")
    assert prop.parameters == {}
    assert param.root is None
    # Removing a missing parameter is not an error
    prop.remove_parameter("language")


def test_set_parameter_replaces(icalendar: Document) -> None:
    """Test that setting a parameter replaces it in place."""
    prop = UnknownProperty(
        icalendar, "X-PROP", "value", {"A": "1", "ENCODING": "BASE64", "B": "2"}
    )
    prop.set_parameter("encoding", "8BIT")
    assert list(prop.parameters) == ["A", "ENCODING", "B"]
    assert str(prop.get_parameter("ENCODING")) == "8BIT"
    prop.set_parameter("C", ["3", "4"])
    assert list(prop.parameters) == ["A", "ENCODING", "B", "C"]


def test_serialize(icalendar: Document) -> None:
    """Test encoding a property as a content line."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting; or not")
    assert prop.serialize() == "SUMMARY:Meeting\\; or not\r\n"


def test_serialize_group_and_parameters(vcard30: Document) -> None:
    """Test encoding a property with a group and parameters."""
    prop = TextProperty(
        vcard30, "TEL", "+1-555-0100", {"TYPE": ["WORK", "VOICE"]}, group="item1"
    )
    assert prop.serialize() == "item1.TEL;TYPE=WORK,VOICE:+1-555-0100\r\n"


def test_serialize_quoted_parameters(icalendar: Document) -> None:
    """Test parameter values with special characters are quoted."""
    prop = UnknownProperty(
        icalendar,
        "X-PROP",
        "value",
        {"X-URI": "http://example.com/", "X-QUOTE": 'say "hi"'},
    )
    assert prop.serialize() == (
        "X-PROP;X-URI=\"http://example.com/\";X-QUOTE=\"say ^'hi^'\":value\r\n"
    )


def test_serialize_after_mutation(icalendar: Document) -> None:
    """Test that serialization reflects changes to the value and parameters."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting")
    assert prop.serialize() == "SUMMARY:Meeting\r\n"
    prop.set_value("Lunch")
    prop.add("LANGUAGE", "en")
    assert prop.serialize() == "SUMMARY;LANGUAGE=en:Lunch\r\n"


def test_serialize_folds(icalendar: Document) -> None:
    """Test that long properties are folded."""
    prop = TextProperty(icalendar, "DESCRIPTION", "Ünïcödé " * 20)
    lines = prop.serialize().split("\r\n")
    assert len(lines) == 5
    assert lines[0] == "DESCRIPTION:Ünïcödé Ünïcödé Ünïcödé Ünïcödé Ünïcödé Ün"
    assert lines[1].startswith(" ")
    assert lines[-1] == ""


def test_copy(icalendar: Document) -> None:
    """Test that a copy does not share parameters or values."""
    prop = TextProperty(
        icalendar, "CATEGORIES", ["a", "b"], {"LANGUAGE": "en"}
    )
    prop_copy = copy.copy(prop)
    assert prop_copy.serialize() == prop.serialize()
    assert prop_copy.root is icalendar

    param_copy = prop_copy.get_parameter("LANGUAGE")
    assert param_copy
    assert param_copy is not prop.get_parameter("LANGUAGE")
    param_copy.add_value("de")
    prop_copy.set_parts(prop_copy.get_parts() + ["c"])

    assert prop.serialize() == "CATEGORIES;LANGUAGE=en:a,b\r\n"
    assert prop_copy.serialize() == "CATEGORIES;LANGUAGE=en,de:a,b,c\r\n"


def test_destroy(icalendar: Document) -> None:
    """Test that destroying a property drops the document and parameters."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting", {"LANGUAGE": "en"})
    param = prop.get_parameter("LANGUAGE")
    assert param
    prop.destroy()
    assert prop.root is None
    assert param.root is None
    assert prop.parameters == {}
    assert prop.serialize() == "SUMMARY:Meeting\r\n"


def test_root_is_not_owned() -> None:
    """Test that a property does not keep its document alive."""
    document = Document(DocumentType.VCARD40)
    prop = document.add_property("FN", "Jane Doe")
    assert prop.root is document
    del document
    gc.collect()
    assert prop.root is None


def test_as_sequence(icalendar: Document) -> None:
    """Test the single element sequence view of a property."""
    prop = TextProperty(icalendar, "SUMMARY", "Meeting")
    sequence = prop.as_sequence()
    assert len(sequence) == 1
    assert sequence[0] is prop
    assert list(sequence) == [prop]
    with pytest.raises(IndexError):
        sequence[1]
    with pytest.raises(NodeAccessError):
        sequence[0] = prop  # type: ignore[index]
    with pytest.raises(NodeAccessError):
        del sequence[0]  # type: ignore[attr-defined]


@pytest.mark.parametrize(
    "setter",
    [
        lambda prop: prop.set_value([]),
        lambda prop: prop.set_value(()),
        lambda prop: prop.set_parts([]),
        lambda prop: prop.set_json_value([]),
    ],
    ids=("value", "tuple", "parts", "json"),
)
def test_empty_list_is_absent(icalendar: Document, setter: Any) -> None:
    """Test an empty list is stored the same way as an absent value."""
    prop = TextProperty(icalendar, "CATEGORIES", ["a"])
    setter(prop)
    assert prop.get_value() is None
    assert prop.get_parts() == []
    assert repr(prop) == repr(TextProperty(icalendar, "CATEGORIES"))
