"""Test fixtures."""

import pytest

from mimedir.const import DocumentType
from mimedir.document import Document


@pytest.fixture(name="icalendar")
def mock_icalendar() -> Document:
    """Fixture that creates an iCalendar 2.0 document."""
    return Document(DocumentType.ICALENDAR20)


@pytest.fixture(name="vcard21")
def mock_vcard21() -> Document:
    """Fixture that creates a vCard 2.1 document."""
    return Document(DocumentType.VCARD21)


@pytest.fixture(name="vcard30")
def mock_vcard30() -> Document:
    """Fixture that creates a vCard 3.0 document."""
    return Document(DocumentType.VCARD30)


@pytest.fixture(name="vcard40")
def mock_vcard40() -> Document:
    """Fixture that creates a vCard 4.0 document."""
    return Document(DocumentType.VCARD40)
