"""
Unit tests for the reference mask and property merging.
"""

from logstore.events import CallerFrame
from logstore.storage.helpers import (
    CALLER_DATA_EXISTS,
    EXCEPTION_EXISTS,
    PROPERTIES_EXIST,
    compute_reference_mask,
    merge_property_maps,
)


class TestMergePropertyMaps:
    """Test merge_property_maps."""

    def test_event_scope_wins(self):
        """Event properties override context properties on key collision."""
        merged = merge_property_maps({"env": "prod", "host": "h1"}, {"env": "staging", "req": "42"})

        assert merged == {"env": "staging", "host": "h1", "req": "42"}

    def test_absent_maps_are_empty(self):
        assert merge_property_maps(None, None) == {}
        assert merge_property_maps({"a": "1"}, None) == {"a": "1"}
        assert merge_property_maps(None, {"b": "2"}) == {"b": "2"}

    def test_inputs_not_modified(self):
        context = {"env": "prod"}
        event = {"env": "staging"}

        merge_property_maps(context, event)

        assert context == {"env": "prod"}
        assert event == {"env": "staging"}


class TestComputeReferenceMask:
    """Test compute_reference_mask."""

    def test_bit_values_are_stable(self):
        assert PROPERTIES_EXIST == 0x01
        assert EXCEPTION_EXISTS == 0x02
        assert CALLER_DATA_EXISTS == 0x04

    def test_bare_event(self, make_event):
        assert compute_reference_mask(make_event()) == 0

    def test_properties_from_either_scope(self, make_event):
        assert compute_reference_mask(make_event(context_properties={"a": "1"})) == PROPERTIES_EXIST
        assert compute_reference_mask(make_event(event_properties={"a": "1"})) == PROPERTIES_EXIST
        assert compute_reference_mask(make_event(context_properties={}, event_properties={})) == 0

    def test_exception_present(self, make_event):
        assert compute_reference_mask(make_event(throwable=["line"])) == EXCEPTION_EXISTS

    def test_empty_throwable_still_counts(self, make_event):
        """A throwable with no lines is still a throwable."""
        assert compute_reference_mask(make_event(throwable=[])) == EXCEPTION_EXISTS

    def test_caller_data(self, make_event, caller):
        assert compute_reference_mask(make_event(caller_data=[caller])) == CALLER_DATA_EXISTS
        assert compute_reference_mask(make_event(caller_data=[None])) == 0

    def test_all_bits(self, make_event, caller):
        event = make_event(
            caller_data=[caller],
            event_properties={"req": "42"},
            throwable=["ValueError: bad"],
        )

        assert compute_reference_mask(event) == 0x07

    def test_same_attributes_same_mask(self, make_event):
        """Mask depends only on presence, not on content."""
        first = make_event(formatted_message="a", event_properties={"x": "1"}, throwable=["l1"])
        second = make_event(formatted_message="b", event_properties={"y": "2"}, throwable=["l2", "l3"])

        assert compute_reference_mask(first) == compute_reference_mask(second)
        assert compute_reference_mask(first) == compute_reference_mask(first)

    def test_other_caller_frame(self, make_event):
        frame = CallerFrame("a.py", "a", "f", 1)
        assert compute_reference_mask(make_event(caller_data=[None, frame])) == CALLER_DATA_EXISTS
