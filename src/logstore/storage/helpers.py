"""
Pure helpers: reference mask and property map merging.
"""

from typing import Dict, Mapping, Optional

from ..events import LoggingEventRecord

# Stable bit values stored in logging_event.reference_flag
PROPERTIES_EXIST = 0x01
EXCEPTION_EXISTS = 0x02
CALLER_DATA_EXISTS = 0x04


def merge_property_maps(
    context_properties: Optional[Mapping[str, str]],
    event_properties: Optional[Mapping[str, str]],
) -> Dict[str, str]:
    """Context-scope properties overlaid with event-scope ones (event wins)."""
    merged: Dict[str, str] = {}
    if context_properties:
        merged.update(context_properties)
    if event_properties:
        merged.update(event_properties)
    return merged


def compute_reference_mask(event: LoggingEventRecord) -> int:
    mask = 0
    if event.context_properties or event.event_properties:
        mask |= PROPERTIES_EXIST
    if event.has_throwable:
        mask |= EXCEPTION_EXISTS
    if event.has_caller_data:
        mask |= CALLER_DATA_EXISTS
    return mask
