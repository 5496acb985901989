"""Conversion between fragments and their persisted record form.

Records are plain dicts keyed by the persisted field names. The tag fields
(``ft``, ``pt``, ``idt``, ``reftype`` and the nested ``type``) select which
optional fields may be present; absent optional fields are omitted rather
than stored as null.

Usage:
    ```python
    from chat_fragments import create_text_content_fragment
    from chat_fragments.records import fragments_from_records, fragments_to_records

    records = fragments_to_records([create_text_content_fragment("hello")])
    fragments = fragments_from_records(records)
    ```
"""

from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter

from chat_fragments.models.fragments import Fragment

_fragment_adapter: TypeAdapter[Fragment] = TypeAdapter(Fragment)
_fragments_adapter: TypeAdapter[list[Fragment]] = TypeAdapter(list[Fragment])


def fragment_to_record(fragment: Fragment) -> dict[str, Any]:
    return fragment.to_record()


def fragments_to_records(fragments: Sequence[Fragment]) -> list[dict[str, Any]]:
    return [fragment.to_record() for fragment in fragments]


def fragment_from_record(record: dict[str, Any]) -> Fragment:
    """Validate a single record.

    Raises:
        pydantic.ValidationError: If the record has an unknown tag, is missing
            required fields, or places a part in the wrong kind of fragment.
    """
    return _fragment_adapter.validate_python(record)


def fragments_from_records(records: Sequence[dict[str, Any]]) -> list[Fragment]:
    return _fragments_adapter.validate_python(list(records))


def fragments_to_json(fragments: Sequence[Fragment]) -> str:
    return _fragments_adapter.dump_json(
        list(fragments), by_alias=True, exclude_none=True
    ).decode("utf-8")


def fragments_from_json(data: str | bytes) -> list[Fragment]:
    return _fragments_adapter.validate_json(data)
