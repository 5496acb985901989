"""Tests for fragment duplication."""

import logging
from typing import Any

import pytest

from chat_fragments.duplication import FragmentDuplicator, duplicate_fragments
from chat_fragments.factories import (
    FragmentFactory,
    create_code_execution_invocation_part,
    create_code_execution_response_part,
    create_data_ref_url,
    create_function_call_invocation_part,
    create_function_call_response_part,
    set_default_factory,
)
from chat_fragments.models.data import DataRefDBlob
from chat_fragments.models.fragments import (
    AttachmentFragment,
    ContentFragment,
    Fragment,
    SentinelFragment,
)
from chat_fragments.models.parts import (
    DocPart,
    FunctionCallInvocation,
    ImageRefPart,
    SentinelPart,
)

from conftest import FixedClock, SequentialIdGenerator


def _without_identity(fragment: Fragment) -> dict[str, Any]:
    record = fragment.to_record()
    record.pop("fId")
    record.pop("created", None)
    return record


@pytest.fixture
def schema() -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"city": {"type": "string", "enum": ["Paris", "Rome"]}},
        "required": ["city"],
    }


@pytest.fixture
def every_fragment(
    factory: FragmentFactory,
    dblob_ref: DataRefDBlob,
    doc_attachment: AttachmentFragment,
    schema: dict[str, Any],
) -> list[Fragment]:
    """One fragment for every fragment and part variant."""
    return [
        factory.create_text_content_fragment("hello"),
        factory.create_error_content_fragment("upstream timed out"),
        factory.create_image_content_fragment(dblob_ref, "a cat", 640, 480),
        factory.create_image_content_fragment(create_data_ref_url("https://example.com/cat.png")),
        factory.create_placeholder_meta_fragment("thinking..."),
        factory.create_content_fragment(
            create_function_call_invocation_part("call-1", "get_weather", None, "Weather", schema)
        ),
        factory.create_content_fragment(
            create_code_execution_invocation_part("call-2", "print(1)", "python", "gemini_auto_inline")
        ),
        factory.create_content_fragment(
            create_function_call_response_part("call-1", "sunny", "get_weather", False, "server")
        ),
        factory.create_content_fragment(
            create_code_execution_response_part("call-2", "1", "gemini_auto_inline", "oops", "upstream")
        ),
        factory.create_content_fragment(SentinelPart()),
        doc_attachment,
        factory.create_image_attachment_fragment("cat.png", "from clipboard", dblob_ref, "cat"),
        factory.create_attachment_fragment("t", "c", SentinelPart()),
        factory.create_sentinel_fragment(),
    ]


class TestDuplicateFragments:
    """Test duplicate_fragments."""

    def test_length_preserved(self, factory: FragmentFactory, every_fragment: list[Fragment]) -> None:
        """The copy has as many fragments as the source, in the same order."""
        copies = duplicate_fragments(every_fragment, factory=factory)

        assert len(copies) == len(every_fragment)
        assert [c.ft for c in copies] == [f.ft for f in every_fragment]

    def test_empty_sequence(self, factory: FragmentFactory) -> None:
        """Duplicating nothing yields an empty list."""
        assert duplicate_fragments([], factory=factory) == []

    def test_fresh_ids(self, factory: FragmentFactory, every_fragment: list[Fragment]) -> None:
        """No copy reuses a source fragment id."""
        copies = duplicate_fragments(every_fragment, factory=factory)

        for source, copy in zip(every_fragment, copies):
            assert copy.f_id != source.f_id

    def test_equal_modulo_identity(
        self, factory: FragmentFactory, every_fragment: list[Fragment]
    ) -> None:
        """Stripping ids and creation times, copies equal their sources."""
        copies = duplicate_fragments(every_fragment, factory=factory)

        for source, copy in zip(every_fragment, copies):
            assert _without_identity(copy) == _without_identity(source)

    def test_twice_is_semantically_stable(
        self, factory: FragmentFactory, every_fragment: list[Fragment]
    ) -> None:
        """Duplicating a duplicate keeps the content and changes the ids again."""
        once = duplicate_fragments(every_fragment, factory=factory)
        twice = duplicate_fragments(once, factory=factory)

        assert [_without_identity(f) for f in twice] == [_without_identity(f) for f in every_fragment]
        assert {f.f_id for f in twice}.isdisjoint({f.f_id for f in once})

    def test_no_shared_model_objects(
        self, factory: FragmentFactory, every_fragment: list[Fragment]
    ) -> None:
        """Parts and their payloads are rebuilt, never shared."""
        copies = duplicate_fragments(every_fragment, factory=factory)

        for source, copy in zip(every_fragment, copies):
            assert copy is not source
            if isinstance(source, (ContentFragment, AttachmentFragment)):
                assert copy.part is not source.part
                if isinstance(source.part, ImageRefPart):
                    assert copy.part.data_ref is not source.part.data_ref
                if isinstance(source.part, DocPart):
                    assert copy.part.data is not source.part.data
                    assert copy.part.meta is not source.part.meta

    def test_dblob_reference_copied_by_value(
        self, factory: FragmentFactory, dblob_ref: DataRefDBlob
    ) -> None:
        """The copy points at the same blob asset."""
        source = factory.create_image_attachment_fragment("cat.png", "from clipboard", dblob_ref)

        (copy,) = duplicate_fragments([source], factory=factory)

        assert isinstance(copy.part.data_ref, DataRefDBlob)
        assert copy.part.data_ref.dblob_asset_id == "abc"
        assert copy.part.data_ref.mime_type == "image/png"
        assert copy.part.data_ref.bytes_size == 1024

    def test_attachment_keeps_title_and_takes_new_time(
        self, factory: FragmentFactory, clock: FixedClock, doc_attachment: AttachmentFragment
    ) -> None:
        """Attachments keep title and caption; creation time is taken at duplication."""
        clock.now += 5_000

        (copy,) = duplicate_fragments([doc_attachment], factory=factory)

        assert isinstance(copy, AttachmentFragment)
        assert copy.title == doc_attachment.title
        assert copy.caption == doc_attachment.caption
        assert copy.created == doc_attachment.created + 5_000

    def test_sentinel_fragment(self, factory: FragmentFactory) -> None:
        """Sentinel fragments duplicate to fresh sentinels."""
        source = factory.create_sentinel_fragment()

        (copy,) = duplicate_fragments([source], factory=factory)

        assert isinstance(copy, SentinelFragment)
        assert copy.f_id != source.f_id

    def test_source_sequence_untouched(
        self,
        factory: FragmentFactory,
        text_fragment: ContentFragment,
        doc_attachment: AttachmentFragment,
        error_fragment: ContentFragment,
    ) -> None:
        """A mixed sequence of three is copied without touching the source list."""
        source = [text_fragment, doc_attachment, error_fragment]
        snapshot = list(source)
        records = [f.to_record() for f in source]

        copies = duplicate_fragments(source, factory=factory)

        assert len(copies) == 3
        assert copies is not source
        assert source == snapshot
        assert [f.to_record() for f in source] == records
        assert [c.ft for c in copies] == ["content", "attachment", "content"]
        assert all(c.f_id not in {f.f_id for f in source} for c in copies)

    def test_uses_default_factory(self, factory: FragmentFactory, text_fragment: ContentFragment) -> None:
        """Without an explicit factory the process-wide default is used."""
        set_default_factory(factory)

        (copy,) = duplicate_fragments([text_fragment])

        assert copy.f_id == "f0000002"


class TestArgsSchemaCopy:
    """Test duplication of tool call argument schemas."""

    def _tool_call(self, factory: FragmentFactory, schema: dict[str, Any]) -> ContentFragment:
        return factory.create_content_fragment(
            create_function_call_invocation_part("call-1", "get_weather", "{}", None, schema)
        )

    def test_deep_copy_does_not_alias(self, factory: FragmentFactory, schema: dict[str, Any]) -> None:
        """Mutating the copied schema leaves the source untouched."""
        source = self._tool_call(factory, schema)

        (copy,) = duplicate_fragments([source], factory=factory, args_schema_copy="deep")

        assert isinstance(copy.part.call, FunctionCallInvocation)
        copied_schema = copy.part.call.args_schema
        assert copied_schema == source.part.call.args_schema
        copied_schema["properties"]["city"]["enum"].append("Oslo")
        assert source.part.call.args_schema["properties"]["city"]["enum"] == ["Paris", "Rome"]

    def test_deep_is_default(self, factory: FragmentFactory, schema: dict[str, Any]) -> None:
        """Deep copies are made unless configured otherwise."""
        source = self._tool_call(factory, schema)

        (copy,) = FragmentDuplicator(factory).duplicate_fragments([source])

        nested = copy.part.call.args_schema["properties"]
        assert nested is not source.part.call.args_schema["properties"]

    def test_default_from_environment(
        self,
        id_generator: SequentialIdGenerator,
        clock: FixedClock,
        schema: dict[str, Any],
        monkeypatch,
    ) -> None:
        """The copy mode can be set through the environment."""
        monkeypatch.setenv("CHAT_FRAGMENTS_ARGS_SCHEMA_COPY", "shared")
        factory = FragmentFactory(id_generator=id_generator, clock=clock)
        source = self._tool_call(factory, schema)

        (copy,) = FragmentDuplicator(factory).duplicate_fragments([source])

        assert copy.part.call.args_schema["properties"] is source.part.call.args_schema["properties"]

    def test_shared_warns_once(
        self, factory: FragmentFactory, schema: dict[str, Any], caplog
    ) -> None:
        """Shared schemas log a single warning per duplicator."""
        duplicator = FragmentDuplicator(factory, args_schema_copy="shared")
        sources = [self._tool_call(factory, schema), self._tool_call(factory, schema)]

        with caplog.at_level(logging.WARNING, logger="chat_fragments.duplication"):
            duplicator.duplicate_fragments(sources)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "shared" in warnings[0].getMessage()

    def test_mode_is_read_once_from_factory_config(
        self, factory: FragmentFactory, schema: dict[str, Any], monkeypatch
    ) -> None:
        """Duplication uses the settings captured by the factory, not the live environment."""
        source = self._tool_call(factory, schema)
        monkeypatch.setenv("CHAT_FRAGMENTS_ARGS_SCHEMA_COPY", "not-a-mode")

        (copy,) = duplicate_fragments([source], factory=factory)

        assert factory.config.args_schema_copy == "deep"
        assert copy.part.call.args_schema["properties"] is not source.part.call.args_schema["properties"]
