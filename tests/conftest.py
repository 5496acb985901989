from collections.abc import Iterator
from itertools import count

import pytest

from chat_fragments.factories import FragmentFactory, create_data_inline_text, set_default_factory
from chat_fragments.models.data import DataRefDBlob
from chat_fragments.models.fragments import AttachmentFragment, ContentFragment
from chat_fragments.models.parts import DocMeta


class SequentialIdGenerator:
    """Deterministic id generator for testing."""

    def __init__(self) -> None:
        self._counter = count(1)
        self.scopes: list[str] = []

    def __call__(self, scope: str) -> str:
        self.scopes.append(scope)
        return f"f{next(self._counter):07d}"


class FixedClock:
    """Clock returning a settable time in epoch ms."""

    def __init__(self, now: int = 1_700_000_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def factory(id_generator: SequentialIdGenerator, clock: FixedClock) -> FragmentFactory:
    """Provide a factory with deterministic ids and time."""
    return FragmentFactory(id_generator=id_generator, clock=clock)


@pytest.fixture(autouse=True)
def reset_default_factory() -> Iterator[None]:
    """Keep tests from leaking a custom process-wide factory."""
    yield
    set_default_factory(None)


@pytest.fixture
def dblob_ref() -> DataRefDBlob:
    return DataRefDBlob(dblob_asset_id="abc", mime_type="image/png", bytes_size=1024)


@pytest.fixture
def text_fragment(factory: FragmentFactory) -> ContentFragment:
    return factory.create_text_content_fragment("hello")


@pytest.fixture
def doc_attachment(factory: FragmentFactory) -> AttachmentFragment:
    return factory.create_doc_attachment_fragment(
        "notes.md",
        "pasted",
        "text/markdown",
        create_data_inline_text("# Notes", "text/markdown"),
        "clipboard",
        DocMeta(src_file_name="notes.md", src_file_size=7),
    )


@pytest.fixture
def error_fragment(factory: FragmentFactory) -> ContentFragment:
    return factory.create_error_content_fragment("upstream timed out")
