"""Construction of fragments, parts and data values.

Factories are the only sanctioned way to build well-formed values. Data and
part factories are plain functions; fragment factories need a fresh id (and,
for attachments, the current time) and live on ``FragmentFactory``.

Usage:
    ```python
    from chat_fragments import create_text_content_fragment

    fragment = create_text_content_fragment("hello")
    ```

With injected collaborators:
    ```python
    from chat_fragments import FragmentFactory

    factory = FragmentFactory(id_generator=lambda scope: "f1", clock=lambda: 0)
    fragment = factory.create_text_content_fragment("hello")
    ```
"""

import logging
import threading
from typing import Any, assert_never

from chat_fragments.config import FragmentsConfig
from chat_fragments.ids.generators import SystemClock, UuidIdGenerator
from chat_fragments.ids.protocol import Clock, IdGenerator
from chat_fragments.models.data import DataInline, DataInlineText, DataRef, DataRefDBlob, DataRefUrl
from chat_fragments.models.fragments import AttachmentFragment, ContentFragment, SentinelFragment
from chat_fragments.models.parts import (
    AttachmentPart,
    CodeExecutionArguments,
    CodeExecutionInvocation,
    CodeExecutionResponse,
    CodeExecutionVariant,
    ContentPart,
    DocMeta,
    DocMimeType,
    DocPart,
    ErrorPart,
    FunctionCallInvocation,
    FunctionCallResponse,
    ImageRefPart,
    PlaceholderPart,
    SentinelPart,
    TextPart,
    ToolEnvironment,
    ToolInvocationPart,
    ToolResponsePart,
)

logger = logging.getLogger(__name__)


# -- Data ---------------------------------------------------------------------


def create_data_inline_text(text: str, mime_type: str | None = None) -> DataInlineText:
    return DataInlineText(text=text, mime_type=mime_type)


def create_data_ref_url(url: str) -> DataRefUrl:
    return DataRefUrl(url=url)


def create_data_ref_dblob(dblob_asset_id: str, mime_type: str, bytes_size: int) -> DataRefDBlob:
    return DataRefDBlob(dblob_asset_id=dblob_asset_id, mime_type=mime_type, bytes_size=bytes_size)


def duplicate_data_inline(data: DataInline) -> DataInline:
    """Copy inline data by value."""
    match data:
        case DataInlineText():
            return create_data_inline_text(data.text, data.mime_type)
        case _:
            assert_never(data)


def duplicate_data_ref(ref: DataRef) -> DataRef:
    """Copy a data reference by value.

    A dblob reference still points at the same externally owned asset; the
    bytes themselves are never copied.
    """
    match ref:
        case DataRefUrl():
            return create_data_ref_url(ref.url)
        case DataRefDBlob():
            return create_data_ref_dblob(ref.dblob_asset_id, ref.mime_type, ref.bytes_size)
        case _:
            assert_never(ref)


# -- Parts --------------------------------------------------------------------


def create_doc_part(
    mime_type: DocMimeType,
    data: DataInline,
    ref: str,
    meta: DocMeta | None = None,
) -> DocPart:
    return DocPart(mime_type=mime_type, data=data, ref=ref, meta=meta)


def create_error_part(error: str) -> ErrorPart:
    return ErrorPart(error=error)


def create_image_ref_part(
    data_ref: DataRef,
    alt_text: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> ImageRefPart:
    return ImageRefPart(data_ref=data_ref, alt_text=alt_text, width=width, height=height)


def create_text_part(text: str) -> TextPart:
    return TextPart(text=text)


def create_function_call_invocation_part(
    id: str,
    name: str,
    args: str | None,
    description: str | None = None,
    args_schema: dict[str, Any] | None = None,
) -> ToolInvocationPart:
    return ToolInvocationPart(
        id=id,
        call=FunctionCallInvocation(
            name=name,
            args=args,
            description=description,
            args_schema=args_schema,
        ),
    )


def create_code_execution_invocation_part(
    id: str,
    code: str,
    language: str | None = None,
    variant: CodeExecutionVariant | None = None,
) -> ToolInvocationPart:
    return ToolInvocationPart(
        id=id,
        call=CodeExecutionInvocation(
            variant=variant,
            arguments=CodeExecutionArguments(code=code, language=language),
        ),
    )


def create_function_call_response_part(
    id: str,
    result: str,
    name: str | None = None,
    error: bool | str | None = None,
    environment: ToolEnvironment | None = None,
) -> ToolResponsePart:
    return ToolResponsePart(
        id=id,
        response=FunctionCallResponse(result=result, name=name),
        error=error,
        environment=environment,
    )


def create_code_execution_response_part(
    id: str,
    result: str,
    variant: CodeExecutionVariant | None = None,
    error: bool | str | None = None,
    environment: ToolEnvironment | None = None,
) -> ToolResponsePart:
    return ToolResponsePart(
        id=id,
        response=CodeExecutionResponse(result=result, variant=variant),
        error=error,
        environment=environment,
    )


def create_placeholder_part(placeholder_text: str) -> PlaceholderPart:
    return PlaceholderPart(placeholder_text=placeholder_text)


def create_sentinel_part() -> SentinelPart:
    return SentinelPart()


# -- Fragments ----------------------------------------------------------------


class FragmentFactory:
    """Builds fragments with fresh ids and creation times.

    Args:
        id_generator: Source of fragment ids. Uses UuidIdGenerator if not
            provided.
        clock: Source of attachment creation times (epoch ms). Uses the
            system clock if not provided.
        config: Settings for the id scope, the default id length and the
            duplication schema copy mode. Read from the environment once if
            not provided.
    """

    def __init__(
        self,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
        config: FragmentsConfig | None = None,
    ) -> None:
        self._config = config or FragmentsConfig()
        self._id_generator = id_generator or UuidIdGenerator(length=self._config.fragment_id_length)
        self._clock = clock or SystemClock()
        self._id_scope = self._config.fragment_id_scope

    @classmethod
    def from_config(cls, config: FragmentsConfig | None = None) -> "FragmentFactory":
        """Create a factory with the default id generator and clock."""
        return cls(config=config)

    @property
    def config(self) -> FragmentsConfig:
        return self._config

    def new_fragment_id(self) -> str:
        return self._id_generator(self._id_scope)

    def create_content_fragment(self, part: ContentPart) -> ContentFragment:
        return ContentFragment(f_id=self.new_fragment_id(), part=part)

    def create_attachment_fragment(
        self, title: str, caption: str, part: AttachmentPart
    ) -> AttachmentFragment:
        return AttachmentFragment(
            f_id=self.new_fragment_id(),
            title=title,
            caption=caption,
            created=self._clock(),
            part=part,
        )

    def create_sentinel_fragment(self) -> SentinelFragment:
        return SentinelFragment(f_id=self.new_fragment_id())

    def create_error_content_fragment(self, error: str) -> ContentFragment:
        return self.create_content_fragment(create_error_part(error))

    def create_image_content_fragment(
        self,
        data_ref: DataRef,
        alt_text: str | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> ContentFragment:
        return self.create_content_fragment(create_image_ref_part(data_ref, alt_text, width, height))

    def create_placeholder_meta_fragment(self, placeholder_text: str) -> ContentFragment:
        return self.create_content_fragment(create_placeholder_part(placeholder_text))

    def create_text_content_fragment(self, text: str) -> ContentFragment:
        return self.create_content_fragment(create_text_part(text))

    def create_doc_attachment_fragment(
        self,
        title: str,
        caption: str,
        mime_type: DocMimeType,
        data: DataInline,
        ref: str,
        meta: DocMeta | None = None,
    ) -> AttachmentFragment:
        return self.create_attachment_fragment(
            title, caption, create_doc_part(mime_type, data, ref, meta)
        )

    def create_image_attachment_fragment(
        self,
        title: str,
        caption: str,
        data_ref: DataRef,
        alt_text: str | None = None,
        width: int | None = None,
        height: int | None = None,
    ) -> AttachmentFragment:
        return self.create_attachment_fragment(
            title, caption, create_image_ref_part(data_ref, alt_text, width, height)
        )

    def special_content_part_to_doc_attachment_fragment(
        self,
        title: str,
        caption: str,
        content_part: ContentPart,
        ref: str,
        doc_meta: DocMeta | None = None,
    ) -> AttachmentFragment:
        """Turn a content part into an attachment.

        Text becomes a text/plain document and images keep a copy of their
        data reference. Any other kind yields a document stating that the
        conversion is not supported, so this never fails.
        """
        match content_part:
            case TextPart():
                return self.create_doc_attachment_fragment(
                    title,
                    caption,
                    "text/plain",
                    create_data_inline_text(content_part.text, "text/plain"),
                    ref,
                    doc_meta,
                )
            case ImageRefPart():
                return self.create_image_attachment_fragment(
                    title,
                    caption,
                    duplicate_data_ref(content_part.data_ref),
                    content_part.alt_text,
                    content_part.width,
                    content_part.height,
                )
            case (
                DocPart()
                | ErrorPart()
                | ToolInvocationPart()
                | ToolResponsePart()
                | PlaceholderPart()
                | SentinelPart()
            ):
                logger.debug("content_to_attachment unsupported pt=%s", content_part.pt)
                return self.create_doc_attachment_fragment(
                    "Error",
                    "Content to Attachment",
                    "text/plain",
                    create_data_inline_text(
                        f"Conversion of '{content_part.pt}' is not supported yet.",
                        "text/plain",
                    ),
                    ref,
                    doc_meta,
                )
            case _:
                assert_never(content_part)


def replace_text_content_fragment(fragment: ContentFragment, text: str) -> ContentFragment:
    """Return a copy of ``fragment`` holding a new text part. The id is kept."""
    return fragment.model_copy(update={"part": create_text_part(text)})


# -- Process-wide default -----------------------------------------------------

_default_factory: FragmentFactory | None = None
_default_factory_lock = threading.Lock()


def get_default_factory() -> FragmentFactory:
    """Return the shared factory, creating it from FragmentsConfig on first use."""
    global _default_factory
    with _default_factory_lock:
        if _default_factory is None:
            _default_factory = FragmentFactory.from_config()
        return _default_factory


def set_default_factory(factory: FragmentFactory | None) -> None:
    """Replace the shared factory. Passing None resets it to the configured default."""
    global _default_factory
    with _default_factory_lock:
        _default_factory = factory


def create_error_content_fragment(error: str) -> ContentFragment:
    return get_default_factory().create_error_content_fragment(error)


def create_image_content_fragment(
    data_ref: DataRef,
    alt_text: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> ContentFragment:
    return get_default_factory().create_image_content_fragment(data_ref, alt_text, width, height)


def create_placeholder_meta_fragment(placeholder_text: str) -> ContentFragment:
    return get_default_factory().create_placeholder_meta_fragment(placeholder_text)


def create_text_content_fragment(text: str) -> ContentFragment:
    return get_default_factory().create_text_content_fragment(text)


def create_doc_attachment_fragment(
    title: str,
    caption: str,
    mime_type: DocMimeType,
    data: DataInline,
    ref: str,
    meta: DocMeta | None = None,
) -> AttachmentFragment:
    return get_default_factory().create_doc_attachment_fragment(
        title, caption, mime_type, data, ref, meta
    )


def create_image_attachment_fragment(
    title: str,
    caption: str,
    data_ref: DataRef,
    alt_text: str | None = None,
    width: int | None = None,
    height: int | None = None,
) -> AttachmentFragment:
    return get_default_factory().create_image_attachment_fragment(
        title, caption, data_ref, alt_text, width, height
    )


def special_content_part_to_doc_attachment_fragment(
    title: str,
    caption: str,
    content_part: ContentPart,
    ref: str,
    doc_meta: DocMeta | None = None,
) -> AttachmentFragment:
    return get_default_factory().special_content_part_to_doc_attachment_fragment(
        title, caption, content_part, ref, doc_meta
    )
