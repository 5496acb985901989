"""Deep duplication of message fragments.

Duplicating walks Fragment -> Part -> Data and rebuilds every level through
its factory, so the copy shares no model objects with the source. Fragments
get new ids and attachments get a new creation time. A dblob reference is
copied by value and keeps pointing at the same externally owned asset.

Every dispatch ends in ``assert_never``: adding a variant to any union makes
a type checker flag each match below until the variant is handled.
"""

import copy
import logging
from collections.abc import Sequence
from typing import Any, Literal, TypeVar, assert_never

from chat_fragments.factories import (
    FragmentFactory,
    create_code_execution_invocation_part,
    create_code_execution_response_part,
    create_doc_part,
    create_error_part,
    create_function_call_invocation_part,
    create_function_call_response_part,
    create_image_ref_part,
    create_placeholder_part,
    create_sentinel_part,
    create_text_part,
    duplicate_data_inline,
    duplicate_data_ref,
    get_default_factory,
)
from chat_fragments.models.fragments import (
    AttachmentFragment,
    ContentFragment,
    Fragment,
    SentinelFragment,
)
from chat_fragments.models.parts import (
    AnyPart,
    CodeExecutionInvocation,
    CodeExecutionResponse,
    DocMeta,
    DocPart,
    ErrorPart,
    FunctionCallInvocation,
    FunctionCallResponse,
    ImageRefPart,
    PlaceholderPart,
    SentinelPart,
    TextPart,
    ToolInvocationPart,
    ToolResponsePart,
)

logger = logging.getLogger(__name__)

ArgsSchemaCopy = Literal["deep", "shared"]

TPart = TypeVar("TPart", bound=AnyPart)


def duplicate_doc_meta(meta: DocMeta | None) -> DocMeta | None:
    if meta is None:
        return None
    return DocMeta(
        code_language=meta.code_language,
        src_file_name=meta.src_file_name,
        src_file_size=meta.src_file_size,
        src_ocr_from=meta.src_ocr_from,
    )


class FragmentDuplicator:
    """Recursive deep copy of fragment sequences.

    Args:
        factory: Rebuilds fragments with fresh ids. Uses the process-wide
            default factory if not provided.
        args_schema_copy: How tool-call argument schemas are copied. "deep"
            makes an independent structural copy, "shared" reuses the same
            object. If None, uses the factory config's args_schema_copy.
    """

    def __init__(
        self,
        factory: FragmentFactory | None = None,
        args_schema_copy: ArgsSchemaCopy | None = None,
    ) -> None:
        self._factory = factory or get_default_factory()
        self._args_schema_copy: ArgsSchemaCopy = (
            args_schema_copy or self._factory.config.args_schema_copy
        )
        self._warned_shared_schema = False

    def duplicate_fragments(self, fragments: Sequence[Fragment]) -> list[Fragment]:
        """Duplicate an ordered sequence of fragments.

        Args:
            fragments: Source fragments. Left untouched.

        Returns:
            A new list of the same length, pairwise equal in content but with
            fresh fragment ids.
        """
        duplicated = [self.duplicate_fragment(fragment) for fragment in fragments]
        logger.debug("duplicate_fragments count=%d", len(duplicated))
        return duplicated

    def duplicate_fragment(self, fragment: Fragment) -> Fragment:
        match fragment:
            case ContentFragment():
                return self._factory.create_content_fragment(self.duplicate_part(fragment.part))
            case AttachmentFragment():
                return self._factory.create_attachment_fragment(
                    fragment.title,
                    fragment.caption,
                    self.duplicate_part(fragment.part),
                )
            case SentinelFragment():
                return self._factory.create_sentinel_fragment()
            case _:
                assert_never(fragment)

    def duplicate_part(self, part: TPart) -> TPart:
        """Rebuild a part and its payload. The part kind is preserved."""
        duplicated: AnyPart
        match part:
            case DocPart():
                duplicated = create_doc_part(
                    part.mime_type,
                    duplicate_data_inline(part.data),
                    part.ref,
                    duplicate_doc_meta(part.meta),
                )
            case ErrorPart():
                duplicated = create_error_part(part.error)
            case ImageRefPart():
                duplicated = create_image_ref_part(
                    duplicate_data_ref(part.data_ref),
                    part.alt_text,
                    part.width,
                    part.height,
                )
            case PlaceholderPart():
                duplicated = create_placeholder_part(part.placeholder_text)
            case TextPart():
                duplicated = create_text_part(part.text)
            case ToolInvocationPart():
                duplicated = self._duplicate_tool_invocation(part)
            case ToolResponsePart():
                duplicated = self._duplicate_tool_response(part)
            case SentinelPart():
                duplicated = create_sentinel_part()
            case _:
                assert_never(part)
        return duplicated  # type: ignore[return-value]

    def _duplicate_tool_invocation(self, part: ToolInvocationPart) -> ToolInvocationPart:
        call = part.call
        match call:
            case FunctionCallInvocation():
                return create_function_call_invocation_part(
                    part.id,
                    call.name,
                    call.args,
                    call.description,
                    self._duplicate_args_schema(call.args_schema),
                )
            case CodeExecutionInvocation():
                return create_code_execution_invocation_part(
                    part.id,
                    call.arguments.code,
                    call.arguments.language,
                    call.variant,
                )
            case _:
                assert_never(call)

    def _duplicate_tool_response(self, part: ToolResponsePart) -> ToolResponsePart:
        response = part.response
        match response:
            case FunctionCallResponse():
                return create_function_call_response_part(
                    part.id,
                    response.result,
                    response.name,
                    part.error,
                    part.environment,
                )
            case CodeExecutionResponse():
                return create_code_execution_response_part(
                    part.id,
                    response.result,
                    response.variant,
                    part.error,
                    part.environment,
                )
            case _:
                assert_never(response)

    def _duplicate_args_schema(self, schema: dict[str, Any] | None) -> dict[str, Any] | None:
        if schema is None:
            return None
        if self._args_schema_copy == "deep":
            return copy.deepcopy(schema)
        if not self._warned_shared_schema:
            logger.warning(
                "args_schema_copy=shared: tool call schemas are shared between "
                "duplicates and must not be mutated"
            )
            self._warned_shared_schema = True
        return schema


def duplicate_fragments(
    fragments: Sequence[Fragment],
    *,
    factory: FragmentFactory | None = None,
    args_schema_copy: ArgsSchemaCopy | None = None,
) -> list[Fragment]:
    """Deep-copy a sequence of fragments, assigning fresh fragment ids.

    Args:
        fragments: Source fragments, in message order.
        factory: Factory used to rebuild fragments. Defaults to the
            process-wide factory.
        args_schema_copy: Override for the factory config's args_schema_copy.

    Returns:
        A new list of duplicated fragments.
    """
    return FragmentDuplicator(factory, args_schema_copy).duplicate_fragments(fragments)
