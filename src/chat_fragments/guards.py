"""Type guards for fragments and parts.

Each guard only inspects the tag field, so it stays correct as new variants
are added: an unknown tag is never mistaken for a known one.
"""

from typing import TypeGuard

from chat_fragments.models.fragments import AttachmentFragment, ContentFragment, Fragment
from chat_fragments.models.parts import (
    AnyPart,
    DocPart,
    ImageRefPart,
    PlaceholderPart,
    TextPart,
    ToolInvocationPart,
    ToolResponsePart,
)


def is_content_fragment(fragment: Fragment) -> TypeGuard[ContentFragment]:
    return fragment.ft == "content"


def is_attachment_fragment(fragment: Fragment) -> TypeGuard[AttachmentFragment]:
    return fragment.ft == "attachment"


def is_content_or_attachment_fragment(
    fragment: Fragment,
) -> TypeGuard[ContentFragment | AttachmentFragment]:
    return fragment.ft == "content" or fragment.ft == "attachment"


def is_doc_part(part: AnyPart) -> TypeGuard[DocPart]:
    return part.pt == "doc"


def is_image_ref_part(part: AnyPart) -> TypeGuard[ImageRefPart]:
    return part.pt == "image_ref"


def is_text_part(part: AnyPart) -> TypeGuard[TextPart]:
    return part.pt == "text"


def is_placeholder_part(part: AnyPart) -> TypeGuard[PlaceholderPart]:
    return part.pt == "ph"


def is_tool_invocation_part(part: AnyPart) -> TypeGuard[ToolInvocationPart]:
    return part.pt == "tool_call"


def is_tool_response_part(part: AnyPart) -> TypeGuard[ToolResponsePart]:
    return part.pt == "tool_response"
