from typing import Annotated, Literal

from pydantic import Field

from chat_fragments.models.base import FragmentModel
from chat_fragments.models.parts import AttachmentPart, ContentPart

# Fragment id: short, unique within the owning message only
FragmentId = str


class ContentFragment(FragmentModel):
    """Primary message content. A message carries one or more."""

    ft: Literal["content"] = "content"
    f_id: FragmentId
    part: ContentPart


class AttachmentFragment(FragmentModel):
    """Supplementary content, displayed below the message. Zero or more.

    Attributes:
        title: Label of the attachment (file name, named id, overview).
        caption: Extra information such as provenance or a content preview.
        created: Creation time in epoch milliseconds.
    """

    ft: Literal["attachment"] = "attachment"
    f_id: FragmentId
    title: str
    caption: str
    created: int
    part: AttachmentPart


class SentinelFragment(FragmentModel):
    """Payload-free variant. Must never appear in real data."""

    ft: Literal["_ft_sentinel"] = "_ft_sentinel"
    f_id: FragmentId


Fragment = Annotated[
    ContentFragment | AttachmentFragment | SentinelFragment,
    Field(discriminator="ft"),
]
