"""Data references and inline data carried by message parts.

A ``DataRef`` points at bytes living elsewhere (a remote URL, or an asset in an
externally managed blob store). ``DataInline`` embeds the payload directly in
the record.
"""

from typing import Annotated, Literal

from pydantic import Field

from chat_fragments.models.base import FragmentModel


class DataInlineText(FragmentModel):
    """Inline text payload."""

    idt: Literal["text"] = "text"
    text: str
    mime_type: str | None = None  # optional, upper layers usually know it


# Single variant for now; binary inline variants join as a discriminated union on `idt`
DataInline = DataInlineText


class DataRefUrl(FragmentModel):
    """Remotely accessible URL. Reserved, not produced right now."""

    reftype: Literal["url"] = "url"
    url: str


class DataRefDBlob(FragmentModel):
    """Non-owning reference to an asset in the external blob store."""

    reftype: Literal["dblob"] = "dblob"
    dblob_asset_id: str
    mime_type: str
    bytes_size: int = Field(ge=0)


DataRef = Annotated[DataRefUrl | DataRefDBlob, Field(discriminator="reftype")]
