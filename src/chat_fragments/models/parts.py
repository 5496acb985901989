"""Message parts: the content payloads wrapped by fragments.

Parts are data at rest. Field names and tag values are read directly from
storage, so extend carefully and never rename.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from chat_fragments.models.base import FragmentModel
from chat_fragments.models.data import DataInline, DataRef

DocMimeType = Literal[
    "application/vnd.agi.ego",  # attached messages
    "application/vnd.agi.ocr",  # images/pdfs converted to text
    "text/html",
    "text/markdown",
    "text/plain",
]

ToolEnvironment = Literal["upstream", "server", "client"]

CodeExecutionVariant = Literal["gemini_auto_inline"]


class DocMeta(FragmentModel):
    """Provenance details of a document part."""

    code_language: str | None = None
    src_file_name: str | None = None
    src_file_size: int | None = None
    src_ocr_from: Literal["image", "pdf"] | None = None


class DocPart(FragmentModel):
    """Document attachment."""

    pt: Literal["doc"] = "doc"
    mime_type: DocMimeType = Field(alias="type")
    data: DataInline
    ref: str
    meta: DocMeta | None = None


class ErrorPart(FragmentModel):
    """Upstream failure surfaced to the user as content."""

    pt: Literal["error"] = "error"
    error: str


class ImageRefPart(FragmentModel):
    pt: Literal["image_ref"] = "image_ref"
    data_ref: DataRef
    alt_text: str | None = None
    width: int | None = None
    height: int | None = None


class TextPart(FragmentModel):
    pt: Literal["text"] = "text"
    text: str


class FunctionCallInvocation(FragmentModel):
    """Signature of a function call requested by the model.

    Attributes:
        name: Name of the function as passed in the tool definition.
        args: JSON-encoded arguments, or None when there are none.
        description: Description copied from the tool definition.
        args_schema: JSON Schema of the arguments, copied from the definition.
    """

    type: Literal["function_call"] = "function_call"
    name: str
    args: str | None
    description: str | None = Field(default=None, alias="_description")
    args_schema: dict[str, Any] | None = Field(default=None, alias="_args_schema")

    @model_serializer(mode="wrap")
    def keep_null_args(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # `args` is required even when null; exclude_none must not drop it
        data = handler(self)
        data.setdefault("args", None)
        return data


class CodeExecutionArguments(FragmentModel):
    code: str
    language: str | None = None


class CodeExecutionInvocation(FragmentModel):
    type: Literal["code_execution"] = "code_execution"
    variant: CodeExecutionVariant | None = None
    arguments: CodeExecutionArguments


ToolInvocation = Annotated[
    FunctionCallInvocation | CodeExecutionInvocation, Field(discriminator="type")
]


class ToolInvocationPart(FragmentModel):
    """Tool call issued by the model. Shown to developers only."""

    pt: Literal["tool_call"] = "tool_call"
    id: str
    call: ToolInvocation


class FunctionCallResponse(FragmentModel):
    type: Literal["function_call"] = "function_call"
    result: str
    name: str | None = Field(default=None, alias="_name")


class CodeExecutionResponse(FragmentModel):
    type: Literal["code_execution"] = "code_execution"
    result: str
    variant: CodeExecutionVariant | None = Field(default=None, alias="_variant")


ToolResponse = Annotated[
    FunctionCallResponse | CodeExecutionResponse, Field(discriminator="type")
]


class ToolResponsePart(FragmentModel):
    """Result of a tool call, matched to the invocation by ``id``."""

    pt: Literal["tool_response"] = "tool_response"
    id: str
    response: ToolResponse
    error: bool | str | None = None
    environment: ToolEnvironment | None = Field(default=None, alias="_environment")


class PlaceholderPart(FragmentModel):
    """Placeholder awaiting replacement by another part. Never final content."""

    pt: Literal["ph"] = "ph"
    placeholder_text: str = Field(alias="pText")


class SentinelPart(FragmentModel):
    """Payload-free variant. Must never appear in real data."""

    pt: Literal["_pt_sentinel"] = "_pt_sentinel"


ContentPart = Annotated[
    ErrorPart
    | ImageRefPart
    | TextPart
    | ToolInvocationPart
    | ToolResponsePart
    | PlaceholderPart
    | SentinelPart,
    Field(discriminator="pt"),
]

AttachmentPart = Annotated[
    DocPart | ImageRefPart | SentinelPart,
    Field(discriminator="pt"),
]

# Any part that can be held by a content or attachment fragment
AnyPart = (
    DocPart
    | ErrorPart
    | ImageRefPart
    | TextPart
    | ToolInvocationPart
    | ToolResponsePart
    | PlaceholderPart
    | SentinelPart
)
