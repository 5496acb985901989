from chat_fragments.models.base import FragmentModel
from chat_fragments.models.data import (
    DataInline,
    DataInlineText,
    DataRef,
    DataRefDBlob,
    DataRefUrl,
)
from chat_fragments.models.fragments import (
    AttachmentFragment,
    ContentFragment,
    Fragment,
    FragmentId,
    SentinelFragment,
)
from chat_fragments.models.parts import (
    AnyPart,
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
    ToolInvocation,
    ToolInvocationPart,
    ToolResponse,
    ToolResponsePart,
)

__all__ = [
    "FragmentModel",
    # Data
    "DataInline",
    "DataInlineText",
    "DataRef",
    "DataRefDBlob",
    "DataRefUrl",
    # Parts
    "AnyPart",
    "AttachmentPart",
    "CodeExecutionArguments",
    "CodeExecutionInvocation",
    "CodeExecutionResponse",
    "CodeExecutionVariant",
    "ContentPart",
    "DocMeta",
    "DocMimeType",
    "DocPart",
    "ErrorPart",
    "FunctionCallInvocation",
    "FunctionCallResponse",
    "ImageRefPart",
    "PlaceholderPart",
    "SentinelPart",
    "TextPart",
    "ToolEnvironment",
    "ToolInvocation",
    "ToolInvocationPart",
    "ToolResponse",
    "ToolResponsePart",
    # Fragments
    "AttachmentFragment",
    "ContentFragment",
    "Fragment",
    "FragmentId",
    "SentinelFragment",
]
