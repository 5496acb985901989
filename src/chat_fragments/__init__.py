from chat_fragments.config import FragmentsConfig
from chat_fragments.duplication import FragmentDuplicator, duplicate_fragments
from chat_fragments.factories import (
    FragmentFactory,
    create_code_execution_invocation_part,
    create_code_execution_response_part,
    create_data_inline_text,
    create_data_ref_dblob,
    create_data_ref_url,
    create_doc_attachment_fragment,
    create_doc_part,
    create_error_content_fragment,
    create_error_part,
    create_function_call_invocation_part,
    create_function_call_response_part,
    create_image_attachment_fragment,
    create_image_content_fragment,
    create_image_ref_part,
    create_placeholder_meta_fragment,
    create_placeholder_part,
    create_text_content_fragment,
    create_text_part,
    get_default_factory,
    replace_text_content_fragment,
    set_default_factory,
    special_content_part_to_doc_attachment_fragment,
)
from chat_fragments.guards import (
    is_attachment_fragment,
    is_content_fragment,
    is_content_or_attachment_fragment,
    is_doc_part,
    is_image_ref_part,
    is_placeholder_part,
    is_text_part,
    is_tool_invocation_part,
    is_tool_response_part,
)
from chat_fragments.ids import Clock, IdGenerator, SystemClock, UuidIdGenerator
from chat_fragments.models import (
    AttachmentFragment,
    ContentFragment,
    DataInline,
    DataInlineText,
    DataRef,
    DataRefDBlob,
    DataRefUrl,
    DocMeta,
    DocPart,
    ErrorPart,
    Fragment,
    ImageRefPart,
    PlaceholderPart,
    TextPart,
    ToolInvocationPart,
    ToolResponsePart,
)
from chat_fragments.records import (
    fragment_from_record,
    fragment_to_record,
    fragments_from_json,
    fragments_from_records,
    fragments_to_json,
    fragments_to_records,
)

__all__ = [
    # Config
    "FragmentsConfig",
    # Ids
    "Clock",
    "IdGenerator",
    "SystemClock",
    "UuidIdGenerator",
    # Models - Fragments
    "Fragment",
    "ContentFragment",
    "AttachmentFragment",
    # Models - Parts
    "DocMeta",
    "DocPart",
    "ErrorPart",
    "ImageRefPart",
    "PlaceholderPart",
    "TextPart",
    "ToolInvocationPart",
    "ToolResponsePart",
    # Models - Data
    "DataInline",
    "DataInlineText",
    "DataRef",
    "DataRefDBlob",
    "DataRefUrl",
    # Construction
    "FragmentFactory",
    "get_default_factory",
    "set_default_factory",
    "create_data_inline_text",
    "create_data_ref_dblob",
    "create_data_ref_url",
    "create_doc_part",
    "create_error_part",
    "create_image_ref_part",
    "create_text_part",
    "create_placeholder_part",
    "create_function_call_invocation_part",
    "create_code_execution_invocation_part",
    "create_function_call_response_part",
    "create_code_execution_response_part",
    "create_error_content_fragment",
    "create_image_content_fragment",
    "create_placeholder_meta_fragment",
    "create_text_content_fragment",
    "create_doc_attachment_fragment",
    "create_image_attachment_fragment",
    "special_content_part_to_doc_attachment_fragment",
    "replace_text_content_fragment",
    # Type guards
    "is_content_fragment",
    "is_attachment_fragment",
    "is_content_or_attachment_fragment",
    "is_doc_part",
    "is_image_ref_part",
    "is_text_part",
    "is_placeholder_part",
    "is_tool_invocation_part",
    "is_tool_response_part",
    # Duplication
    "FragmentDuplicator",
    "duplicate_fragments",
    # Records
    "fragment_to_record",
    "fragments_to_records",
    "fragment_from_record",
    "fragments_from_records",
    "fragments_to_json",
    "fragments_from_json",
]
