from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FragmentsConfig(BaseSettings):
    """Configuration for fragment construction and duplication.

    Settings can be provided via environment variables with CHAT_FRAGMENTS_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAT_FRAGMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Namespace handed to the id generator for fragment ids
    fragment_id_scope: str = "chat-dfragment"

    # Fragment ids are unique within a message only, so they stay short
    fragment_id_length: int = Field(default=8, ge=1, le=32)

    # How tool-call argument schemas are duplicated:
    #   "deep"   - structural copy, the duplicate owns its schema
    #   "shared" - schemas are immutable by convention and shared between copies
    args_schema_copy: Literal["deep", "shared"] = "deep"
