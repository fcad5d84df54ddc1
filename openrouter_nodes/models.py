"""
Value types exchanged with the OpenRouter API and the host
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Literal, Optional


class ChatMessage(BaseModel):
    """One entry of the conversation, in configuration order"""
    # Expressions may evaluate to numbers; they are sent as text
    model_config = ConfigDict(coerce_numbers_to_str=True)

    role: Literal["system", "user", "assistant"]
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        return "" if v is None else v


class ChatCompletionPayload(BaseModel):
    """Request body for POST /chat/completions"""
    model: str
    messages: List[ChatMessage]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stream: bool = False

    @field_validator("messages")
    @classmethod
    def messages_not_empty(cls, v):
        if not v:
            raise ValueError("At least one message is required")
        return v


class ModelDescriptor(BaseModel):
    """Entry of the GET /models listing; unknown keys are ignored"""
    model_config = ConfigDict(extra="ignore")

    id: str
    description: Optional[str] = None


class PropertyChoice(BaseModel):
    name: str
    value: str
    description: Optional[str] = None


class PairedItem(BaseModel):
    item: int


class ExecutionRecord(BaseModel):
    """Output record handed back to the host, one per input item"""
    model_config = ConfigDict(populate_by_name=True)

    data: Dict[str, Any] = Field(alias="json")
    paired_item: Optional[PairedItem] = Field(default=None, alias="pairedItem")

    def to_host(self) -> Dict[str, Any]:
        exclude = {"paired_item"} if self.paired_item is None else None
        return self.model_dump(by_alias=True, exclude=exclude)
