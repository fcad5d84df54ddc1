from typing import Any, Dict, List

from pydantic import ValidationError

from openrouter_nodes.errors import NodeOperationError
from openrouter_nodes.exec_http import RequestOptions, api_key_from, auth_headers
from openrouter_nodes.models import ChatCompletionPayload, ChatMessage, ExecutionRecord, PairedItem
from openrouter_nodes.streaming import parse_event_stream
from .description import CHAT_COMPLETION, CREDENTIAL_NAME

NUMERIC_PARAMETERS = ("max_tokens", "temperature", "top_p", "frequency_penalty", "presence_penalty")

_MESSAGE_PROBLEMS = {
    "role": "role must be system, user or assistant",
    "content": "content must be text",
}


def _first_field(e: ValidationError) -> str:
    loc = e.errors()[0].get("loc") or ("",)
    return str(loc[0])


def read_messages(ctx, index: int) -> List[ChatMessage]:
    raw = ctx.get_parameter("messages.messagesValues", index, []) or []
    messages = []
    # Positions are 1-based, as shown to the user
    for position, m in enumerate(raw, start=1):
        if not isinstance(m, dict):
            raise NodeOperationError(
                f"Invalid message at position {position}: expected a role and a content",
                node=ctx.node_name, item_index=index,
            )
        try:
            messages.append(ChatMessage(role=m.get("role"), content=m.get("content")))
        except ValidationError as e:
            problem = _MESSAGE_PROBLEMS.get(_first_field(e), "invalid value")
            raise NodeOperationError(
                f"Invalid message at position {position}: {problem}", node=ctx.node_name, item_index=index
            ) from e
    return messages


def build_payload(ctx, index: int, messages: List[ChatMessage]) -> ChatCompletionPayload:
    params = {name: ctx.get_parameter(name, index) for name in NUMERIC_PARAMETERS}
    try:
        return ChatCompletionPayload(
            model=ctx.get_parameter("model", index),
            messages=messages,
            stream=bool(ctx.get_parameter("stream", index)),
            **params,
        )
    except ValidationError as e:
        raise NodeOperationError(
            f'Invalid value for parameter "{_first_field(e)}"', node=ctx.node_name, item_index=index
        ) from e


async def chat_completion(ctx, index: int) -> ExecutionRecord:
    messages = read_messages(ctx, index)
    if not messages:
        raise NodeOperationError("At least one message is required", node=ctx.node_name, item_index=index)

    payload = build_payload(ctx, index, messages)
    credentials = await ctx.get_credentials(CREDENTIAL_NAME)
    options = RequestOptions(
        method="POST",
        url=ctx.settings.url("chat/completions"),
        headers=auth_headers(api_key_from(credentials), ctx.settings, json_body=True),
        body=payload.model_dump(),
        json_response=not payload.stream,
    )

    response = await ctx.request(options)
    if payload.stream:
        return ExecutionRecord(json={"streamedResponse": parse_event_stream(response)})
    return ExecutionRecord(json=response)


async def execute(ctx) -> List[List[Dict[str, Any]]]:
    """Run one chat completion per input item, strictly in input order."""
    items = ctx.get_input_data()
    return_data: List[Dict[str, Any]] = []

    for i in range(len(items)):
        try:
            operation = ctx.get_parameter("operation", i)
            if operation != CHAT_COMPLETION:
                raise NodeOperationError(
                    f'The operation "{operation}" is not supported', node=ctx.node_name, item_index=i
                )
            record = await chat_completion(ctx, i)
        except Exception as e:
            error = e
            if not isinstance(e, NodeOperationError):
                error = NodeOperationError(str(e) or "Unknown error occurred", node=ctx.node_name, item_index=i)
            elif e.item_index is None:
                e.item_index = i
            if ctx.continue_on_fail():
                ctx.log.warning("Item %d failed, continuing: %s", i, error.message)
                record = ExecutionRecord(json={"error": error.message}, pairedItem=PairedItem(item=i))
            elif error is e:
                raise
            else:
                raise error from e
        return_data.append(record.to_host())

    return [return_data]
