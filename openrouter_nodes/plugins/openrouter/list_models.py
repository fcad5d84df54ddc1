import json
from typing import Any, Dict, List

from openrouter_nodes.exec_http import RequestOptions, api_key_from, auth_headers
from openrouter_nodes.models import ModelDescriptor, PropertyChoice
from openrouter_nodes.errors import NodeOperationError
from .description import CREDENTIAL_NAME


async def get_models(ctx) -> List[Dict[str, Any]]:
    """Load the selectable models from GET /models; refetched on every call."""
    try:
        credentials = await ctx.get_credentials(CREDENTIAL_NAME)
        options = RequestOptions(
            method="GET",
            url=ctx.settings.url("models"),
            headers=auth_headers(api_key_from(credentials), ctx.settings),
        )

        ctx.log.info("Fetching models from OpenRouter API...")
        response = await ctx.request(options)
        ctx.log.debug("Response received: %s", json.dumps(response, indent=2))
        models = response.get("data") if isinstance(response, dict) else None
        if not isinstance(models, list):
            ctx.log.error("Invalid response format: %r", response)
            raise NodeOperationError("Invalid response format from OpenRouter API", node=ctx.node_name)
        descriptors = [ModelDescriptor.model_validate(m) for m in models]
    except Exception as e:
        ctx.log.error("Error fetching models: %s", e)
        message = str(e) or "Unknown error"
        raise NodeOperationError(
            f"Failed to load models from OpenRouter API: {message}", node=ctx.node_name
        ) from e

    return [
        PropertyChoice(name=m.id, value=m.id, description=m.description).model_dump()
        for m in descriptors
    ]
