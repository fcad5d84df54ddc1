import json
from typing import Any, Dict, Literal, Optional

import httpx
from pydantic import BaseModel, Field

from .config import Settings


class RequestOptions(BaseModel):
    method: Literal["GET", "POST"] = "GET"
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    # False returns the raw response text instead of the decoded JSON body
    json_response: bool = True


def auth_headers(api_key: str, settings: Settings, *, json_body: bool = False) -> Dict[str, str]:
    headers = {
        "Authorization": f"Bearer {api_key}",
        "HTTP-Referer": settings.http_referer,
        "X-Title": settings.app_title,
    }
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


async def send_request(http: httpx.AsyncClient, options: RequestOptions) -> Any:
    content = None
    if options.body is not None:
        # Encoded here so that streaming requests still carry a JSON body
        content = json.dumps(options.body).encode("utf-8")

    r = await http.request(options.method, options.url, headers=options.headers, content=content)
    r.raise_for_status()
    if not options.json_response:
        return r.text
    return r.json()


def api_key_from(creds: Dict[str, Any]) -> str:
    token = creds.get("apiKey")
    if not token:
        raise ValueError("Credentials do not contain an API key")
    return token
