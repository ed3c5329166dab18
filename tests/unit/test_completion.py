"""Unit tests for the completion provider client."""

import json

import httpx
import pytest

from personachat.core.exceptions import CompletionError
from personachat.server.completion import CompletionClient, build_system_prompt

URL = "https://provider.test/chat/completions"


def make_client(handler) -> CompletionClient:
    return CompletionClient(api_key="secret", url=URL, transport=httpx.MockTransport(handler))


def completion_body(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_system_prompt():
    prompt = build_system_prompt("Maya", "Cheerful and warm.", "A creative companion.")
    assert prompt == "Cheerful and warm. Your name is Maya. A creative companion."


def test_system_prompt_without_persona_text():
    assert build_system_prompt("Echo", None, "") == "Your name is Echo."


def test_from_settings_without_key(settings):
    assert CompletionClient.from_settings(settings) is None


def test_from_settings_with_key(settings):
    client = CompletionClient.from_settings(settings.model_copy(update={"DEEPSEEK_API_KEY": "k"}))

    assert client.api_key == "k"
    assert client.model == "deepseek-chat"
    assert client.max_tokens == 200
    assert client.temperature == 0.8


async def test_complete_sends_expected_request():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=completion_body("Hello!"))

    reply = await make_client(handler).complete("You are Maya.", "Hi")

    assert reply == "Hello!"
    request = seen[0]
    assert str(request.url) == URL
    assert request.headers["authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body == {
        "model": "deepseek-chat",
        "messages": [
            {"role": "system", "content": "You are Maya."},
            {"role": "user", "content": "Hi"},
        ],
        "max_tokens": 200,
        "temperature": 0.8,
    }


async def test_non_success_status():
    client = make_client(lambda request: httpx.Response(503, text="overloaded"))

    with pytest.raises(CompletionError) as exc_info:
        await client.complete("system", "hi")
    assert exc_info.value.provider_status == 503


async def test_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(CompletionError, match="ReadTimeout"):
        await make_client(handler).complete("system", "hi")


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, json=completion_body("   ")),
        httpx.Response(200, json=completion_body(None)),
    ],
)
async def test_malformed_bodies(response):
    with pytest.raises(CompletionError):
        await make_client(lambda request: response).complete("system", "hi")
