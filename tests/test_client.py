import json
from unittest.mock import patch

import pytest
import requests

from src.chatllm.client import ChatClient
from src.chatllm.errors import ApiError, ConfigError, ParseError, TransportError, TransportTimeout, ValidationError
from src.chatllm.transport import HttpResponse, http_post
from src.chatllm.types import Provider

OPENAI_OK = '{"choices":[{"message":{"content":"2"}}],"usage":{"prompt_tokens":10,"completion_tokens":1}}'

class FakePost:
    def __init__(self, status=200, text=OPENAI_OK):
        self.status = status
        self.text = text
        self.calls = []

    def __call__(self, url, headers, body, timeout):
        self.calls.append({"url": url, "headers": headers, "body": body, "timeout": timeout})
        return HttpResponse(self.status, self.text)

@pytest.fixture(autouse=True)
def _no_keys_in_env(monkeypatch):
    for p in Provider:
        monkeypatch.delenv(p.api_key_env, raising=False)

def test_end_to_end_openai():
    post = FakePost()
    client = ChatClient({"OPENAI_API_KEY": "sk-test"}, post=post, timeout=30)
    result = client.run("What is 1+1?", model="openai:gpt-4", max_tokens=100, temperature=0.5)

    assert result.answer.content == "2"
    assert result.answer.usage.input_tokens == 10
    assert result.answer.usage.output_tokens == 1
    assert result.usage_summary == "Tokens used: 10 prompt + 1 completion = 11 total"

    call = post.calls[0]
    assert call["url"] == "https://api.openai.com/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["timeout"] == 30
    body = json.loads(call["body"])
    assert body["model"] == "gpt-4"
    assert body["messages"][0]["content"] == "What is 1+1?"

def test_google_key_stays_out_of_url():
    raw = json.dumps({"candidates": [{"content": {"parts": [{"text": "2"}]}}]})
    post = FakePost(text=raw)
    ChatClient({"GOOGLE_API_KEY": "SECRET123"}, post=post).run("hi", model="google:gemini-pro")

    call = post.calls[0]
    assert "SECRET123" not in call["url"]
    assert call["url"].endswith("/gemini-pro:generateContent")
    assert call["headers"]["x-goog-api-key"] == "SECRET123"

def test_default_model_and_attachments(tmp_path):
    f = tmp_path / "ctx.txt"
    f.write_text("context", encoding="utf-8")
    raw = json.dumps({"content": [{"type": "text", "text": "ok"}], "usage": {"input_tokens": 3, "output_tokens": 1}})
    post = FakePost(text=raw)
    cfg = {"DEFAULT_MODEL": "anthropic:claude-3-haiku-20240307", "ANTHROPIC_API_KEY": "k"}

    result = ChatClient(cfg, post=post).run("Summarize", files=str(f))

    assert result.provider is Provider.ANTHROPIC
    assert result.model == "claude-3-haiku-20240307"
    content = json.loads(post.calls[0]["body"])["messages"][0]["content"]
    assert content == f"Summarize\n\n--- Content from {f} ---\ncontext"

def test_missing_api_key():
    post = FakePost()
    with pytest.raises(ConfigError, match="No API key found"):
        ChatClient({}, post=post).run("hi", model="mistral:mistral-large-latest")
    assert post.calls == []

def test_http_failure_is_transport_error():
    post = FakePost(status=401, text='{"error":{"message":"Unauthorized"}}')
    with pytest.raises(TransportError, match="HTTP 401"):
        ChatClient({"DEEPSEEK_API_KEY": "k"}, post=post).run("hi", model="deepseek:deepseek-chat")

def test_api_error_in_success_body():
    post = FakePost(text='{"error":{"message":"model overloaded"}}')
    with pytest.raises(ApiError, match="model overloaded"):
        ChatClient({"OPENAI_API_KEY": "k"}, post=post).run("hi", model="openai:gpt-4")

def test_success_without_content_is_parse_error():
    post = FakePost(text='{"candidates":[]}')
    with pytest.raises(ParseError):
        ChatClient({"GOOGLE_API_KEY": "k"}, post=post).run("hi", model="google:gemini-pro")

def test_strict_mode_blocks_without_allowlist(tmp_path):
    cfg = {"OPENAI_API_KEY": "k", "ALLOWLIST_FILE": str(tmp_path / "allowlist.yaml")}
    with pytest.raises(ValidationError, match="allowlist"):
        ChatClient(cfg, post=FakePost()).run("hi", model="openai:gpt-4", strict=True)

def test_http_post_timeout_is_distinct():
    with patch("src.chatllm.transport.requests.post", side_effect=requests.Timeout("slow")):
        with pytest.raises(TransportTimeout):
            http_post("https://example.invalid", {}, "{}", timeout=1)

def test_http_post_connection_error():
    with patch("src.chatllm.transport.requests.post", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(TransportError) as exc:
            http_post("https://example.invalid", {}, "{}", timeout=1)
    assert not isinstance(exc.value, TransportTimeout)

def test_http_post_sends_utf8_body():
    class Resp:
        status_code = 200
        text = "{}"

    with patch("src.chatllm.transport.requests.post", return_value=Resp()) as m:
        resp = http_post("https://example.invalid", {"Content-Type": "application/json"}, '{"a":"é"}', timeout=5)

    assert resp.ok
    assert m.call_args.kwargs["data"] == '{"a":"é"}'.encode("utf-8")
    assert m.call_args.kwargs["timeout"] == 5
