from src.chatllm.extractor import extract, unescape

def test_openai_content():
    raw = '{"choices":[{"message":{"content":"hi"}}]}'
    assert extract(raw, "choices.0.message.content") == "hi"

def test_nested_error_message():
    assert extract('{"error":{"message":"bad key"}}', "error.message") == "bad key"

def test_nested_error_preferred_over_plain_message():
    raw = '{"message":"outer","error":{"code":400,"message":"inner"}}'
    assert extract(raw, "error.message") == "inner"

def test_plain_message_fallback():
    assert extract('{"message":"Unauthorized"}', "error.message") == "Unauthorized"

def test_error_message_absent():
    assert extract('{"foo":"bar"}', "error.message") is None

def test_usage_tokens_are_integers():
    raw = '{"usage":{"prompt_tokens":5,"completion_tokens":7}}'
    assert extract(raw, "usage.prompt_tokens") == 5
    assert extract(raw, "usage.completion_tokens") == 7

def test_anthropic_usage_aliases():
    raw = '{"usage": {"input_tokens": 12, "cache_read_input_tokens": 0, "output_tokens": 3}}'
    assert extract(raw, "usage.input_tokens") == 12
    assert extract(raw, "usage.output_tokens") == 3

def test_non_digit_usage_is_absent():
    raw = '{"usage":{"prompt_tokens":null,"completion_tokens":"7"}}'
    assert extract(raw, "usage.prompt_tokens") is None
    assert extract(raw, "usage.completion_tokens") is None

def test_gemini_usage():
    raw = '{"usageMetadata": {"promptTokenCount": 4, "candidatesTokenCount": 1, "totalTokenCount": 5}}'
    assert extract(raw, "usageMetadata.promptTokenCount") == 4
    assert extract(raw, "usageMetadata.candidatesTokenCount") == 1

def test_newline_escape_becomes_real_newline():
    raw = '{"choices":[{"message":{"content":"line1\\nline2"}}]}'
    assert extract(raw, "choices.0.message.content") == "line1\nline2"

def test_escaped_quote_does_not_end_value():
    raw = '{"content":[{"type":"text","text":"say \\"hi\\" now"}]}'
    assert extract(raw, "content.0.text") == 'say "hi" now'

def test_anthropic_text():
    raw = '{"id":"msg_1","type":"message","content":[{"type":"text","text":"2"}],"usage":{"input_tokens":1,"output_tokens":1}}'
    assert extract(raw, "content.0.text") == "2"

def test_gemini_text():
    raw = '{"candidates": [{"content": {"parts": [{"text": "Bonjour"}], "role": "model"}}]}'
    assert extract(raw, "candidates.0.content.parts.0.text") == "Bonjour"

def test_first_occurrence_wins():
    raw = '{"choices":[{"message":{"content":"first"}},{"message":{"content":"second"}}]}'
    assert extract(raw, "choices.0.message.content") == "first"

def test_generic_key():
    assert extract('{"id":"abc","object":"chat.completion"}', "object") == "chat.completion"
    assert extract('{"id":"abc"}', "missing") is None

def test_unescape_is_single_pass():
    # an escaped backslash followed by n is a backslash and an n, not a newline
    assert unescape("a\\\\nb") == "a\\nb"
    assert unescape("tab\\there") == "tab\there"
