from minutes_studio.services.style_guidelines import (
    MAX_STYLE_CORPUS_CHARS,
    MIN_STYLE_CORPUS_CHARS,
    build_style_guidelines,
)


def test_short_corpus_returns_empty_without_calling_model(settings, fake_openai):
    client = fake_openai(chat_responses=["should not be used"])
    corpus = "あ" * (MIN_STYLE_CORPUS_CHARS - 1)
    assert build_style_guidelines(corpus, client, settings) == ""
    assert build_style_guidelines(corpus, None, settings) == ""
    assert client.chat.completions.calls == []


def test_missing_client_returns_empty(settings):
    assert build_style_guidelines("あ" * 1000, None, settings) == ""


def test_guidelines_request_is_truncated_and_low_temperature(settings, fake_openai):
    client = fake_openai(chat_responses=["- です・ます調で統一"])
    corpus = "x" * MAX_STYLE_CORPUS_CHARS + "TAIL"

    assert build_style_guidelines(corpus, client, settings) == "- です・ます調で統一"

    call = client.chat.completions.calls[0]
    assert call["temperature"] == 0.2
    assert call["model"] == settings.openai_text_model
    assert call["messages"][0]["role"] == "system"
    user_prompt = call["messages"][1]["content"]
    assert "TAIL" not in user_prompt
    assert "x" * MAX_STYLE_CORPUS_CHARS in user_prompt


def test_empty_model_response_becomes_empty_string(settings, fake_openai):
    client = fake_openai(chat_responses=[None])
    assert build_style_guidelines("y" * 500, client, settings) == ""
