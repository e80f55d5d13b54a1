import json

from minutes_studio.services.minutes_generator import (
    MAX_TRANSCRIPT_CHARS,
    MINUTES_PARSE_FAILURE,
    MOCK_MINUTES,
    MOCK_SUMMARY,
    MOCK_TRANSCRIPT_BODY,
    SUMMARY_PARSE_FAILURE,
    MinutesGenerator,
    build_system_prompt,
    load_base_prompt,
)


def test_without_client_returns_fixed_mock(settings):
    result = MinutesGenerator(None, settings).generate("", "")
    assert result.transcript == MOCK_TRANSCRIPT_BODY
    assert result.summary == MOCK_SUMMARY
    assert result.minutes_body == MOCK_MINUTES


def test_without_client_keeps_supplied_transcript(settings):
    result = MinutesGenerator(None, settings).generate("本日の議題は予算です。", "")
    assert result.transcript == "本日の議題は予算です。"
    assert result.summary == MOCK_SUMMARY


def test_structured_response_is_parsed(settings, fake_openai):
    client = fake_openai(chat_responses=[json.dumps({"summary": "要約です。", "minutes": "## 決定事項\n- 予算承認"})])

    result = MinutesGenerator(client, settings).generate("transcript", "")

    assert result.summary == "要約です。"
    assert result.minutes_body == "## 決定事項\n- 予算承認"
    call = client.chat.completions.calls[0]
    schema = call["response_format"]["json_schema"]
    assert schema["strict"] is True
    assert schema["schema"]["required"] == ["summary", "minutes"]
    assert schema["schema"]["additionalProperties"] is False


def test_malformed_json_yields_placeholders(settings, fake_openai):
    client = fake_openai(chat_responses=["not json at all"])
    result = MinutesGenerator(client, settings).generate("transcript", "")
    assert result.summary == SUMMARY_PARSE_FAILURE == "要約の解析に失敗しました。"
    assert result.minutes_body == MINUTES_PARSE_FAILURE == "議事録本文の解析に失敗しました。"
    assert result.transcript == "transcript"


def test_schema_violations_yield_placeholders(settings, fake_openai):
    bad_payloads = [
        json.dumps({"summary": "only summary"}),
        json.dumps({"summary": "s", "minutes": "m", "extra": "x"}),
        json.dumps({"summary": 1, "minutes": "m"}),
        json.dumps(["summary", "minutes"]),
        None,
    ]
    client = fake_openai(chat_responses=bad_payloads)
    generator = MinutesGenerator(client, settings)
    for _ in bad_payloads:
        result = generator.generate("t", "")
        assert result.summary == SUMMARY_PARSE_FAILURE
        assert result.minutes_body == MINUTES_PARSE_FAILURE


def test_style_guidelines_and_truncation_reach_the_request(settings, fake_openai):
    client = fake_openai(chat_responses=[json.dumps({"summary": "s", "minutes": "m"})])
    transcript = "a" * MAX_TRANSCRIPT_CHARS + "OVERFLOW"

    MinutesGenerator(client, settings).generate(transcript, "- 体言止めを使う")

    messages = client.chat.completions.calls[0]["messages"]
    assert "- 体言止めを使う" in messages[0]["content"]
    assert "OVERFLOW" not in messages[1]["content"]
    assert "a" * MAX_TRANSCRIPT_CHARS in messages[1]["content"]


def test_system_prompt_omits_empty_guidelines():
    assert build_system_prompt("base", "") == "base"
    assert build_system_prompt("base", "rule").startswith("base\n\n")


def test_base_prompt_is_loaded_from_replaceable_file(tmp_path):
    prompt = tmp_path / "custom.txt"
    prompt.write_text("カスタム指示", encoding="utf-8")
    assert load_base_prompt(prompt) == "カスタム指示"


def test_missing_prompt_file_falls_back_to_builtin(tmp_path):
    assert "議事録作成アシスタント" in load_base_prompt(tmp_path / "missing.txt")


def test_empty_prompt_path_uses_packaged_prompt():
    from minutes_studio.config import DEFAULT_PROMPT_PATH, Settings

    settings = Settings(_env_file=None, minutes_prompt_path="")
    assert settings.minutes_prompt_path == DEFAULT_PROMPT_PATH
    assert "書き起こしに含まれない事実" in load_base_prompt(settings.minutes_prompt_path)
    assert load_base_prompt("") == load_base_prompt(DEFAULT_PROMPT_PATH)
