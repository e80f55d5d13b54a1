import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from minutes_studio.config import Settings, get_settings  # noqa: E402

ENV_KEYS = (
    "OPENAI_API_KEY",
    "AWS_REGION",
    "AWS_S3_BUCKET",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "MINUTES_PROMPT_PATH",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def storage_settings():
    return Settings(
        _env_file=None,
        aws_region="us-east-1",
        aws_s3_bucket="test-bucket",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeChatCompletions:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return _completion(response)


class FakeTranscriptions:
    """Returns texts keyed by (model, filename); exceptions are raised."""

    def __init__(self, results):
        self.results = results
        self.calls = []

    def create(self, **kwargs):
        filename = kwargs["file"][0]
        self.calls.append((kwargs["model"], filename))
        result = self.results.get((kwargs["model"], filename), RuntimeError("no result"))
        if isinstance(result, Exception):
            raise result
        return SimpleNamespace(text=result)


class FakeOpenAI:
    def __init__(self, chat_responses=(), transcriptions=None):
        self.chat = SimpleNamespace(completions=FakeChatCompletions(chat_responses))
        self.audio = SimpleNamespace(transcriptions=FakeTranscriptions(transcriptions or {}))


@pytest.fixture
def fake_openai():
    return FakeOpenAI
