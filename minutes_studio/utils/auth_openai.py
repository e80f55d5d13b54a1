from openai import OpenAI

from minutes_studio.config import Settings


def get_openai_client(settings: Settings) -> OpenAI | None:
    if not settings.ai_configured:
        return None
    return OpenAI(api_key=settings.openai_api_key)
