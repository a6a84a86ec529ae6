from openai import APIError, OpenAI
import os

from chat_decoder.config import settings
from chat_decoder.decoder import decode_chat_completion
from chat_decoder.errors import DecodeError
from chat_decoder.logging_setup import setup_logging

setup_logging(settings.log_level)

base_url = os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")
api_key = os.environ.get("OPENAI_API_KEY", "sk-local-123")

client = OpenAI(base_url=base_url, api_key=api_key)

try:
    raw = client.chat.completions.with_raw_response.create(
        model=os.environ.get("OPENAI_MODEL", "gpt-4o-mini"),
        messages=[{"role": "user", "content": "Hello!"}],
    )
except APIError as e:
    raise SystemExit(f"request failed: {e}")

try:
    completion = decode_chat_completion(raw.http_response.content)
except DecodeError as e:
    raise SystemExit(f"response shape unexpected at {e.path}: {e}")

choice = completion.choices[0]
print(choice.finish_reason.value, choice.message.content)
print(completion.usage.total_tokens, "tokens")
