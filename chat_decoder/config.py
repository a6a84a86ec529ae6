from pydantic_settings import BaseSettings, SettingsConfigDict


class DecoderSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_prefix='CHAT_DECODER_', case_sensitive=False)

    log_level: str = "WARNING"

    # Diagnostics only, never rejects a payload
    expected_object: str = "chat.completion"
    warn_on_unexpected_object: bool = True
    warn_on_usage_mismatch: bool = True


settings = DecoderSettings()
