from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Formatter Selection ---
    provider: Literal["local", "remote"] = "local" # "remote" = Gemini API
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("DAYLOG_API_KEY", "GEMINI_API_KEY"),
    )

    # --- Note Output ---
    add_header: bool = True
    summary_header: str = "### 🧾 Daily Summary"

    # --- Remote (Gemini) Settings ---
    model_name: str = "gemini-1.5-flash"
    llm_temperature: float = 0.2
    llm_top_p: float = 0.95
    llm_top_k: int = 40
    llm_max_output_tokens: int = 1024
    llm_timeout_s: int = 30 # Abort if the network is stuck
    llm_retries: int = 3 # Total attempts, including the first one
    llm_retry_delay_base_s: float = 0.5 # Doubles per retry (0.5s, 1s)

    model_config = SettingsConfigDict(
        env_prefix="DAYLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra='ignore'
    )
