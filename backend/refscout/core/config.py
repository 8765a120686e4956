from pathlib import Path
from typing import Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    project_name: str = "RefScout"
    log_level: str = "INFO"

    # Search provider credentials. Missing keys disable the provider at call time.
    bocha_api_key: Optional[SecretStr] = Field(default=None, description="Bocha web search API key")
    onebound_api_key: Optional[SecretStr] = Field(default=None, description="OneBound WeChat search API key")
    onebound_api_secret: Optional[SecretStr] = Field(default=None, description="OneBound API secret")

    reader_base_url: str = Field(
        default="https://r.jina.ai/",
        description="Reader service prefix; the target URL is appended verbatim"
    )
    user_agent: str = DEFAULT_USER_AGENT

    search_timeout_seconds: float = Field(default=15.0, gt=0, description="Latency bound for one query's aggregated search")
    provider_timeout_seconds: float = Field(default=20.0, gt=0)
    fetch_timeout_seconds: float = Field(default=20.0, gt=0)

    enrichment_min_chars: int = Field(default=100, ge=0, description="Extracted text must be longer than this to replace a snippet")
    selection_batch_size: int = Field(default=50, gt=0)
    empty_selection_fallback: int = Field(default=3, ge=0)
    selection_failure_fallback: int = Field(default=5, ge=0)
    default_result_count: int = Field(default=10, gt=0)

    # OpenAI-compatible chat model used for source selection
    llm_api_key: Optional[SecretStr] = Field(default=None, description="API key for the selection model")
    llm_base_url: str = "https://api.siliconflow.cn/v1"
    llm_model: str = "deepseek-ai/DeepSeek-V3"

    @property
    def PROJECT_NAME(self) -> str:
        return self.project_name

    @property
    def BOCHA_API_KEY(self) -> Optional[str]:
        if self.bocha_api_key:
            return self.bocha_api_key.get_secret_value()
        return None

    @property
    def ONEBOUND_API_KEY(self) -> Optional[str]:
        if self.onebound_api_key:
            return self.onebound_api_key.get_secret_value()
        return None

    @property
    def ONEBOUND_API_SECRET(self) -> Optional[str]:
        if self.onebound_api_secret:
            return self.onebound_api_secret.get_secret_value()
        return None

    @property
    def LLM_API_KEY(self) -> Optional[str]:
        if self.llm_api_key:
            return self.llm_api_key.get_secret_value()
        return None


settings = Settings()
