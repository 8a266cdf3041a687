from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=[".env"], extra="ignore")

    # optional: tools may be given a token per call instead
    github_token: SecretStr | None = Field(default=None)

    github_api_url: str = "https://api.github.com"


# github service constants
# draft pull requests need the shadow-cat preview media type
GITHUB_ACCEPT = (
    "application/vnd.github.shadow-cat-preview+json, application/vnd.github.v3+json"
)
BLOB_FILE_MODE = "100644"

settings = Settings()
