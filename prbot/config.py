"""Application configuration via Pydantic Settings.

NOTE: Every field maps an explicit environment variable name so a typo in
.env shows up as a default rather than a silently ignored setting.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # GitHub
    github_token: str = Field(default="", validation_alias="GITHUB_TOKEN")
    github_api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")
    enterprise_hostname: str = Field(default="", validation_alias="ENTERPRISE_HOSTNAME")
    webhook_secret: str = Field(default="", validation_alias="WEBHOOK_SECRET")
    webhook_path: str = Field(default="/api/webhook", validation_alias="WEBHOOK_PATH")

    # Slack
    slack_webhook_notify: str = Field(default="", validation_alias="SLACK_WEBHOOK_NOTIFY")
    slack_webhook_debug: str = Field(default="", validation_alias="SLACK_WEBHOOK_DEBUG")
    traces_dir: str = Field(default="traces", validation_alias="TRACES_DIR")

    # Jira
    jira_base_url: str = Field(default="https://jira.mongodb.org", validation_alias="JIRA_BASE_URL")
    ticket_prefix: str = Field(default="WT", validation_alias="TICKET_PREFIX")

    # SME groups: a local JSON file, or a path inside the repository when set
    sme_groups_file: str = Field(default="sme_groups.json", validation_alias="SME_GROUPS_FILE")
    sme_groups_repo_path: str = Field(default="", validation_alias="SME_GROUPS_REPO_PATH")

    # App
    dry_run: bool = Field(default=False, validation_alias="DRY_RUN")
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    http_timeout: float = Field(default=10.0, validation_alias="HTTP_TIMEOUT")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def resolved_github_api_url(self) -> str:
        if self.enterprise_hostname:
            return f"https://{self.enterprise_hostname}/api/v3"
        return self.github_api_url


settings = Settings()
