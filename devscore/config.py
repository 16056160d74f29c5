"""Runtime configuration loaded from environment variables."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from devscore.domain.models import ScoringMode


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
USER_AGENT = "devscore-badge/1.0"


@dataclass(frozen=True)
class Settings:
    """Read-only settings shared by every outbound call."""
    github_token: str = ""
    api_url: str = DEFAULT_API_URL
    graphql_url: str = DEFAULT_GRAPHQL_URL
    request_timeout: float = 20.0
    scoring_mode: ScoringMode = ScoringMode.ACTIVITY
    default_theme: str = "dark"
    log_level: str = "INFO"
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of `os.environ`

        Raises:
            ValueError: If a timeout or scoring mode value is invalid
        """
        env = os.environ if environ is None else environ

        timeout = float(env.get("DEVSCORE_TIMEOUT", "20"))
        if timeout <= 0:
            raise ValueError(f"DEVSCORE_TIMEOUT must be positive, got {timeout}")

        return cls(
            github_token=env.get("GITHUB_TOKEN", "").strip(),
            api_url=env.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/"),
            graphql_url=env.get("GITHUB_GRAPHQL_URL", DEFAULT_GRAPHQL_URL),
            request_timeout=timeout,
            scoring_mode=ScoringMode(env.get("DEVSCORE_SCORING_MODE", "activity").lower()),
            default_theme=env.get("DEVSCORE_THEME", "dark"),
            log_level=env.get("DEVSCORE_LOG_LEVEL", "INFO").upper(),
        )
