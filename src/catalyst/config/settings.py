"""CLI settings — flags and environment variables in one frozen object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``CATALYST_*`` prefix
  3. Code defaults

Project configuration (``.catalyst.yml``) is not part of this object; it is
layered separately by :class:`~catalyst.config.store.ConfigurationStore`
from the search paths this object carries.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings

from catalyst.config.discovery import config_sources
from catalyst.config.store import ConfigSource, ConfigurationStore


class CatalystSettings(BaseSettings):
    """Process-level settings for the catalyst CLI.

    Attributes:
        home_dir: Directory holding the user-wide ``.catalyst.yml``.
        project_dir: Directory commands operate in (default: CWD).
        config_path: Explicit ``--config`` override for the project layer.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "CATALYST_",
    }

    # --- Search paths ---
    home_dir: Path = Field(default_factory=Path.home)
    project_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_dir: Path | None = None,
        **cli_flags: Any,
    ) -> CatalystSettings:
        """Construct settings from a CLI invocation, dropping unset overrides."""
        kwargs: dict[str, Any] = dict(cli_flags)
        if config_path:
            kwargs["config_path"] = Path(config_path)
        if project_dir is not None:
            kwargs["project_dir"] = project_dir
        return cls(**kwargs)

    def config_sources(self) -> list[ConfigSource]:
        return config_sources(self.home_dir, self.project_dir, override=self.config_path)

    def load_store(self) -> ConfigurationStore:
        return ConfigurationStore.load(self.config_sources())
