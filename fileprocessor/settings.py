import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigurationError

# Container watched by the blob trigger in function_app.py
BLOB_TRIGGER_CONTAINER = "processed"


@dataclass(frozen=True)
class Settings:
    """Configuration resolved once when the function app starts.

    The API key comes from the Function App settings (or a Key Vault
    reference behind them) and is never embedded in source.

    ``event_grid_container`` names the container served by the Event Grid
    route. It must differ from the blob trigger's container, so each upload
    reaches exactly one route. When unset, Event Grid notifications are
    ignored.
    """

    api_key: str
    endpoint: str
    timeout: Optional[float] = None
    event_grid_container: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        api_key = _required(env, "ORCHESTRATOR_API_KEY")
        endpoint = _required(env, "ORCHESTRATOR_ENDPOINT")

        timeout = None
        raw_timeout = env.get("PROCESSING_TIMEOUT_SECONDS", "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"PROCESSING_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}"
                )
            if timeout <= 0:
                raise ConfigurationError("PROCESSING_TIMEOUT_SECONDS must be positive")

        event_grid_container = env.get("EVENT_GRID_CONTAINER", "").strip() or None
        if event_grid_container == BLOB_TRIGGER_CONTAINER:
            raise ConfigurationError(
                f"EVENT_GRID_CONTAINER must differ from the blob trigger container "
                f"{BLOB_TRIGGER_CONTAINER!r}"
            )

        return cls(
            api_key=api_key,
            endpoint=endpoint,
            timeout=timeout,
            event_grid_container=event_grid_container,
        )

    def __repr__(self):
        # keep the key out of logs
        return (
            f"Settings(api_key='***', endpoint={self.endpoint!r}, "
            f"timeout={self.timeout!r}, event_grid_container={self.event_grid_container!r})"
        )


def _required(env: Mapping[str, str], key: str) -> str:
    value = env.get(key, "").strip()
    if not value:
        raise ConfigurationError(f"Missing required setting {key}")
    return value
