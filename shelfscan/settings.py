"""Runtime settings and supplier config loading.

Settings come from environment variables, optionally via a .env file.
"""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from shelfscan.exceptions import ConfigError
from shelfscan.models import SupplierConfig


class Settings(BaseModel):
    """Runtime settings.

    Attributes:
        timeout: Fetch timeout in seconds
        max_workers: Concurrent supplier runs in run_many
        log_level: Level for the local file log
        retries: Runs attempted per supplier by callers that retry failures
        user_agent: User agent override for fetches
        logfire_token: Token enabling logfire export

    """

    timeout: float = Field(default=30.0, gt=0)
    max_workers: int = Field(default=4, ge=1)
    log_level: str = 'INFO'
    retries: int = Field(default=1, ge=1)
    user_agent: str | None = None
    logfire_token: str | None = None

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> 'Settings':
        """Load settings from the environment.

        Args:
            env_file: Optional .env file to load first. Defaults to None (search upwards from CWD).

        Returns:
            Settings instance

        Raises:
            ConfigError: If a variable holds an invalid value

        """
        load_dotenv(env_file, override=False)

        mapping = {
            'timeout': 'SHELFSCAN_TIMEOUT',
            'max_workers': 'SHELFSCAN_MAX_WORKERS',
            'log_level': 'SHELFSCAN_LOG_LEVEL',
            'retries': 'SHELFSCAN_RETRIES',
            'user_agent': 'SHELFSCAN_USER_AGENT',
            'logfire_token': 'LOGFIRE_TOKEN',
        }
        values = {field: os.environ[var] for field, var in mapping.items() if os.getenv(var)}

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            fields = [mapping[str(err['loc'][0])] for err in e.errors()]
            raise ConfigError(f'Invalid environment settings: {", ".join(fields)}', fields=fields) from None


def load_supplier_configs(path: str | Path) -> list[SupplierConfig]:
    """Load supplier configs from a JSON file.

    The file holds either one config object or a list of them.

    Args:
        path: Path to the JSON file

    Returns:
        Validated configs in file order

    Raises:
        ConfigError: If the file is missing, not JSON, or any entry is invalid

    """
    path = Path(path)
    try:
        data: Any = json.loads(path.read_text(encoding='utf-8'))
    except FileNotFoundError:
        raise ConfigError(f'Supplier config file not found: {path}') from None
    except json.JSONDecodeError as e:
        raise ConfigError(f'Supplier config file is not valid JSON: {path} ({e})') from None

    entries = data if isinstance(data, list) else [data]
    configs = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigError(f'Entry {index} in {path} is not an object')
        try:
            configs.append(SupplierConfig.from_dict(entry))
        except ConfigError as e:
            raise ConfigError(f'Entry {index} in {path}: {e}', fields=e.fields) from None
    return configs
