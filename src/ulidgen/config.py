import os
import yaml
from typing import Dict, Any, Optional
from dotenv import load_dotenv
from ulidgen.errors import ConfigError
from ulidgen.logging_setup import get_logger

CONFIG_FILENAME = "ulidgen.yaml"

DEFAULTS: Dict[str, Any] = {
    "max_count": 100,
    "case_insensitive": True,
    "map_ambiguous": False,
    "json_logs": False,
}

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}

logger = get_logger()

# Load .env file if present
load_dotenv()


def _parse_bool(raw: str) -> Optional[bool]:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    return None


def _apply_env_overrides(config: Dict[str, Any]) -> None:
    raw_count = os.getenv("ULIDGEN_MAX_COUNT")
    if raw_count:
        try:
            config["max_count"] = int(raw_count)
        except ValueError:
            logger.warning(f"Ignoring invalid ULIDGEN_MAX_COUNT: {raw_count!r}")

    for key in ("case_insensitive", "map_ambiguous", "json_logs"):
        env_name = f"ULIDGEN_{key.upper()}"
        raw = os.getenv(env_name)
        if not raw:
            continue
        parsed = _parse_bool(raw)
        if parsed is None:
            logger.warning(f"Ignoring invalid {env_name}: {raw!r}")
        else:
            config[key] = parsed


def load_config(env: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads configuration.
    Priority:
    1. Environment Variables (ULIDGEN_*)
    2. ulidgen.yaml (environment specific profile)
    3. ulidgen.yaml (root keys)
    4. Built-in defaults
    """

    # Load from file
    file_config: Dict[str, Any] = {}
    if os.path.exists(CONFIG_FILENAME):
        try:
            with open(CONFIG_FILENAME, "r", encoding="utf-8") as f:
                content = f.read()
                # Interpolate environment variables
                content = os.path.expandvars(content)
                file_config = yaml.safe_load(content) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ConfigError(f"Error parsing {CONFIG_FILENAME}: {e}")
        if not isinstance(file_config, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping")

    final_config: Dict[str, Any] = dict(DEFAULTS)
    final_config.update({k: v for k, v in file_config.items() if k in DEFAULTS})

    # Resolve environment profile
    # If env is not passed, check ULIDGEN_ENV, default to 'default'
    target_env = env or os.getenv("ULIDGEN_ENV", "default")

    envs = file_config.get("envs")
    if isinstance(envs, dict) and isinstance(envs.get(target_env), dict):
        profile = envs[target_env]
        final_config.update({k: v for k, v in profile.items() if k in DEFAULTS})

    _apply_env_overrides(final_config)

    if not isinstance(final_config["max_count"], int) or final_config["max_count"] < 1:
        raise ConfigError(
            f"max_count must be a positive integer, got {final_config['max_count']!r}"
        )

    return final_config
