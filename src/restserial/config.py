import os
import yaml
from pydantic import BaseModel, Field
from typing import Any, Literal, Optional, Type
from ._constants import DEFAULT_MAX_PATH_LENGTH

ENV_PREFIX = "RESTSERIAL_"


class DecoderConfig(BaseModel):
    # Decoding
    max_path_length: Optional[int] = Field(
        DEFAULT_MAX_PATH_LENGTH, ge=0, description="Maximum number of path segments, None for unbounded"
    )
    strict_decoding: bool = False

    # Logging
    logging_format: Literal["text", "json"] = "text"
    logging_level: str = "INFO"


def filter_value_from_env(
    CLS: Type[BaseModel], prefix: str = ENV_PREFIX
) -> dict[str, Any]:
    config_keys = CLS.model_fields.keys()
    env_already_keys = {}
    for key in config_keys:
        value = os.getenv(f"{prefix}{key.upper()}", None)
        if value is None:
            continue
        # an empty variable clears an optional setting
        env_already_keys[key] = value if value != "" else None
    return env_already_keys


def filter_value_from_yaml(yaml_string, CLS: Type[BaseModel]) -> dict[str, Any]:
    yaml_config_data: dict | None = yaml.safe_load(yaml_string)
    if yaml_config_data is None:
        return {}

    yaml_already_keys = {}
    config_keys = CLS.model_fields.keys()
    for key in config_keys:
        if key not in yaml_config_data:
            continue
        yaml_already_keys[key] = yaml_config_data[key]
    return yaml_already_keys


def load_config(yaml_string: str = "") -> DecoderConfig:
    yaml_vars = filter_value_from_yaml(yaml_string, DecoderConfig)
    env_vars = filter_value_from_env(DecoderConfig)
    return DecoderConfig(**{**yaml_vars, **env_vars})
