import os
from dotenv import load_dotenv

load_dotenv()

from .telemetry.log import get_logger
from .config import load_config


CONFIG_FILE_PATH = os.getenv("RESTSERIAL_CONFIG_FILE", "restserial.yaml")

if not os.path.exists(CONFIG_FILE_PATH):
    CONFIG_YAML_STRING = ""
else:
    with open(CONFIG_FILE_PATH) as f:
        CONFIG_YAML_STRING = f.read()

CONFIG = load_config(CONFIG_YAML_STRING)
LOG = get_logger(CONFIG.logging_format, CONFIG.logging_level)

LOG.debug(f"CONFIG: [{CONFIG}]")
