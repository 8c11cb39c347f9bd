"""
Service configuration: the YAML record, its validation rules and the
built-in defaults used whenever a file cannot be used as-is.
"""

import re
import logging
from typing import List, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# ---------------------------- Limits ----------------------------------

AVAILABLE_UNITS = ("M", "k")
MIN_LOG_FILES = 1
MIN_TCP_PORT = 0
MAX_TCP_PORT = 65535
MIN_OCTET = 0
MAX_OCTET = 254

DEFAULT_CONFIG_FILE = "config.yaml"

_OCTET_PATTERN = re.compile(r"[0-9]+")

# ---------------------------- Models ----------------------------------
# Fields missing from a file take zero values, not the defaults below.


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    file_name: str = ""
    unit: str = ""
    size: int = 0
    files: int = 0


class WebSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    netintf: str = ""
    port: int = 0


class Configuration(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    web: WebSettings = Field(default_factory=WebSettings)


def default_configuration() -> Configuration:
    return Configuration(
        logging=LoggingSettings(file_name="tserver.log", unit="k", size=100, files=10),
        web=WebSettings(netintf="127.0.0.1", port=8888),
    )


# ---------------------------- Validation ------------------------------

def validate_configuration(config: Configuration) -> Tuple[bool, List[str]]:
    """
    Check every rule and collect all violations.

    Returns (valid, messages); messages is empty when valid.
    """
    errors: List[str] = []

    if config.logging.unit not in AVAILABLE_UNITS:
        errors.append(
            f"Logging configuration file size unit '{config.logging.unit}' "
            f"is not allowed unit: {', '.join(AVAILABLE_UNITS)}"
        )

    if config.logging.files < MIN_LOG_FILES:
        errors.append(
            f"Minimum number of log files is {MIN_LOG_FILES}, "
            f"configured {config.logging.files}"
        )

    if not MIN_TCP_PORT <= config.web.port <= MAX_TCP_PORT:
        errors.append(
            f"Configured API port {config.web.port} is not in allowed range "
            f"from {MIN_TCP_PORT} to {MAX_TCP_PORT}"
        )

    errors.extend(_address_errors(config.web.netintf))
    return not errors, errors


def _address_errors(address: str) -> List[str]:
    octets = address.split(".")
    if len(octets) != 4:
        return [f"Interface IP address '{address}' is not A.B.C.D pattern"]

    errors = []
    for index, octet in enumerate(octets):
        if not _OCTET_PATTERN.fullmatch(octet):
            errors.append(f"{index} octet '{octet}' of address is not integer value")
        elif not MIN_OCTET <= int(octet) <= MAX_OCTET:
            errors.append(
                f"{index} octet '{octet}' of address is out of range {MIN_OCTET}~{MAX_OCTET}"
            )
    return errors


# ---------------------------- Loading ---------------------------------

def load_configuration(filepath: str = DEFAULT_CONFIG_FILE) -> Configuration:
    """
    Load and validate the configuration file.

    Any problem (unreadable file, bad YAML, wrong types, failed validation)
    is logged and the default configuration is returned in its place.
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        logger.warning(f"Problem with reading configuration file '{filepath}': '{e}'")
        return _fallback_configuration()

    try:
        config = Configuration.model_validate(yaml.safe_load(content))
    except (yaml.YAMLError, ValidationError) as e:
        logger.warning(f"Problem with parsing YAML in configuration file '{filepath}': '{e}'")
        logger.info(f"File content:\n{content}")
        return _fallback_configuration()

    valid, errors = validate_configuration(config)
    if not valid:
        logger.warning(f"Configuration file content '{filepath}' issue: '{', '.join(errors)}'")
        return _fallback_configuration()

    logger.info(f"Loaded configuration from {filepath}")
    return config


def _fallback_configuration() -> Configuration:
    config = default_configuration()
    dumped = yaml.safe_dump(config.model_dump(), sort_keys=False)
    logger.info(f"Using default configuration:\n{dumped}")
    return config
