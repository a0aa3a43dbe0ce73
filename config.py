import json
import os
from pathlib import Path

from sleekid.config import GeneratorConfig, generator_config_from_dict, parse_token

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"
TOKEN_ENV = "SLEEKID_CHECKSUM_TOKEN"


class ServerConfig:
    __slots__ = ("host", "port")
    
    def __init__(self, host="127.0.0.1", port=8080):
        self.host = host
        self.port = port


class LoggingConfig:
    __slots__ = ("level", "crash_file")
    
    def __init__(self, level="INFO", crash_file="logs/crash.log"):
        self.level = level
        self.crash_file = crash_file


class Config:
    __slots__ = ("generator", "server", "logging")
    
    def __init__(self, generator=None, server=None, logging=None):
        self.generator = generator or GeneratorConfig(checksum_token=token_from_env())
        self.server = server or ServerConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            generator_config_from_dict(d.get("generator", {}), checksum_token=token_from_env()),
            ServerConfig(**d.get("server", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def token_from_env(environ=None):
    """Checksum token from SLEEKID_CHECKSUM_TOKEN (decimal or 0x hex), None if unset."""
    return parse_token((environ if environ is not None else os.environ).get(TOKEN_ENV), source=TOKEN_ENV)


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG
    
    if not config_path.exists():
        return Config()
    
    with open(config_path) as file:
        return Config.from_dict(json.load(file))
