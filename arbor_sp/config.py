"""
Client configuration — connection options for one Arbor SP leader.

The options mirror what the appliance needs to accept a request:

  ipaddress   Target host. Both base URLs are derived from it.
  hostname    Informational only. Kept so callers can label a leader, never
              used when building request URLs.
  apikey      Web services API key, sent as the ``api_key`` query parameter.
  resttoken   REST API token, sent in the X-Arbux-APIToken header.

On top of those, ``verify_ssl`` and ``timeout`` configure the transport.
SP appliances usually ship self-signed certificates, so verification is off
unless explicitly enabled.

Typical usage:
    config = ArborConfig.from_env("./.env")
    problems = config.validate()
    if not problems:
        client = ArborClient(config)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .settings import DEFAULT_SETTINGS, REST_PATH, WS_PATH


@dataclass
class ArborConfig:
    ipaddress: str
    hostname: str = ""
    apikey: str = ""
    resttoken: str = ""
    verify_ssl: bool = False
    timeout: float = 30
    debug: bool = False

    @property
    def rest_url(self) -> str:
        return f"https://{self.ipaddress}{REST_PATH}"

    @property
    def ws_url(self) -> str:
        return f"https://{self.ipaddress}{WS_PATH}"

    @classmethod
    def from_dict(cls, conf: Dict[str, Any]) -> "ArborConfig":
        """Build a config from a plain options mapping.

        Accepts ``ipaddress``, ``hostname``, ``apikey`` (or its older name
        ``wsapikey``), ``resttoken``, ``verify_ssl``, ``timeout`` and ``debug``.
        Unknown keys are ignored.
        """
        return cls(
            ipaddress=conf.get("ipaddress", ""),
            hostname=conf.get("hostname", ""),
            apikey=conf.get("apikey", conf.get("wsapikey", "")),
            resttoken=conf.get("resttoken", ""),
            verify_ssl=bool(conf.get("verify_ssl", DEFAULT_SETTINGS["ARBOR_VERIFY_SSL"])),
            timeout=float(conf.get("timeout", DEFAULT_SETTINGS["ARBOR_TIMEOUT"])),
            debug=bool(conf.get("debug", DEFAULT_SETTINGS["DEBUG"])),
        )

    @classmethod
    def from_env(cls, env_file: Optional[str] = "./.env") -> "ArborConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Path to a .env file. If the file exists, it is loaded via
                      python-dotenv. Otherwise, falls back to system environment.
        """
        if env_file:
            env_path = Path(env_file)
            if env_path.exists():
                load_dotenv(env_path)
                print(f"Loaded configuration from: {env_file}")
            else:
                print(f"Warning: {env_file} not found, using defaults/environment")

        return cls(
            ipaddress=os.getenv("ARBOR_IPADDRESS", ""),
            hostname=os.getenv("ARBOR_HOSTNAME", DEFAULT_SETTINGS["ARBOR_HOSTNAME"]),
            apikey=os.getenv("ARBOR_API_KEY", ""),
            resttoken=os.getenv("ARBOR_REST_TOKEN", ""),
            verify_ssl=os.getenv(
                "ARBOR_VERIFY_SSL", str(DEFAULT_SETTINGS["ARBOR_VERIFY_SSL"])
            ).lower() == "true",
            timeout=float(os.getenv("ARBOR_TIMEOUT", str(DEFAULT_SETTINGS["ARBOR_TIMEOUT"]))),
            debug=os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true",
        )

    def validate(self, rest: bool = True, web_service: bool = True) -> List[str]:
        """Check that the values needed for the requested APIs are present.

        Args:
            rest: Require the REST token.
            web_service: Require the web services API key.

        Returns:
            A list of problems, empty when the configuration is usable.
        """
        errors = []
        if not self.ipaddress:
            errors.append("ARBOR_IPADDRESS is required")
        if rest and not self.resttoken:
            errors.append("ARBOR_REST_TOKEN is required for REST calls")
        if web_service and not self.apikey:
            errors.append("ARBOR_API_KEY is required for traffic graphs")
        if self.timeout <= 0:
            errors.append("ARBOR_TIMEOUT must be greater than zero")
        return errors
