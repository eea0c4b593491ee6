"""
Settings — Default configuration values for the Arbor SP client.

ArborConfig.from_env() falls back to these values when an environment
variable is not set. The actual configuration is normally loaded from a .env
file at runtime.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --output-dir)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  ARBOR_IPADDRESS         Address of the SP leader (used to build both base URLs)
  ARBOR_HOSTNAME          Informational only, never used in request URLs
  ARBOR_API_KEY           Web services API key (traffic graphs)
  ARBOR_REST_TOKEN        REST API token (sent as X-Arbux-APIToken)
  ARBOR_VERIFY_SSL        Verify the appliance certificate (default: False)
  ARBOR_TIMEOUT           Seconds before a single HTTP request is abandoned
  OUTPUT_DIR              Where the CLI writes results (default: ./output)
  OUTPUT_RETENTION_DAYS   How many days to keep old output folders (0 = keep forever)
  DEBUG                   Whether to print verbose output (default: False)
"""

REST_PATH = "/api/sp/"
WS_PATH = "/arborws/"

REST_CONTENT_TYPE = "application/vnd.api+json"
REST_TOKEN_HEADER = "X-Arbux-APIToken"

SCHEMA_VERSION = "2.0"

DEFAULT_PER_PAGE = 50

DEFAULT_SETTINGS = {
    "ARBOR_HOSTNAME": "",
    "ARBOR_VERIFY_SSL": False,
    "ARBOR_TIMEOUT": 30,
    "OUTPUT_DIR": "./output",
    "OUTPUT_RETENTION_DAYS": 30,
    "DEBUG": False,
}
