import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

try:
    load_dotenv()
except Exception:
    pass


def envBool(name: str, default: bool) -> bool:
    """Parse truthy/falsey values from env; supports 1/0, true/false, yes/no."""
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off"):
        return False
    return default


def envInt(name: str, default: int) -> int:
    """Parse an integer env var; blank or malformed values fall back to default."""
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class Settings(BaseModel):
    """
    Process configuration, built once at startup and handed to the server,
    the tool registry and the upstream client.
    """
    model_config = ConfigDict(frozen=True)

    port: int = 8080
    host: str = "0.0.0.0"

    # Shared secret for inbound /mcp requests; empty disables auth
    mcpApiKey: str = ""

    # CFBD basketball API
    cbbdApiKey: str = ""
    baseUrl: str = "https://api.collegefootballdata.com/cbb"
    upstreamTimeoutSec: float = 10.0

    # Self health-check interval; 0 disables the pinger
    keepaliveSec: int = 30

    # JSONL directory for JSON-RPC traffic; empty disables it
    logRpcDir: str = ""
    logLevel: str = "INFO"


def loadSettings() -> Settings:
    """Read the environment (and .env) into a Settings record."""
    return Settings(
        port=envInt("PORT", 8080),
        host=os.getenv("HOST", "0.0.0.0"),
        mcpApiKey=os.getenv("MCP_API_KEY", ""),
        cbbdApiKey=os.getenv("CFBD_BASKETBALL_KEY", ""),
        baseUrl=os.getenv("CFBD_BASE_URL", "https://api.collegefootballdata.com/cbb"),
        upstreamTimeoutSec=envInt("CFBD_TIMEOUT_SEC", 10),
        keepaliveSec=envInt("KEEPALIVE_SEC", 30),
        logRpcDir=os.getenv("LOG_RPC", ""),
        logLevel=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


# ---- Console client configuration ------------------------------------------

# URL for remote MCP (HTTP JSON-RPC)
MCP_URL: str = os.getenv("MCP_URL", "http://localhost:8080/mcp")

# Bearer token the console client sends; same variable the server checks
MCP_API_KEY: str = os.getenv("MCP_API_KEY", "")

# Print raw JSON-RPC envelopes in the console client
ROUTER_DEBUG: bool = envBool("ROUTER_DEBUG", False)


__all__ = [
    "Settings",
    "loadSettings",
    "MCP_URL",
    "MCP_API_KEY",
    "ROUTER_DEBUG",
    "envBool",
    "envInt",
]
