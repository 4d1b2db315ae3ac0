import requests
import json
import uuid
from .rpc_logger import logRPC

class McpHttpClient:
    """
    Minimal HTTP client for communicating with a remote MCP server
    using JSON-RPC over HTTP.
    """

    def __init__(self, base_url: str, token: str = "", logDir: str = "",
                 session: requests.Session | None = None, timeout: float = 30):
        """
        Initialize the HTTP client.

        Args:
            base_url (str): URL of the MCP endpoint (e.g. http://host:8080/mcp).
            token (str): Optional bearer token sent on every request.
            logDir (str): Optional JSONL directory for request/response logging.
            session (requests.Session | None): Session to reuse (tests inject fakes).
            timeout (float): Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")   # Ensure no trailing slash
        self.session = session or requests.Session()
        self.logDir = logDir
        self.timeout = timeout
        self.tools_cache = {}                  # Cache for tools list
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def rpc(self, method: str, params: dict | None = None) -> dict:
        """
        Perform a JSON-RPC request to the MCP server.

        Args:
            method (str): RPC method name.
            params (dict | None): Optional parameters.

        Returns:
            dict: The 'result' field from the server response.

        Raises:
            RuntimeError: when the server answers with a JSON-RPC error object.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": str(uuid.uuid4()),  # Unique request ID
            "method": method,
        }
        if params:
            payload["params"] = params

        logRPC("send", payload, self.logDir)

        resp = self.session.post(self.base_url, json=payload, timeout=self.timeout)

        # Error envelopes may arrive with 401/500, read them before raising on status
        try:
            data = resp.json()
        except ValueError:
            resp.raise_for_status()
            raise RuntimeError(f"Non-JSON response from MCP server (HTTP {resp.status_code})")

        logRPC("recv", data, self.logDir)

        if "error" in data:
            raise RuntimeError(data["error"])
        resp.raise_for_status()
        return data["result"]

    def start(self):
        """
        Start the client session.
        Calls 'initialize' RPC on the server and returns its metadata.
        """
        return self.rpc("initialize")

    def stop(self):
        """
        Release the underlying HTTP session.
        """
        self.session.close()

    def listTools(self) -> dict:
        """
        Fetch the list of available tools from the MCP server.
        Results are cached after the first call.

        Returns:
            dict: {"result": <tools list>}
        """
        if not self.tools_cache:
            self.tools_cache = self.rpc("tools/list")
        return {"result": self.tools_cache}

    def callTool(self, name: str, args: dict) -> str:
        """
        Call a tool exposed by the MCP server.

        Args:
            name (str): Tool name.
            args (dict): Arguments for the tool.

        Returns:
            str: The first text block of the tool result.
        """
        result = self.rpc("tools/call", {"name": name, "arguments": args})

        # The server response looks like:
        # {"content": [{"type": "text","text": "..."}]}
        if "content" in result and result["content"]:
            return result["content"][0].get("text", "")
        return json.dumps(result, ensure_ascii=False)
