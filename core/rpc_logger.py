import os, json
from datetime import datetime, timezone

session_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
SESSION_FILE = f"mcp_rpc_{session_id}.jsonl"


def logRPC(direction: str, data: dict | None, logDir: str, filename: str = SESSION_FILE):
    """
    Save JSON-RPC messages into a JSONL file.

    Args:
        direction (str): "send", "recv" or "recv_raw".
        data (dict): JSON-RPC payload.
        logDir (str): Target directory; an empty value disables logging.
        filename (str): File name inside logDir (default = session file).
    """
    if not logDir:
        return
    os.makedirs(logDir, exist_ok=True)
    ts = datetime.now(timezone.utc).isoformat()
    with open(os.path.join(logDir, filename), "a", encoding="utf-8") as f:
        f.write(json.dumps({
            "time": ts,
            "direction": direction,
            "data": data
        }, ensure_ascii=False, default=str) + "\n")
