"""
Forwarding of tool calls to functions of the Unity-side MCP package.
"""

from typing import Any, Dict

from ..connection import get_unity_connection


def error_response(message: str) -> Dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "result": None
    }


def send_to_unity(func: str, args: Dict[str, Any]) -> Dict[str, Any]:
    """Call a Unity function and wrap the answer in the common response shape."""
    if not func or not isinstance(func, str):
        return error_response("Function name is invalid or empty")
    if not isinstance(args, dict):
        return error_response("Arguments must be an object")

    try:
        bridge = get_unity_connection()
        # Only forward arguments that are set
        params = {k: v for k, v in args.items() if v is not None}
        result = bridge.send_command_with_retry(func, params, max_retries=2)
    except ConnectionError as e:
        return error_response(f"Unity connection error: {e}")
    except RuntimeError as e:
        return error_response(f"Function call failed: {e}")

    return {
        "success": True,
        "result": result,
        "error": None
    }
