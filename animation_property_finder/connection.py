"""
HTTP bridge to the Unity-side MCP server running inside the editor.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import requests

from .config import config

logger = logging.getLogger(config.logger_name)

CONNECTION_ERROR_HINTS = ("connection", "timeout", "refused", "unavailable")


def _new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "Content-Type": "application/json",
        "User-Agent": "Animation-Property-Finder/1.0",
    })
    return session


@dataclass
class UnityConnection:
    """Manages the HTTP connection to the Unity Editor."""
    host: str = config.unity_host
    port: Optional[int] = None  # Currently active port
    failed_ports: Dict[int, float] = field(default_factory=dict)  # port -> failure timestamp
    connection_attempts: int = 0
    session: requests.Session = field(default_factory=_new_session)

    def _port_range(self) -> List[int]:
        return list(range(config.unity_port_start, config.unity_port_end + 1))

    def _mark_failed(self) -> None:
        if self.port:
            logger.info(f"Marking port {self.port} as failed")
            self.failed_ports[self.port] = time.time()
            self.port = None

    def _cleanup_expired_failed_ports(self) -> None:
        now = time.time()
        expired = [port for port, failed_at in self.failed_ports.items()
                   if now - failed_at > config.port_failure_timeout]
        for port in expired:
            self.failed_ports.pop(port)
        if expired:
            logger.debug(f"Cleaned up expired failed ports: {expired}")

    def connect(self, force_reconnect: bool = False) -> bool:
        """Find a Unity HTTP server by trying the configured ports."""
        if self.port and not force_reconnect:
            if self._is_unity_mcp_server_on_port(self.port):
                return True
            logger.warning(f"Port {self.port} is no longer available")
            self._mark_failed()

        self.connection_attempts += 1
        self._cleanup_expired_failed_ports()

        available_ports = [port for port in self._port_range() if port not in self.failed_ports]
        if not available_ports:
            logger.warning("All ports have failed recently, retrying all of them")
            self.failed_ports.clear()
            available_ports = self._port_range()

        logger.info(f"Port discovery attempt #{self.connection_attempts} over {available_ports}")
        for port in available_ports:
            if self._is_unity_mcp_server_on_port(port):
                self.port = port
                self.failed_ports.pop(port, None)
                logger.info(f"Selected port {port} for HTTP communication")
                return True
            self.failed_ports[port] = time.time()

        logger.error(f"Failed to find Unity HTTP server on any port in range {config.unity_port_start}-{config.unity_port_end}")
        return False

    def _is_unity_mcp_server_on_port(self, port: int) -> bool:
        url = f"http://{self.host}:{port}"
        try:
            response = self.session.get(url, timeout=config.ping_timeout)
        except requests.exceptions.Timeout:
            logger.debug(f"Ping to {url} timed out.")
            return False
        except requests.exceptions.ConnectionError:
            logger.debug(f"Connection refused on {url}.")
            return False

        if response.status_code != 200:
            logger.debug(f"Ping to {url} returned status code {response.status_code}")
            return False
        try:
            data = response.json()
        except ValueError:
            logger.debug(f"Received non-JSON response from {url}, assuming it's not an MCP server.")
            return False
        return data.get("status") == "success" and data.get("result", {}).get("message") == "pong"

    def disconnect(self) -> None:
        """Close the HTTP session."""
        try:
            self.session.close()
        finally:
            self.session = _new_session()
            self.port = None

    def send_command(self, command_type: str, cmd: Union[Dict[str, Any], List, None] = None) -> Any:
        """Send a command to Unity via HTTP POST and return its result."""
        if not self.port and not self.connect():
            raise ConnectionError("No Unity HTTP server available")

        url = f"http://{self.host}:{self.port}/"
        command = {"type": command_type, "cmd": cmd if cmd is not None else {}}
        logger.info(f"Sending HTTP POST to {url}: {command_type}")
        logger.debug(f"Command payload: {json.dumps(command, ensure_ascii=False)}")

        try:
            response = self.session.post(url, json=command, timeout=config.send_timeout)
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
            self._mark_failed()
            raise ConnectionError(f"Failed to communicate with Unity: {e}") from e

        if response.status_code != 200:
            raise RuntimeError(f"HTTP request failed with status code {response.status_code}")
        try:
            result = response.json()
        except ValueError as e:
            raise RuntimeError(f"Invalid JSON response from Unity: {e}") from e

        if result.get("status") == "error":
            raise RuntimeError(result.get("error") or result.get("message", "Unknown Unity error"))
        return result.get("result", {})

    def send_command_with_retry(self, command_type: str, cmd: Union[Dict[str, Any], List, None] = None,
                                max_retries: int = 2) -> Any:
        """Send command, switching ports on connection failures."""
        last_error: Optional[Exception] = None
        for attempt in range(max_retries + 1):
            try:
                return self.send_command(command_type, cmd)
            except (ConnectionError, RuntimeError) as e:
                last_error = e
                logger.warning(f"Command attempt {attempt + 1} failed: {e}")
                if attempt >= max_retries:
                    break
                if any(hint in str(e).lower() for hint in CONNECTION_ERROR_HINTS):
                    self._mark_failed()
                    if not self.connect(force_reconnect=True):
                        time.sleep(1)
                else:
                    time.sleep(0.5)
        raise last_error


# Global Unity connection
_unity_connection: Optional[UnityConnection] = None


def get_unity_connection() -> UnityConnection:
    """Retrieve or establish a Unity HTTP connection."""
    global _unity_connection

    if _unity_connection is None:
        _unity_connection = UnityConnection()

    if not _unity_connection.connect():
        raise ConnectionError(
            f"Could not find Unity HTTP server on ports {config.unity_port_start}-{config.unity_port_end}. "
            "Ensure the Unity Editor and MCP HTTP server are running."
        )
    return _unity_connection


def close_unity_connection() -> None:
    global _unity_connection
    if _unity_connection is not None:
        _unity_connection.disconnect()
        logger.info("Unity connection closed")
        _unity_connection = None
