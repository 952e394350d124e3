"""
Console tracing and masking helpers.

Request/response panels are rendered with Rich and are only printed when
debug tracing is enabled on the client.
"""
import json
from typing import Any, Dict, Mapping, Optional

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

console = Console(stderr=True)

SENSITIVE_HEADERS = {"authorization", "x-api-key", "proxy-authorization", "cookie"}


def mask_sensitive(value: Optional[str], show_chars: int = 4) -> str:
    """Mask a secret for safe logging: ``"secretpassword"`` -> ``"secr***"``."""
    if not value:
        return "<none>"
    value = str(value)
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "***"


def mask_auth_header(value: Optional[str]) -> str:
    """Mask an auth header value but keep its scheme visible."""
    if not value:
        return "<none>"
    scheme, sep, secret = str(value).partition(" ")
    if sep and scheme in ("Bearer", "Basic"):
        return f"{scheme} {mask_sensitive(secret)}"
    return mask_sensitive(value)


def mask_headers(headers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Copy of headers with credential-bearing values masked."""
    masked = dict(headers or {})
    for key in masked:
        if key.lower() in SENSITIVE_HEADERS:
            masked[key] = mask_auth_header(masked[key])
    return masked


def format_body(body: Any) -> str:
    """Format body for pretty printing."""
    if body is None:
        return ""
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False, default=str)
    if isinstance(body, bytes):
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    return str(body)


def print_request(method: str, url: str, headers: Optional[Mapping[str, Any]], body: Any = None) -> None:
    console.print(Panel(f"[bold cyan]{method.upper()}[/bold cyan] {url}", title="[bold blue]Request[/bold blue]"))
    console.print("[bold]Headers:[/bold]", mask_headers(headers))
    if isinstance(body, (dict, list)):
        console.print(
            Panel(Syntax(format_body(body), "json", theme="monokai"), title="[bold]Request Body[/bold]")
        )


def print_response(status_code: int, reason: str, url: str, body: Any = None) -> None:
    color = "green" if 200 <= status_code < 300 else "red"
    console.print(
        Panel(
            f"[bold {color}]{status_code}[/bold {color}] {reason}",
            title=f"[bold blue]Response[/bold blue] ({url})",
        )
    )
    if body:
        lexer = "json" if isinstance(body, (dict, list)) else "text"
        console.print(
            Panel(Syntax(format_body(body), lexer, theme="monokai"), title="[bold]Response Body[/bold]")
        )
