"""Redaction module to mask secrets in outputs and logs."""
import re
from typing import Any, Dict

SECRET_KEYS = ("password", "tb_password", "passwd", "cookie", "asp.net_sessionid")


def redact_string(text: str) -> str:
    """Redact secrets from a string."""
    if not text:
        return text

    patterns = [
        (r'(TB_Password=)([^&\s]+)', r'\1[REDACTED]'),
        (r'(password["\']?\s*[:=]\s*["\'])([^"\']+)(["\'])', r'\1[REDACTED]\3'),
        (r'(ASP\.NET_SessionId=)([^;,\s]+)', r'\1[REDACTED]'),
        (r'(\.ASPXAUTH=)([^;,\s]+)', r'\1[REDACTED]'),
    ]

    result = text
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result, flags=re.IGNORECASE)

    return result


def redact_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively redact secrets from a dictionary."""
    if not isinstance(data, dict):
        return data

    redacted = {}
    for key, value in data.items():
        if str(key).lower() in SECRET_KEYS:
            redacted[key] = "[REDACTED]"
        elif isinstance(value, dict):
            redacted[key] = redact_dict(value)
        elif isinstance(value, list):
            redacted[key] = [redact_json(item) for item in value]
        elif isinstance(value, str):
            redacted[key] = redact_string(value)
        else:
            redacted[key] = value

    return redacted


def redact_json(data: Any) -> Any:
    """Redact secrets from JSON-serializable data."""
    if isinstance(data, dict):
        return redact_dict(data)
    elif isinstance(data, list):
        return [redact_json(item) for item in data]
    elif isinstance(data, str):
        return redact_string(data)
    else:
        return data
