"""Quick reachability and credential check for an Anthropic-compatible endpoint."""

import logging

import httpx

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
PROBE_MODEL = "claude-3-5-haiku-latest"


def messages_url(base_url: str) -> str:
    """Messages endpoint for a base URL, tolerating a trailing /v1."""
    base = base_url.rstrip("/")
    if base.endswith("/v1"):
        return f"{base}/messages"
    return f"{base}/v1/messages"


def check_connection(
    base_url: str,
    api_key: str,
    timeout: float = 15.0,
) -> tuple[bool, str]:
    """
    Send a one-token request to see whether the endpoint answers and accepts the key.

    Any HTTP answer other than 401/403 counts as reachable: relays differ in
    which model names they accept, so a 400/404 still proves the URL and key
    made it through.

    Args:
        base_url: Provider base URL (as exported in ANTHROPIC_BASE_URL)
        api_key: API key to send
        timeout: Request timeout in seconds

    Returns:
        Tuple of (success, message)
    """
    url = messages_url(base_url)
    headers = {
        "x-api-key": api_key,
        "authorization": f"Bearer {api_key}",
        "anthropic-version": ANTHROPIC_VERSION,
        "content-type": "application/json",
    }
    payload = {
        "model": PROBE_MODEL,
        "max_tokens": 1,
        "messages": [{"role": "user", "content": "ping"}],
    }

    try:
        with httpx.Client(timeout=httpx.Timeout(timeout, connect=10.0)) as client:
            response = client.post(url, headers=headers, json=payload)
    except httpx.HTTPError as e:
        logger.debug(f"Connection check to {url} failed: {e!r}")
        return False, f"Could not reach {url}: {e}"

    if response.status_code in (401, 403):
        return False, f"API key rejected (HTTP {response.status_code})"

    return True, f"Endpoint reachable (HTTP {response.status_code})"
