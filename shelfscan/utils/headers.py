"""Request headers sent when fetching supplier documents."""

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

ACCEPT_DOCUMENTS = 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'


def build_headers(user_agent: str | None = None, accept_language: str = 'en-US,en;q=0.9') -> dict[str, str]:
    """Build browser-like headers for a document request.

    Args:
        user_agent: User agent to send. Defaults to None (a desktop Chrome agent).
        accept_language: Accept-Language header value. Defaults to 'en-US,en;q=0.9'.

    Returns:
        Header mapping for requests

    """
    user_agent = user_agent or DEFAULT_USER_AGENT
    headers = {
        'User-Agent': user_agent,
        'Accept': ACCEPT_DOCUMENTS,
        'Accept-Language': accept_language,
        'Accept-Encoding': 'gzip, deflate',
        'Connection': 'keep-alive',
        'Upgrade-Insecure-Requests': '1',
    }

    # Sec-Fetch-* only make sense for Chromium agents
    if 'Chrome' in user_agent:
        headers.update(
            {
                'Sec-Fetch-Dest': 'document',
                'Sec-Fetch-Mode': 'navigate',
                'Sec-Fetch-Site': 'none',
                'Sec-Fetch-User': '?1',
            }
        )
    return headers
