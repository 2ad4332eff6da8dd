import httpx
from src.corridor.infrastructure.retry import RetryPolicy
from src.corridor.infrastructure.tomtom_client import TomTomClient

# No backoff so retry paths run instantly
FAST_POLICY = RetryPolicy(timeout_s=1.0, retries=2, backoff_ms=0.0)


def make_client(handler) -> TomTomClient:
    """TomTomClient whose requests are answered by ``handler(request)``."""
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="https://api.tomtom.com",
    )
    return TomTomClient(api_key="test-key", http_client=http_client)
