import certifi
import ssl
import httpx
from typing import Optional

from langchain_openai import ChatOpenAI

from jobsummary.errors import MissingCredentialError
from jobsummary.settings import settings


def require_api_key(api_key: Optional[str] = None) -> str:
    key = api_key or settings.openai_api_key
    if not key:
        raise MissingCredentialError(
            "OPENAI_API_KEY is not set. Add it to the environment or to a .env file."
        )
    return key


def build_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Connection pool for model calls; the owner must `aclose()` it."""
    ca_certs = certifi.where()
    ssl_context = ssl.create_default_context(cafile=ca_certs)
    return httpx.AsyncClient(verify=ssl_context, timeout=timeout or settings.request_timeout)


def build_chat_llm(
    api_key: Optional[str] = None,
    model_name: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
    http_async_client: Optional[httpx.AsyncClient] = None,
) -> ChatOpenAI:
    timeout = timeout or settings.request_timeout

    # One attempt per request; failures go straight back to the caller.
    return ChatOpenAI(
        model=model_name or settings.model_name,
        api_key=require_api_key(api_key),
        base_url=base_url or settings.openai_base_url,
        temperature=settings.temperature,
        timeout=timeout,
        max_retries=0,
        http_async_client=http_async_client or build_http_client(timeout),
    )
