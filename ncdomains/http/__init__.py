'''
**ncdomains.http**
---------

The HTTP utilities for ncdomains: an httpx client with a strict transport
(HTTPS only, public hosts only, hardened SSL context and TCP keepalive),
request/response logging hooks that keep the API key out of the logs, and
the `ClientConfig` used to tune timeouts and connection limits.
'''
from ncdomains.http._client import (
    NCDomainsTransport,
    ClientConfig,
    NCDomainsClient,
    URLRejectedError,
    api_ssl_context,
    get_socket_options,
    log_request,
    log_response,
    redact_url,
    verify_api_url,
)

__all__ = [
    'NCDomainsTransport',
    'ClientConfig',
    'NCDomainsClient',
    'URLRejectedError',
    'api_ssl_context',
    'get_socket_options',
    'log_request',
    'log_response',
    'redact_url',
    'verify_api_url',
]
