import ssl
import socket
import ipaddress
import contextlib
import dataclasses as dc
import logging

import httpx


logger = logging.getLogger(__name__)


USER_AGENT = 'ncdomains/0.1 (+https://github.com/ncdomains/ncdomains)'

REDACTED_PARAMS = ('ApiKey',)


class URLRejectedError(ValueError):
    '''
    Raised when a URL is rejected by the client URL normalizer.

    Parent: ValueError
    '''


def _base_limits() -> httpx.Limits:
    return httpx.Limits(
        max_connections=20,
        max_keepalive_connections=5,
        keepalive_expiry=15,
    )


def _base_timeouts() -> httpx.Timeout:
    return httpx.Timeout(
        connect=5.0,
        read=30.0,
        write=10.0,
        pool=5.0,
    )


def _default_headers() -> dict[str, str]:
    return {
        'Accept': 'application/xml, text/xml',
        'User-Agent': USER_AGENT,
    }


# (option name, level, value); options missing on this platform are skipped
_KEEPALIVE_OPTIONS = (
    ('TCP_NODELAY', socket.IPPROTO_TCP, 1),
    ('SO_KEEPALIVE', socket.SOL_SOCKET, 1),
    ('TCP_KEEPIDLE', socket.IPPROTO_TCP, 60),
    ('TCP_KEEPINTVL', socket.IPPROTO_TCP, 10),
    ('TCP_KEEPCNT', socket.IPPROTO_TCP, 5),
)


def get_socket_options() -> list[tuple[int, int, int]]:
    '''
    TCP options for the API connection pool: no Nagle delay and
    keepalive probes so idle pooled connections are noticed when the
    registrar drops them.

    Returns
    -------
    list[tuple[int, int, int]]
    '''
    return [
        (level, getattr(socket, name), value)
        for name, level, value in _KEEPALIVE_OPTIONS
        if hasattr(socket, name)
    ]


def api_ssl_context() -> ssl.SSLContext:
    '''
    SSL context for the registrar endpoints: TLS 1.2 or newer, certificate
    and hostname verification, ALPN offering h2 before http/1.1.

    Returns
    -------
    ssl.SSLContext
    '''
    ctx = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    ctx.minimum_version = ssl.TLSVersion.TLSv1_2
    ctx.options |= ssl.OP_NO_COMPRESSION

    with contextlib.suppress(NotImplementedError):
        ctx.set_alpn_protocols(['h2', 'http/1.1'])

    return ctx


def host_is_private_literal(host: str) -> bool:
    '''
    Check if the given host is a private, loopback, link-local,
    multicast, unspecified or reserved IP literal.

    Parameters
    ----------
    host : str

    Returns
    -------
    bool
    '''
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    return (
        ip.is_private or ip.is_loopback or ip.is_link_local
        or ip.is_multicast or ip.is_unspecified or ip.is_reserved
    )


def verify_api_url(newurl: str) -> httpx.URL:
    '''
    Verifies a registrar endpoint URL, the API key travels in the
    query string so anything but HTTPS to a public host is refused.

    Parameters
    ----------
    newurl : str

    Returns
    -------
    httpx.URL

    Raises
    ------
    URLRejectedError
        If the URL scheme is not HTTPS or if the host is a private/invalid literal.
    '''
    url = httpx.URL(newurl)

    if url.scheme != "https":
        raise URLRejectedError(f"Rejected unsupported URL scheme: {url.scheme}")

    if not url.host:
        raise URLRejectedError(f"Rejected URL without a host: {newurl}")

    if host_is_private_literal(url.host):
        raise URLRejectedError(f"Rejected private/invalid host: {url.host}")

    return url


def redact_url(url: httpx.URL) -> httpx.URL:
    '''
    Returns a copy of `url` safe to write to logs.
    '''
    for name in REDACTED_PARAMS:
        if name in url.params:
            url = url.copy_set_param(name, '***')
    return url


class NCDomainsTransport(httpx.AsyncBaseTransport):
    '''
    A custom HTTP transport for httpx that uses a strict SSL context,
    custom socket options (for TCP keepalive) and rejects any URL
    `verify_api_url` does not accept.
    '''
    def __init__(
        self,
        *,
        http2: bool = True,
        trust_env: bool = False,
    ) -> None:
        self._inner: httpx.AsyncHTTPTransport = httpx.AsyncHTTPTransport(
            http2=http2,
            socket_options=get_socket_options(),
            verify=api_ssl_context(),
            trust_env=trust_env,
        )

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        request.url = verify_api_url(str(request.url))
        return await self._inner.handle_async_request(request)

    async def aclose(self) -> None:
        await self._inner.aclose()


async def log_request(request: httpx.Request) -> None:
    logger.debug(f'Sending request: {request.method} {redact_url(request.url)}')


async def log_response(response: httpx.Response) -> None:
    request = response.request
    logger.debug(
        f'Received {response.status_code} for {request.method} '
        f'{redact_url(request.url).copy_with(query=None)}'
    )


@dc.dataclass(slots=True)
class ClientConfig:
    '''
    Configuration options for the ncdomains HTTP client.
    Good defaults are provided for most use cases.
    '''
    timeout: httpx.Timeout = dc.field(default_factory=_base_timeouts)
    limits: httpx.Limits = dc.field(default_factory=_base_limits)
    http2: bool = True
    follow_redirects: bool = False
    trust_env: bool = False
    log_traffic: bool = True


class NCDomainsClient(httpx.AsyncClient):
    '''
    Thin wrapper around httpx.AsyncClient with
    sensible defaults for talking to the registrar API
    and logging hooks.
    '''

    def __init__(
        self,
        base_url: str | None = None,
        *,
        headers: dict[str, str] | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()

        transport = NCDomainsTransport(
            http2=self._config.http2,
            trust_env=self._config.trust_env,
        )

        all_headers = _default_headers()
        if headers:
            all_headers.update(headers)

        super().__init__(
            base_url=base_url or '',
            transport=transport,
            limits=self._config.limits,
            timeout=self._config.timeout,
            headers=all_headers,
            follow_redirects=self._config.follow_redirects,
        )

        if self._config.log_traffic:
            self.event_hooks = {
                'request': [log_request],
                'response': [log_response],
            }
