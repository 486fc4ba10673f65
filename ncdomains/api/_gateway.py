import os
import logging
import dataclasses as dc
from collections.abc import Mapping
from decimal import Decimal
from typing import Self

import httpx
from lxml import etree

from ncdomains import http
from ncdomains.api import _xml
from ncdomains.api._errors import (
    RemoteApiError,
    ResponseShapeError,
    TransportError,
)

logger = logging.getLogger(__name__)


PRODUCTION_URL = 'https://api.namecheap.com/xml.response'
SANDBOX_URL = 'https://api.sandbox.namecheap.com/xml.response'

Scalar = str | int | float | bool | Decimal

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})


@dc.dataclass(slots=True, frozen=True)
class ApiCredentials:
    '''
    Identity sent with every command. `username` defaults to `api_user`,
    which is what the registrar expects unless acting on behalf of
    another account.
    '''
    api_user: str
    api_key: str = dc.field(repr=False)
    client_ip: str
    sandbox: bool = False
    username: str | None = None

    @property
    def endpoint(self) -> str:
        return SANDBOX_URL if self.sandbox else PRODUCTION_URL

    def identity_params(self) -> dict[str, str]:
        return {
            'ApiUser': self.api_user,
            'ApiKey': self.api_key,
            'UserName': self.username or self.api_user,
            'ClientIp': self.client_ip,
        }

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        '''
        Build credentials from `NAMECHEAP_*` environment variables, for
        bootstrapping code; nothing inside ncdomains calls this.

        Parameters
        ----------
        environ : Mapping[str, str] | None, optional
            The mapping to read from, by default `os.environ`

        Returns
        -------
        ApiCredentials

        Raises
        ------
        ValueError
            If a required variable is missing or empty.
        '''
        env = os.environ if environ is None else environ
        required = ('NAMECHEAP_API_USER', 'NAMECHEAP_API_KEY', 'NAMECHEAP_CLIENT_IP')
        missing = [name for name in required if not env.get(name)]
        if missing:
            raise ValueError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        return cls(
            api_user=env['NAMECHEAP_API_USER'],
            api_key=env['NAMECHEAP_API_KEY'],
            client_ip=env['NAMECHEAP_CLIENT_IP'],
            sandbox=env.get('NAMECHEAP_SANDBOX', '').strip().lower() in _TRUTHY,
            username=env.get('NAMECHEAP_USERNAME') or None,
        )


def to_wire(value: Scalar) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def collect_messages(root: etree._Element, path: str) -> list[tuple[str | None, str]]:
    '''
    Collect `(Number, text)` pairs from an `Errors` or `Warnings` node,
    in document order.

    Parameters
    ----------
    root : etree._Element
    path : str
        e.g. `Errors/Error`

    Returns
    -------
    list[tuple[str | None, str]]
    '''
    return [
        (node.get('Number'), (node.text or '').strip())
        for node in root.iterfind(path)
    ]


def raise_for_status(root: etree._Element, command: str) -> None:
    '''
    Raise RemoteApiError when the document reports `Status="ERROR"`.

    Raises
    ------
    RemoteApiError
    '''
    if (root.get('Status') or '').upper() != 'ERROR':
        return

    errors = collect_messages(root, 'Errors/Error')
    if errors:
        code, message = errors[0]
    else:
        code, message = None, 'Unknown error'

    raise RemoteApiError(
        code,
        message or 'Unknown error',
        command=command,
        errors=errors,
    )


@dc.dataclass(slots=True)
class CommandResult:
    '''
    A successful command response. `root` is the whole `ApiResponse`
    document, `command_response` is the command-specific subtree.
    '''
    command: str
    root: etree._Element
    warnings: list[tuple[str | None, str]] = dc.field(default_factory=list)

    @property
    def command_response(self) -> etree._Element:
        return _xml.require(self.root, 'CommandResponse', self.command)

    @property
    def paging(self) -> etree._Element | None:
        return self.root.find('.//Paging')

    @property
    def server(self) -> str | None:
        return _xml.child_text(self.root, 'Server')

    @property
    def execution_time(self) -> float | None:
        text = _xml.child_text(self.root, 'ExecutionTime')
        try:
            return float(text) if text else None
        except ValueError:
            return None

    def require(self, path: str) -> etree._Element:
        return _xml.require(self.command_response, path, self.command)

    def findall(self, path: str) -> list[etree._Element]:
        return self.command_response.findall(path)


class CommandGateway:
    '''
    Sends a named command with a flat parameter mapping to the registrar
    and returns the parsed result. Stateless between calls: no caching
    and no retries, every call reflects live remote state.
    '''

    def __init__(
        self,
        credentials: ApiCredentials,
        *,
        client: httpx.AsyncClient | None = None,
        config: http.ClientConfig | None = None,
    ) -> None:
        self._credentials = credentials
        self._owns_client = client is None
        self._client = client or http.NCDomainsClient(config=config)

    @property
    def credentials(self) -> ApiCredentials:
        return self._credentials

    def build_params(
        self,
        command: str,
        params: Mapping[str, Scalar | None] | None = None,
    ) -> dict[str, str]:
        query = {
            name: to_wire(value)
            for name, value in (params or {}).items()
            if value is not None
        }
        query.update(self._credentials.identity_params())
        query['Command'] = command
        return query

    async def invoke(
        self,
        command: str,
        params: Mapping[str, Scalar | None] | None = None,
    ) -> CommandResult:
        '''
        Issue `command` and parse the response.

        Parameters
        ----------
        command : str
            e.g. `namecheap.domains.check`
        params : Mapping[str, Scalar | None] | None, optional
            Command parameters, values are sent as their string form and
            `None` values are left out.

        Returns
        -------
        CommandResult

        Raises
        ------
        TransportError
            Network failure, non-2xx status or malformed body.
        RemoteApiError
            The registrar reported an error.
        '''
        query = self.build_params(command, params)
        logger.debug(f'Invoking {command}')

        try:
            response = await self._client.post(self._credentials.endpoint, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransportError(
                f'{command} request failed: HTTP {exc.response.status_code} '
                f'from {http.redact_url(exc.request.url)}',
                cause=exc,
            ) from exc
        except (httpx.HTTPError, http.URLRejectedError) as exc:
            raise TransportError(f'{command} request failed: {exc}', cause=exc) from exc

        try:
            root = _xml.parse_document(response.content)
        except etree.XMLSyntaxError as exc:
            raise TransportError(
                f'{command} returned a malformed response body: {exc}', cause=exc
            ) from exc

        if root.tag != 'ApiResponse':
            raise ResponseShapeError(
                f'{command} returned <{root.tag}> instead of <ApiResponse>'
            )

        raise_for_status(root, command)

        result = CommandResult(
            command=command,
            root=root,
            warnings=collect_messages(root, 'Warnings/Warning'),
        )
        for code, message in result.warnings:
            logger.warning(f'{command} warning [{code}]: {message}')

        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
