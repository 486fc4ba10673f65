'''
**ncdomains.api**
-------------

The remote command gateway: turns a command name and flat parameters into
one request against the registrar's XML endpoint, parses the response and
raises `RemoteApiError` / `TransportError` when the call fails.
See: `ncdomains.api._gateway` for more details.
'''
from ncdomains.api._errors import (
    RegistrarError,
    RemoteApiError,
    ResponseShapeError,
    TransportError,
)
from ncdomains.api._gateway import (
    PRODUCTION_URL,
    SANDBOX_URL,
    Scalar,
    ApiCredentials,
    CommandGateway,
    CommandResult,
    collect_messages,
    raise_for_status,
    to_wire,
)
from ncdomains.api._xml import (
    attr_bool,
    child_text,
    parse_document,
    require,
    value_of,
)

__all__ = [
    'RegistrarError',
    'RemoteApiError',
    'ResponseShapeError',
    'TransportError',
    'PRODUCTION_URL',
    'SANDBOX_URL',
    'Scalar',
    'ApiCredentials',
    'CommandGateway',
    'CommandResult',
    'collect_messages',
    'raise_for_status',
    'to_wire',
    'attr_bool',
    'child_text',
    'parse_document',
    'require',
    'value_of',
]
