'''
Exceptions raised by the command gateway. The facade propagates these
unchanged, callers pick their retry policy off the exception type.
'''


class RegistrarError(Exception):
    '''
    Base class for every error raised by ncdomains.
    '''


class TransportError(RegistrarError):
    '''
    The request never produced a usable response: connection failure,
    timeout, non-2xx status or a body that is not the expected XML.

    Parent: RegistrarError
    '''

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ResponseShapeError(TransportError):
    '''
    The registrar answered `OK` but a node the command result needs
    is missing.

    Parent: TransportError
    '''


class RemoteApiError(RegistrarError):
    '''
    The registrar reported `Status="ERROR"`. `code` and `message` are the
    first reported error verbatim, `errors` holds every reported pair.

    Parent: RegistrarError
    '''

    def __init__(
        self,
        code: str | None,
        message: str,
        *,
        command: str | None = None,
        errors: list[tuple[str | None, str]] | None = None,
    ) -> None:
        super().__init__(f'[{code}] {message}' if code else message)
        self.code = code
        self.message = message
        self.command = command
        self.errors = errors or [(code, message)]
