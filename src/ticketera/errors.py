from __future__ import annotations


class TicketError(RuntimeError):
    pass


class RequestFormatError(TicketError):
    pass


class ValidationError(TicketError):
    pass


class NotFoundError(TicketError):
    pass


class CollaboratorError(TicketError):
    pass
