"""
Capability Exceptions

Raised by the language model capabilities and handled by the workflows.
"""


class CapabilityError(Exception):
    """
    Raised when a capability call fails mechanically (timeout, transport
    error, empty response).
    """

    pass


class CapabilitySchemaError(CapabilityError):
    """
    Raised when a capability response does not match its schema.
    A field of the wrong type is a capability failure, not a crash.
    """

    pass


class LowConfidenceError(Exception):
    """
    Raised when a capability answered but is not confident enough to act.
    The message is user-facing and is relayed verbatim.
    """

    pass
