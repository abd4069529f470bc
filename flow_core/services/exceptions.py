# flow_core/services/exceptions.py

class RemoteInterpreterError(Exception):
    """Base for failures of the hosted-model intent source."""
    pass

class MissingCredentialError(RemoteInterpreterError):
    """Raised when no API key is configured for the remote interpreter."""
    pass

class RemoteResponseError(RemoteInterpreterError):
    """Raised when the remote reply has no usable command JSON."""
    pass

class FlowFormatError(Exception):
    """Raised when saved flow data is malformed."""
    pass
