class ChatLLMError(Exception):
    pass

class ConfigError(ChatLLMError):
    pass

class ValidationError(ChatLLMError):
    pass

class InputError(ChatLLMError):
    pass

class TransportError(ChatLLMError):
    pass

class TransportTimeout(TransportError):
    pass

class ApiError(ChatLLMError):
    """The provider answered with an error object."""
    pass

class ParseError(ChatLLMError):
    """The provider answered successfully but the expected field was missing."""
    pass
