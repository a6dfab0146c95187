"""Error taxonomy for the command pipeline."""


class AutoMateError(Exception):
    """Base class for pipeline errors"""
    pass


class GenerationError(AutoMateError):
    """Language-model call failed (network, auth, rate limit, bad envelope)"""
    pass


class SchemaCoercionError(AutoMateError):
    """Model output could not be turned into a plan"""
    pass


class NoPendingPlanError(AutoMateError):
    """approve() called with nothing waiting for consent"""
    pass


class ExecutionTransportError(AutoMateError):
    """Backend call never produced an HTTP response"""
    pass


class NoDomainSelectedError(AutoMateError):
    """A command was submitted before a domain area was chosen"""
    pass


class AmbiguousInputError(AutoMateError):
    """More than one command payload was supplied in strict mode"""
    pass
