"""HTTP request execution and response parsing."""

from .executor import RequestExecutor, RequestSpec
from .parsing import ResponseEnvelope, parse_response

__all__ = ["RequestExecutor", "RequestSpec", "ResponseEnvelope", "parse_response"]
