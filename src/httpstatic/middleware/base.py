"""
=============================================================================
MIDDLEWARE INTERFACE
=============================================================================

Chain of Responsibility. Each middleware receives the request and the
``next`` handler, and either:

- answers the request itself and returns a response (the chain stops), or
- calls ``next(request)`` to hand it to the rest of the chain.

    Request ──► Logging ──► Static ──► final handler (e.g. 404)
                   │           │
                   │           └── asset found: returns 200/206/304,
                   │               next() is never called
                   └── times and logs whatever comes back

=============================================================================
"""

from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional
import logging

from ..http.request import HTTPRequest
from ..http.response import HTTPResponse


logger = logging.getLogger(__name__)


# The next middleware or the final handler
NextHandler = Callable[[HTTPRequest], HTTPResponse]


class Middleware(ABC):
    """
    Abstract base class for middleware.

        class AddHeader(Middleware):
            def __call__(self, request, next):
                response = next(request)
                response.headers["x-served-by"] = "edge-1"
                return response
    """

    @abstractmethod
    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        """
        Process the request.

        Either return a response directly (short-circuit) or return the
        result of ``next(request)``, optionally post-processed.
        """

    @property
    def name(self) -> str:
        """Middleware name for logging."""
        return self.__class__.__name__


class MiddlewarePipeline:
    """
    Chains middleware around a final handler.

    First added = outermost:

        pipeline = MiddlewarePipeline()
        pipeline.add(LoggingMiddleware())
        pipeline.add(StaticMiddleware(config))
        handler = pipeline.wrap(lambda request: not_found())

        response = handler(request)
    """

    def __init__(self):
        self._middleware: List[Middleware] = []

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {middleware.name}")
        return self

    def use(self, *middleware: Middleware) -> "MiddlewarePipeline":
        """Add several middleware at once."""
        for mw in middleware:
            self.add(mw)
        return self

    def wrap(self, handler: NextHandler) -> NextHandler:
        """
        Wrap ``handler`` with every middleware in the pipeline.

        Wrapping runs in reverse so that ``[A, B, C]`` becomes
        ``A(B(C(handler)))``.
        """
        current = handler
        for middleware in reversed(self._middleware):
            current = self._create_wrapped_handler(middleware, current)
        return current

    def _create_wrapped_handler(self, middleware: Middleware, next_handler: NextHandler) -> NextHandler:
        def wrapped(request: HTTPRequest) -> HTTPResponse:
            return middleware(request, next_handler)

        return wrapped

    def __len__(self) -> int:
        return len(self._middleware)

    def __iter__(self) -> Iterator[Middleware]:
        return iter(self._middleware)


class FunctionMiddleware(Middleware):
    """
    Wraps a plain ``(request, next) -> response`` function as middleware.
    """

    def __init__(
        self,
        func: Callable[[HTTPRequest, NextHandler], HTTPResponse],
        name: Optional[str] = None,
    ):
        self._func = func
        self._name = name or func.__name__

    def __call__(self, request: HTTPRequest, next: NextHandler) -> HTTPResponse:
        return self._func(request, next)

    @property
    def name(self) -> str:
        return self._name


def function_middleware(
    func: Callable[[HTTPRequest, NextHandler], HTTPResponse]
) -> FunctionMiddleware:
    """
    Decorator form of ``FunctionMiddleware``.

        @function_middleware
        def no_store(request, next):
            response = next(request)
            response.headers["cache-control"] = "no-store"
            return response
    """
    return FunctionMiddleware(func)
