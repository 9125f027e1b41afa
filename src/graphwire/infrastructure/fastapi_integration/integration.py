from typing import Any, Awaitable, Callable, Optional, Sequence

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from graphwire.domain import IContainer, TypeReference


def create_fastapi_dependency(
    container: IContainer,
    type_identifier: TypeReference,
    extra_args: Optional[Sequence[Any]] = None,
) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves from the DI container.

    The instance is created on the first call and shared afterwards, like any
    other instance of the container.

    Args:
        container: The DI container to resolve from.
        type_identifier: The type to resolve when the dependency is called.
        extra_args: Positional arguments for the first creation of the type.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = DIContainer({IUserRepository: SqlUserRepository})
        >>> get_user_service = create_fastapi_dependency(container, UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return await service.get_all()
    """

    def dependency() -> Any:
        """Resolve the dependency from the container."""
        return container.resolve(type_identifier, extra_args)

    return dependency


def create_request_dependency(type_identifier: TypeReference) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that resolves from the container attached to the request.

    Requires the ContainerMiddleware to be installed.

    Args:
        type_identifier: The type to resolve.

    Returns:
        A callable that resolves from ``request.state.di_container``.

    Example:
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> get_user_service = create_request_dependency(UserService)
        >>>
        >>> @app.get("/users")
        >>> async def list_users(service: UserService = Depends(get_user_service)):
        ...     return await service.get_all()
    """

    def request_dependency(request: Request) -> Any:
        """Resolve from the request's container."""
        if not hasattr(request.state, "di_container"):
            raise RuntimeError(
                "Request does not have a DI container. Did you forget to add ContainerMiddleware?"
            )
        container: IContainer = request.state.di_container
        return container.resolve(type_identifier)

    return request_dependency


class ContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that exposes the DI container on every request.

    The container is accessible via `request.state.di_container`.

    Attributes:
        container: The DI container shared by all requests.

    Example:
        >>> container = container_from_config("aliases.yaml")
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(ContainerMiddleware, container=container)
        >>>
        >>> @app.get("/")
        >>> async def root(request: Request):
        ...     service = request.state.di_container.resolve(UserService)
        ...     return {"message": service.greet()}
    """

    def __init__(self, app: FastAPI, container: IContainer):
        """Initialize the middleware with a container.

        Args:
            app: The FastAPI/Starlette application.
            container: The DI container to attach to requests.
        """
        super().__init__(app)
        self.container = container

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Attach the container to the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request.state.di_container = self.container
        return await call_next(request)
