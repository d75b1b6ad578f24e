from typing import Annotated

from fastapi import Depends, Request

from storefront.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    """
    Return the container the app was created with.
    """
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]
