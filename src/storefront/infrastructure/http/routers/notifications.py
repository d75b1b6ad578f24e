from typing import Optional

from fastapi import APIRouter

from storefront.infrastructure.http.auth import CurrentPrincipal
from storefront.infrastructure.http.dependencies import ContainerDep
from storefront.infrastructure.http.schemas import NotificationLogResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationLogResponse])
def get_logs(
    principal: CurrentPrincipal,
    container: ContainerDep,
    recipient: Optional[str] = None,
):
    """Notification log entries for the current user."""
    entries = container.list_notifications().handle(principal, recipient)
    return [NotificationLogResponse.from_dto(e) for e in entries]
