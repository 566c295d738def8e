from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field

from beatstats.api.deps import get_dashboard_service
from beatstats.domain.models import Account
from beatstats.services.dashboard import DashboardService

router = APIRouter(tags=["dashboard"])


class DashboardRequest(BaseModel):
    """
    Raw posts response as fetched by the client, plus who is asking.
    Either a resolved account or the raw profile payload may be sent.
    """
    payload: Any = Field(default_factory=list)
    now: Optional[datetime] = None
    account: Optional[Account] = None
    profile: Optional[dict[str, Any]] = None

    def resolve_account(self) -> Account:
        if self.account is not None:
            return self.account
        if self.profile is not None:
            return Account.from_profile(self.profile)
        return Account()


@router.post("/dashboard")
def dashboard(
    request: Request,
    body: DashboardRequest,
    days: Optional[int] = Query(None, description="Activity window in days (default from settings)"),
    svc: DashboardService = Depends(get_dashboard_service),
):
    view = svc.build(body.payload, now=body.now, account=body.resolve_account(), days=days)
    request.state.item_count = len(view.items)
    return view


@router.post("/export")
def export_csv(
    body: DashboardRequest,
    svc: DashboardService = Depends(get_dashboard_service),
):
    artifact = svc.export(body.payload, now=body.now, account=body.resolve_account())
    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
