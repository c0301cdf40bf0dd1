"""Routes for the campaign ledger. Amounts are integer octas."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.api.deps import get_ledger_service, get_signer
from src.components.ledger import LedgerService
from src.components.query import CampaignProgress, CampaignView
from src.components.withdrawal import WithdrawalOutput
from src.domain.entities import MAX_U64, CampaignStatus, TreasuryMode
from src.domain.policy import normalize_address

router = APIRouter()


# --- Request/Response Models ---


class CampaignCreateRequest(BaseModel):
    title: str
    description: str
    goal: int = Field(ge=0, le=MAX_U64)


class DonationRequest(BaseModel):
    amount: int = Field(ge=0, le=MAX_U64)


class InitializeResponse(BaseModel):
    created: bool
    admin: str


class CampaignResponse(BaseModel):
    index: int
    owner: str
    title: str
    description: str
    goal: int
    donated: int
    completed: bool
    withdrawn: bool
    status: CampaignStatus

    @classmethod
    def from_view(cls, view: CampaignView) -> "CampaignResponse":
        return cls(
            index=view.index,
            owner=view.owner,
            title=view.title.decode("utf-8", errors="replace"),
            description=view.description.decode("utf-8", errors="replace"),
            goal=view.goal,
            donated=view.donated,
            completed=view.completed,
            withdrawn=view.withdrawn,
            status=view.status,
        )


class CampaignListResponse(BaseModel):
    items: list[CampaignResponse]
    total: int


class CampaignCountResponse(BaseModel):
    count: int


class DonationResponse(BaseModel):
    campaign_index: int
    amount: int
    donated: int
    goal: int
    completed: bool
    goal_reached_now: bool


class WithdrawalResponse(BaseModel):
    campaign_index: int
    recipient: str
    amount: int
    by_admin: bool
    completed: bool


class ProgressResponse(BaseModel):
    index: int
    goal: int
    donated: int
    remaining: int
    percent: float
    status: CampaignStatus


class OwnerCampaignsResponse(BaseModel):
    owner: str
    indices: list[int]


class TreasuryResponse(BaseModel):
    mode: TreasuryMode | None
    total: int
    campaign_index: int | None = None
    partition: int | None = None


def _withdrawal_response(result: WithdrawalOutput) -> WithdrawalResponse:
    return WithdrawalResponse(
        campaign_index=result.campaign_index,
        recipient=result.recipient,
        amount=result.amount,
        by_admin=result.by_admin,
        completed=result.completed,
    )


def _progress_response(progress: CampaignProgress) -> ProgressResponse:
    return ProgressResponse(
        index=progress.index,
        goal=progress.goal,
        donated=progress.donated,
        remaining=progress.remaining,
        percent=progress.percent,
        status=progress.status,
    )


# --- Mutations ---


@router.post("/ledger/initialize", response_model=InitializeResponse)
def initialize_ledger(
    signer: str = Depends(get_signer),
    service: LedgerService = Depends(get_ledger_service),
) -> InitializeResponse:
    """Create the registry and treasury. Repeat calls are no-ops."""
    result = service.initialize(signer)
    return InitializeResponse(created=result.created, admin=result.admin)


@router.post("/campaigns", response_model=CampaignResponse, status_code=201)
def create_campaign(
    data: CampaignCreateRequest,
    signer: str = Depends(get_signer),
    service: LedgerService = Depends(get_ledger_service),
) -> CampaignResponse:
    result = service.create_campaign(signer, data.title, data.description, data.goal)
    return CampaignResponse.from_view(
        CampaignView.from_campaign(result.campaign_index, result.campaign)
    )


@router.post("/campaigns/{index}/donations", response_model=DonationResponse)
def donate(
    index: int,
    data: DonationRequest,
    signer: str = Depends(get_signer),
    service: LedgerService = Depends(get_ledger_service),
) -> DonationResponse:
    result = service.donate(signer, index, data.amount)
    return DonationResponse(
        campaign_index=result.campaign_index,
        amount=result.amount,
        donated=result.donated,
        goal=result.goal,
        completed=result.completed,
        goal_reached_now=result.goal_reached_now,
    )


@router.post("/campaigns/{index}/withdraw", response_model=WithdrawalResponse)
def withdraw(
    index: int,
    signer: str = Depends(get_signer),
    service: LedgerService = Depends(get_ledger_service),
) -> WithdrawalResponse:
    """Owner payout of a completed campaign."""
    return _withdrawal_response(service.withdraw(signer, index))


@router.post("/campaigns/{index}/admin-withdraw", response_model=WithdrawalResponse)
def admin_withdraw(
    index: int,
    signer: str = Depends(get_signer),
    service: LedgerService = Depends(get_ledger_service),
) -> WithdrawalResponse:
    """Administrator emergency payout to the campaign owner."""
    return _withdrawal_response(service.admin_withdraw(signer, index))


# --- Queries ---


@router.get("/campaigns", response_model=CampaignListResponse)
def list_campaigns(
    service: LedgerService = Depends(get_ledger_service),
) -> CampaignListResponse:
    views = service.get_all_campaigns()
    return CampaignListResponse(
        items=[CampaignResponse.from_view(v) for v in views],
        total=len(views),
    )


@router.get("/campaigns/count", response_model=CampaignCountResponse)
def campaign_count(
    service: LedgerService = Depends(get_ledger_service),
) -> CampaignCountResponse:
    return CampaignCountResponse(count=service.get_campaign_count())


@router.get("/campaigns/{index}", response_model=CampaignResponse)
def get_campaign(
    index: int,
    service: LedgerService = Depends(get_ledger_service),
) -> CampaignResponse:
    return CampaignResponse.from_view(service.get_campaign(index))


@router.get("/campaigns/{index}/progress", response_model=ProgressResponse)
def get_progress(
    index: int,
    service: LedgerService = Depends(get_ledger_service),
) -> ProgressResponse:
    return _progress_response(service.get_campaign_progress(index))


@router.get("/owners/{owner}/campaigns", response_model=OwnerCampaignsResponse)
def campaigns_by_owner(
    owner: str,
    service: LedgerService = Depends(get_ledger_service),
) -> OwnerCampaignsResponse:
    return OwnerCampaignsResponse(
        owner=normalize_address(owner),
        indices=service.get_campaigns_by_owner(owner),
    )


@router.get("/treasury", response_model=TreasuryResponse)
def treasury_balance(
    campaign: int | None = None,
    service: LedgerService = Depends(get_ledger_service),
) -> TreasuryResponse:
    balance = service.get_treasury_balance(campaign)
    return TreasuryResponse(
        mode=balance.mode,
        total=balance.total,
        campaign_index=balance.campaign_index,
        partition=balance.partition,
    )
