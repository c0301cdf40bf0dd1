from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
TreasuryMode = Literal["pooled", "per_campaign"]
CampaignStatus = Literal["active", "completed", "withdrawn"]

MAX_U64 = 2**64 - 1

# --- Currency ---


class Coin(BaseModel):
    """Opaque amount of settlement currency held in custody (octas)."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(default=0, ge=0)


# --- Campaigns ---


class Campaign(BaseModel):
    campaign_id: int
    owner: str
    title: bytes
    description: bytes
    goal: int
    donated: int = 0
    completed: bool = False
    withdrawn: bool = False

    @property
    def title_text(self) -> str:
        return self.title.decode("utf-8", errors="replace")


class Registry(BaseModel):
    """Append-only campaign sequence. Index is the external identifier."""

    campaigns: list[Campaign] = Field(default_factory=list)
    counter: int = 0


# --- Escrow ---


class Treasury(BaseModel):
    """
    Escrowed funds.

    In "pooled" mode every donation is merged into ``pool``. In
    "per_campaign" mode each campaign index owns its own partition.
    """

    mode: TreasuryMode = "pooled"
    pool: Coin = Field(default_factory=Coin)
    partitions: dict[int, Coin] = Field(default_factory=dict)


# --- Ledger handle ---


class LedgerState(BaseModel):
    """
    Registry and treasury addressed through one administrative identity.

    ``registry``/``treasury`` are None until Initialize succeeds.
    """

    admin: str | None = None
    registry: Registry | None = None
    treasury: Treasury | None = None

    @property
    def initialized(self) -> bool:
        return self.registry is not None and self.treasury is not None
