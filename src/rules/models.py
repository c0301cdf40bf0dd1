from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.domain.policy import normalize_address


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class LedgerRules(BaseModel):
    admin_address: str
    treasury_mode: Literal["pooled", "per_campaign"] = "pooled"
    require_positive_goal: bool = True
    require_positive_donation: bool = True
    title_max_bytes: int = Field(default=128, gt=0)
    description_max_bytes: int = Field(default=2048, gt=0)
    octas_per_coin: int = Field(default=100_000_000, gt=0)

    @field_validator("admin_address")
    @classmethod
    def _normalize_admin(cls, value: str) -> str:
        return normalize_address(value)


class OpsRules(BaseModel):
    required_env: list[str] = Field(default_factory=list)
    data_dir_env: str = "LEDGER_DATA_DIR"
    default_data_dir: str = "./data"
    db_filename: str = "ledger.db"


class Rules(BaseModel):
    project: ProjectRules
    ledger: LedgerRules
    ops: OpsRules = Field(default_factory=OpsRules)
