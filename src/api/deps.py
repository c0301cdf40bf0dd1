import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Header

from src.app_shell.context import LedgerContext, resolve_db_path
from src.components.ledger import LedgerService
from src.domain.policy import normalize_address
from src.rules.loader import load_rules
from src.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(
            os.environ.get("LEDGER_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules_from_path(rules_path: Path) -> Rules:
    return load_rules(rules_path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return get_rules_from_path(settings.rules_path)


# --- Ledger ---
@lru_cache
def get_ledger_context() -> LedgerContext:
    """Process-wide context; the service lock only serializes one shared instance."""
    rules = get_rules_from_path(get_settings().rules_path)
    return LedgerContext.create(resolve_db_path(rules), rules)


def get_ledger_service() -> LedgerService:
    return get_ledger_context().ledger_service


# --- Signer ---
def get_signer(x_signer: str = Header(...)) -> str:
    """Caller address taken from the X-Signer header."""
    return normalize_address(x_signer)
