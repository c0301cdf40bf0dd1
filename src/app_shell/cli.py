import argparse
import logging
import os
import sys
from pathlib import Path

from src.app_shell.context import LedgerContext, resolve_db_path
from src.components.query import CampaignView
from src.domain.errors import LedgerError
from src.domain.units import format_coins, to_octas
from src.rules.loader import load_rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_PATH = "rules.yaml"


def get_context() -> LedgerContext:
    rules_path = Path(os.environ.get("LEDGER_RULES_PATH", RULES_PATH))
    if not rules_path.exists():
        logger.error(f"Rules file {rules_path} not found.")
        sys.exit(1)

    rules = load_rules(rules_path)
    return LedgerContext.create(resolve_db_path(rules), rules)


def _print_campaign(view: CampaignView, octas_per_coin: int) -> None:
    print(
        f"[{view.index}] {view.title.decode('utf-8', errors='replace')} "
        f"({view.status}) owner={view.owner} "
        f"donated={format_coins(view.donated, octas_per_coin)}"
        f"/{format_coins(view.goal, octas_per_coin)}"
    )


def run_command(ctx: LedgerContext, args: argparse.Namespace) -> None:
    service = ctx.ledger_service
    per_coin = service.config.octas_per_coin

    if args.command == "migrate":
        print(f"Database ready at {ctx.db_path}")

    elif args.command == "init":
        result = service.initialize(args.signer)
        print("Ledger initialized." if result.created else "Ledger already initialized.")

    elif args.command == "fund":
        ctx.coins.mint(args.address, to_octas(args.amount, per_coin))
        print(f"Balance: {format_coins(ctx.coins.balance_of(args.address), per_coin)}")

    elif args.command == "balance":
        print(format_coins(ctx.coins.balance_of(args.address), per_coin))

    elif args.command == "create":
        created = service.create_campaign(
            args.signer, args.title, args.description, to_octas(args.goal, per_coin)
        )
        print(f"Campaign created at index {created.campaign_index}.")

    elif args.command == "donate":
        donation = service.donate(args.signer, args.index, to_octas(args.amount, per_coin))
        print(
            f"Donated {format_coins(donation.amount, per_coin)}; total "
            f"{format_coins(donation.donated, per_coin)}/{format_coins(donation.goal, per_coin)}"
        )
        if donation.goal_reached_now:
            print("Goal reached!")

    elif args.command in ("withdraw", "admin-withdraw"):
        if args.command == "withdraw":
            payout = service.withdraw(args.signer, args.index)
        else:
            payout = service.admin_withdraw(args.signer, args.index)
        print(f"Paid {format_coins(payout.amount, per_coin)} to {payout.recipient}.")

    elif args.command == "list":
        campaigns = service.get_all_campaigns()
        if not campaigns:
            print("No campaigns.")
        for view in campaigns:
            _print_campaign(view, per_coin)

    elif args.command == "show":
        view = service.get_campaign(args.index)
        progress = service.get_campaign_progress(args.index)
        _print_campaign(view, per_coin)
        print(view.description.decode("utf-8", errors="replace"))
        print(f"Progress: {progress.percent}%")

    elif args.command == "by-owner":
        indices = service.get_campaigns_by_owner(args.owner)
        print(" ".join(str(i) for i in indices) if indices else "No campaigns.")

    elif args.command == "treasury":
        balance = service.get_treasury_balance(args.campaign)
        print(f"Mode: {balance.mode or 'uninitialized'}")
        print(f"Total: {format_coins(balance.total, per_coin)}")
        if balance.partition is not None:
            print(f"Campaign {args.campaign}: {format_coins(balance.partition, per_coin)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Relief Escrow Ledger CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Apply database migrations")

    init_parser = subparsers.add_parser("init", help="Initialize registry and treasury")
    init_parser.add_argument("--signer", required=True, help="Administrator address")

    fund_parser = subparsers.add_parser("fund", help="Mint dev funds into an account")
    fund_parser.add_argument("address")
    fund_parser.add_argument("amount", help="Amount in coins, e.g. 2.5")

    balance_parser = subparsers.add_parser("balance", help="Show an account balance")
    balance_parser.add_argument("address")

    create_parser = subparsers.add_parser("create", help="Create a campaign")
    create_parser.add_argument("--signer", required=True)
    create_parser.add_argument("--title", required=True)
    create_parser.add_argument("--description", required=True)
    create_parser.add_argument("--goal", required=True, help="Goal in coins")

    donate_parser = subparsers.add_parser("donate", help="Donate to a campaign")
    donate_parser.add_argument("index", type=int)
    donate_parser.add_argument("amount", help="Amount in coins")
    donate_parser.add_argument("--signer", required=True)

    for name, text in (
        ("withdraw", "Owner withdrawal of a completed campaign"),
        ("admin-withdraw", "Administrator emergency payout to the owner"),
    ):
        sub = subparsers.add_parser(name, help=text)
        sub.add_argument("index", type=int)
        sub.add_argument("--signer", required=True)

    subparsers.add_parser("list", help="List all campaigns")

    show_parser = subparsers.add_parser("show", help="Show one campaign")
    show_parser.add_argument("index", type=int)

    owner_parser = subparsers.add_parser("by-owner", help="Campaign indices for an owner")
    owner_parser.add_argument("owner")

    treasury_parser = subparsers.add_parser("treasury", help="Show escrow balance")
    treasury_parser.add_argument("--campaign", type=int, default=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    ctx = get_context()

    try:
        run_command(ctx, args)
    except LedgerError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1
    finally:
        ctx.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
