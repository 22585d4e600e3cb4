"""Create a staff (or admin) account for the kitchen display.

Usage:
    python scripts/create_staff_user.py EMAIL PASSWORD [--first NAME] [--last NAME] [--admin]
"""
import argparse
import os
import sys

# Ensure project root is on sys.path so `stadium_orders` can be imported when this script is run directly
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stadium_orders.core.errors import ValidationError  # noqa: E402
from stadium_orders.db.session import SessionLocal, create_db  # noqa: E402
from stadium_orders.models.user import RoleEnum  # noqa: E402
from stadium_orders.services.auth import create_user  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a staff account")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first", dest="first_name")
    parser.add_argument("--last", dest="last_name")
    parser.add_argument("--admin", action="store_true", help="grant the admin role instead of staff")
    return parser


def main(argv=None, session_factory=SessionLocal) -> int:
    args = build_parser().parse_args(argv)
    create_db(bind=session_factory.kw.get("bind"))
    db = session_factory()
    try:
        user = create_user(
            db,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
            role=RoleEnum.admin if args.admin else RoleEnum.staff,
        )
    except ValidationError as e:
        print(f"FAILED: {e.message}")
        return 1
    finally:
        db.close()
    print(f"OK: created {user.role.value} account id={user.id} for {user.email}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
