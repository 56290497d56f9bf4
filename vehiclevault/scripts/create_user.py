"""
Create a user (e.g. the first admin). Run from project root:
  python -m vehiclevault.scripts.create_user FULL_NAME EMAIL PASSWORD [profile] [--protected]
Example:
  python -m vehiclevault.scripts.create_user "Site Admin" admin@example.com your-secure-password admin --protected
"""
import argparse
import sys

from vehiclevault.core.config import get_settings
from vehiclevault.core.database import SessionLocal
from vehiclevault.core.errors import VehicleVaultError
from vehiclevault.core.logging_config import configure_logging
from vehiclevault.schemas.auth import Profile
from vehiclevault.schemas.users import UserCreate
from vehiclevault.services.credential_store import UserStore
from vehiclevault.services.users import add_user



def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a VehicleVault user (bootstrap; no UI needed).")
    parser.add_argument("full_name", help="Display name (1-50 chars)")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="Password (min 6 chars)")
    parser.add_argument(
        "profile",
        nargs="?",
        default=Profile.TECHNICIAN.value,
        choices=[p.value for p in Profile],
    )
    parser.add_argument(
        "--protected",
        action="store_true",
        help="Mark the account as protected (cannot be deleted from the dashboard)",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    db = SessionLocal()
    try:
        user = add_user(
            UserStore(db),
            UserCreate(
                full_name=args.full_name,
                email=args.email,
                password=args.password,
                profile=Profile(args.profile),
            ),
            settings,
            is_protected=args.protected,
        )
        print(f"Created user '{user.email}' with profile '{user.profile.value}'.")
        return 0
    except VehicleVaultError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
