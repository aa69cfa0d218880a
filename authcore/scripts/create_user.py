"""
Create an identity (e.g. the first admin). Run from project root:
  python -m authcore.scripts.create_user EMAIL PASSWORD [--name NAME] [--role ROLE] [--title TITLE]
Example:
  python -m authcore.scripts.create_user admin@example.com your-secure-password --role admin
"""
import argparse
import sys

from authcore.core.config import KNOWN_ROLES
from authcore.core.database import SessionLocal
from authcore.core.errors import CreationError, DuplicateEmailError
from authcore.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from authcore.services.registration import IdentityRegistrar


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an identity with an initial role.")
    parser.add_argument("email", help="Email address (must not already exist)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--name", default=None, help="Display name")
    parser.add_argument("--role", default="user", choices=list(KNOWN_ROLES))
    parser.add_argument("--title", default=None, help="Optional role title")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    email = args.email.strip()
    if not email or "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        user_id = IdentityRegistrar(db).register_with_role(
            email, args.password, args.name, role=args.role, title=args.title
        )
    except DuplicateEmailError:
        print(f"Email '{email}' already exists.", file=sys.stderr)
        return 1
    except CreationError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created identity {user_id} ({email}) with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
