"""
Create an active account (e.g. the first admin when SIGNUP_APPROVAL_POLICY=always_pending).
Run from project root:
  python -m app.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user vivi@mail.com vivi your-secure-password admin
"""
import argparse
import logging
import sys

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import func, or_

from app.core.database import SessionLocal, atomic
from app.core.security import hash_password, password_problem, username_problem
from app.models.user import ROLE_ADMIN, ROLE_USER, STATUS_ACTIVE, User

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create an active vivi.sews account, bypassing signup approval."
    )
    parser.add_argument("email", help="Email address")
    parser.add_argument("username", help="Username (3-50 chars: letters, digits, _ . -)")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    args = parser.parse_args(argv)

    try:
        # Same rules as pydantic EmailStr at signup.
        email = validate_email(args.email.strip(), check_deliverability=False).normalized.lower()
    except EmailNotValidError as e:
        print(f"Invalid email address: {e}", file=sys.stderr)
        return 1
    username = args.username.strip()
    problem = username_problem(username) or password_problem(args.password)
    if problem:
        print(f"{problem}.", file=sys.stderr)
        return 1
    username = username.lower()

    db = SessionLocal()
    try:
        existing = (
            db.query(User.id)
            .filter(or_(func.lower(User.email) == email, func.lower(User.username) == username))
            .first()
        )
        if existing:
            print("Email or username already exists.", file=sys.stderr)
            return 1
        user = User(
            email=email,
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
            status=STATUS_ACTIVE,
        )
        with atomic(db):
            db.add(user)
        logger.info("Created user via CLI: user_id=%s role=%s", user.id, args.role)
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())
