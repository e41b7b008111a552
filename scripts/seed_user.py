import argparse
from pathlib import Path
import sys

from sqlalchemy import select

if __package__ is None or __package__ == "":
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from qualifications.core.config import get_settings
from qualifications.core.security import hash_password
from qualifications.db.session import get_session_factory
from qualifications.models.user import User


def parse_args() -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create or update a user account.")
    parser.add_argument("--login", default=settings.bootstrap_user_login)
    parser.add_argument("--password", default=settings.bootstrap_user_password)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    session_factory = get_session_factory()
    with session_factory() as db:
        existing = db.scalar(select(User).where(User.login == args.login))
        if existing:
            existing.password_hash = hash_password(args.password)
            action = "updated"
        else:
            db.add(User(login=args.login, password_hash=hash_password(args.password)))
            action = "created"
        db.commit()
    print(f"User {args.login} {action}.")


if __name__ == "__main__":
    main()
