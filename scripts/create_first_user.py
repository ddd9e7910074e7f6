import argparse
import os
import sys

from sqlmodel import Session, select

# Add current directory to path
sys.path.append(os.getcwd())

from solarops.db.session import engine, init_db
from solarops.models.user import User, UserRole
from solarops.core.security import get_password_hash


def create_initial_user(email: str, password: str, full_name: str) -> None:
    print("--- Initial Admin Creation ---")

    roles = [UserRole.ADMIN, UserRole.FINANCE, UserRole.EDITOR]

    init_db()
    with Session(engine) as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user:
            print(f"User with email {email} already exists.")
            return

        print(f"Creating user {email}...")
        session.add(User(
            email=email,
            password=get_password_hash(password),
            full_name=full_name,
            roles=roles
        ))
        session.commit()
        print("Initial admin created successfully!")
        print(f"Email: {email}")
        print(f"Roles: {[r.value for r in roles]}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the first admin account")
    parser.add_argument("--email", default=os.getenv("ADMIN_EMAIL", "admin@solarops.in"))
    parser.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    parser.add_argument("--name", default="Administrator")
    args = parser.parse_args()

    if not args.password:
        parser.error("a password is required (--password or ADMIN_PASSWORD)")
    create_initial_user(args.email, args.password, args.name)
