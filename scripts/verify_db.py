import os
import sys

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

# Add current directory to path so we can import solarops
sys.path.append(os.getcwd())

from solarops.core.errors import describe_error
from solarops.db.session import engine, init_db
from solarops.models import Project, User


def verify_database() -> bool:
    print("--- Database Verification ---")
    try:
        print("Creating missing tables...")
        init_db()
        print("Table creation/verification successful.")

        with Session(engine) as session:
            users = len(session.exec(select(User.id)).all())
            projects = len(session.exec(select(Project.id)).all())
        print("Database connection test: SUCCESS")
        print(f"Users: {users}, projects: {projects}")
        return True

    except SQLAlchemyError as e:
        print("Database connection test: FAILED")
        print(f"Error: {describe_error(e)}")
        if "mysql" in str(e).lower():
            print("\nTIP: Ensure the database server is running and the user has correct permissions.")
        return False


if __name__ == "__main__":
    sys.exit(0 if verify_database() else 1)
