"""
Create an admin user from the command line.

This script creates an admin account directly in the configured database,
e.g. to bootstrap the first login or to recover access.

Run with: python create_admin.py <username> [--email EMAIL] [--role admin|superadmin]
"""

import argparse
import getpass
import os
import sys

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from rth_backend.fastapi.core.config import get_settings
from rth_backend.fastapi.core.exceptions import ValidationError
from rth_backend.fastapi.crud.admin import create_admin
from rth_backend.fastapi.dependencies.database import Database


def create_admin_user(username, password, email=None, role=None):
    """Create the admin and print its details."""
    settings = get_settings(os.environ.get("ENV_MODE", "dev"))
    database = Database(settings.DB_URL)
    database.create_all()

    db = database.session()
    try:
        admin = create_admin(db, username, password, email=email, role=role)
        print(f"✅ Successfully created admin user:")
        print(f"   ID: {admin.id}")
        print(f"   Username: {admin.username}")
        print(f"   Role: {admin.role.value}")
        print(f"   Created: {admin.created_at}")
        return admin

    except ValidationError as e:
        print(f"❌ Error creating admin user: {e.message}")
        return None

    finally:
        db.close()
        database.dispose()


def main():
    parser = argparse.ArgumentParser(description="Create an RTH dashboard admin")
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    parser.add_argument("--role", choices=["admin", "superadmin"], default="admin")
    args = parser.parse_args()

    password = os.environ.get("ADMIN_PASSWORD") or getpass.getpass("Password: ")

    print("Creating admin user...")
    admin = create_admin_user(args.username, password, email=args.email, role=args.role)

    if admin:
        print("\n✅ Setup complete! Log in at POST /api/auth/login")
    else:
        print("\n❌ Setup failed. Please check the error messages above.")
        sys.exit(1)


if __name__ == "__main__":
    main()
