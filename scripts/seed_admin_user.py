"""
Seed script to create an initial admin user.

Usage:
    python scripts/seed_admin_user.py [email] [password]
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import taskboard modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from taskboard.core.security import hash_password
from taskboard.db.session import create_all_tables, get_async_session_context
from taskboard.models.user import UserRole
from taskboard.repositories.user_repository import UserRepository

DEFAULT_EMAIL = "admin@test.com"
DEFAULT_PASSWORD = "admin123"  # Change this in production!


async def create_admin_user(email: str, password: str) -> None:
    """Create the admin user unless one with that email already exists."""
    await create_all_tables()
    
    async with get_async_session_context() as db:
        user_repo = UserRepository(db)
        existing_admin = await user_repo.get_by_email(email)
        
        if existing_admin:
            print(f"Admin user already exists: {existing_admin.email}")
            print(f"  User ID: {existing_admin.id}")
            print(f"  Role: {existing_admin.role}")
            return
        
        admin_user = await user_repo.create(
            name="Admin User",
            email=email,
            hashed_password=hash_password(password),
            role=UserRole.ADMIN.value,
        )
        
        print("Created admin user:")
        print(f"  Email: {admin_user.email}")
        print(f"  User ID: {admin_user.id}")
        print(f"  Role: {admin_user.role}")


if __name__ == "__main__":
    email = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_EMAIL
    password = sys.argv[2] if len(sys.argv) > 2 else DEFAULT_PASSWORD
    asyncio.run(create_admin_user(email, password))
