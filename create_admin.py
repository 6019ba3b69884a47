"""
Creates the first admin login of the back office
Run: python create_admin.py
"""
import sys
from typing import Optional

from sqlalchemy.orm import Session
from database.conexion import SessionLocal, engine, Base
from models import Profile, StaffRole
from utils.auth import MIN_PASSWORD_LENGTH, get_password_hash


DEMO_USERS = [
    {"email": "manager@hotel.com", "password": "manager123", "first_name": "Laura", "last_name": "Bennett", "role": StaffRole.MANAGER.value},
    {"email": "frontdesk@hotel.com", "password": "frontdesk123", "first_name": "Omar", "last_name": "Haddad", "role": StaffRole.RECEPTIONIST.value},
    {"email": "housekeeping@hotel.com", "password": "housekeeping123", "first_name": "Ana", "last_name": "Silva", "role": StaffRole.HOUSEKEEPING.value},
]


def create_profile(db: Session, email: str, password: str, first_name: str, last_name: str,
                   role: str = StaffRole.ADMIN.value) -> Optional[Profile]:
    """Creates a login profile; returns None when the e-mail is already taken"""
    if db.query(Profile).filter(Profile.email == email).first():
        return None

    profile = Profile(
        email=email,
        hashed_password=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role=role,
        is_active=True,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def create_admin():
    db = SessionLocal()

    try:
        existing = db.query(Profile).filter(Profile.role == StaffRole.ADMIN.value).first()
        if existing:
            print("⚠️  An admin already exists")
            print(f"   ID: {existing.id}")
            print(f"   Email: {existing.email}")
            return

        print("\n🔧 Admin account")
        print("=" * 50)

        email = input("Email (default: admin@hotel.com): ").strip() or "admin@hotel.com"
        while True:
            password = input(f"Password (at least {MIN_PASSWORD_LENGTH} characters): ").strip()
            if len(password) >= MIN_PASSWORD_LENGTH:
                break
            print(f"❌ Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        first_name = input("First name (optional): ").strip() or "System"
        last_name = input("Last name (optional): ").strip() or "Administrator"

        admin = create_profile(db, email, password, first_name, last_name)
        if admin is None:
            print(f"⚠️  {email} is already registered")
            return

        print("\n✅ Admin created")
        print(f"   ID: {admin.id}")
        print(f"   Email: {admin.email}")
        print("\n🔐 Sign in at /auth/login")

    except Exception as e:
        db.rollback()
        print(f"\n❌ Could not create the admin: {str(e)}")
        sys.exit(1)
    finally:
        db.close()


def create_demo_users():
    db = SessionLocal()

    try:
        answer = input("\n📝 Create demo users? (y/n): ").strip().lower()
        if answer != "y":
            return

        created = 0
        for user in DEMO_USERS:
            if create_profile(db, **user) is None:
                print(f"⚠️  '{user['email']}' already exists, skipping...")
                continue
            created += 1

        if created:
            print(f"\n✅ {created} demo users created")
            print("-" * 50)
            for user in DEMO_USERS:
                print(f"  {user['role'].upper():15} | {user['email']:25} | {user['password']}")

    except Exception as e:
        db.rollback()
        print(f"\n❌ Could not create demo users: {str(e)}")
    finally:
        db.close()


if __name__ == "__main__":
    print("🏨 Hotel back office - user bootstrap")
    print("=" * 50)

    Base.metadata.create_all(bind=engine)
    print("✅ Tables verified")

    create_admin()
    create_demo_users()

    print("\n🎉 Done")
    print("   Start the server: uvicorn main:app --reload")
