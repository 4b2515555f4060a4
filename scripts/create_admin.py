import sys
import os
import argparse
from datetime import datetime

# Ensure project root is in path
sys.path.append(os.getcwd())

from extraction_hub.core.database import Base, SessionLocal, engine
from extraction_hub.models import *
from extraction_hub.services.permission_service import seed_permissions


def promote(email: str):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    print(f"🚀 Promoting {email} to admin...")

    try:
        seed_permissions(db)

        user = db.query(User).filter(User.email == email.lower()).first()
        if not user:
            print(f"❌ No user registered with {email}. Register first via POST /auth/register.")
            return 1

        exists = db.query(UserRole).filter(UserRole.user_id == user.id, UserRole.role == "admin").first()
        if exists:
            print("ℹ️ User is already an admin.")
            return 0

        db.add(UserRole(user_id=user.id, role="admin", assigned_at=datetime.utcnow()))
        db.commit()
        print("🎉 Done.")
        return 0

    except Exception as e:
        db.rollback()
        print(f"❌ Error: {e}")
        return 1
    finally:
        db.close()

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Grant the admin role to an existing user")
    parser.add_argument("email")
    args = parser.parse_args()
    sys.exit(promote(args.email))
