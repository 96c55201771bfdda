"""
Create a user (e.g. the first admin) without going through /auth/register. Run from project root:
  python -m fleetdesk.scripts.create_user NAME EMAIL PASSWORD [ROLE]
Example:
  python -m fleetdesk.scripts.create_user "Ana Souza" ana@example.com your-secure-password Admin
"""
import argparse
import sys

from fleetdesk.core.database import SessionLocal
from fleetdesk.core.permissions import ADMIN_ROLE_NAME
from fleetdesk.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from fleetdesk.models import Role, User
from fleetdesk.services.rbac import ensure_default_roles


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a FleetDesk user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("email", help="Login e-mail (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ADMIN_ROLE_NAME, help="Role name (default: Admin)")
    args = parser.parse_args()

    name = args.name.strip()
    email = args.email.strip().lower()
    if not name or "@" not in email:
        print("Invalid name or e-mail.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        if db.query(User).filter(User.email == email).first():
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        ensure_default_roles(db)
        role = db.query(Role).filter(Role.name == args.role).first()
        if role is None:
            print(f"Role '{args.role}' does not exist.", file=sys.stderr)
            db.rollback()
            return 1
        db.add(
            User(
                name=name,
                email=email,
                password_hash=hash_password(args.password),
                status="active",
                role_id=role.id,
            )
        )
        db.commit()
        print(f"Created user '{email}' with role '{role.name}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
