#!/usr/bin/env python
"""Idempotent seed script for the admin account and the initial technicians.

This is the only way an admin user can come into existence; self-registration
refuses the admin role.

Usage:
    python backend/scripts/seed_admin.py                    # seed admin + technicians
    python backend/scripts/seed_admin.py --no-technicians   # admin only
    python backend/scripts/seed_admin.py --dry-run          # run logic then rollback (no DB changes)
"""
from __future__ import annotations
import os, sys, argparse, textwrap
from sqlalchemy import select, text

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))

from campusfix import create_app, get_db  # type: ignore
from campusfix.constants.roles import ROLE_ADMIN, ROLE_TECHNICIAN
from campusfix.models.user import Base, User
import campusfix.models.complaint  # noqa: F401
import campusfix.models.feedback  # noqa: F401

DEFAULT_TECHNICIANS = [
    {'name': 'Mike Tech', 'email': 'mike@tech.com'},
    {'name': 'Sarah Fix', 'email': 'sarah@tech.com'},
]


def ensure_admin(session, email: str = None, password: str = None, name: str = 'Facility Manager', department: str = 'Facility'):
    """Create the admin account unless one with that email exists. Returns (user, created)."""
    email = email or os.getenv('SEED_ADMIN_EMAIL', 'admin@campus.com')
    existing = session.execute(select(User).where(User.email==email)).scalar_one_or_none()
    if existing:
        if existing.role != ROLE_ADMIN:
            raise RuntimeError(f"{email} already belongs to a {existing.role} account; set SEED_ADMIN_EMAIL to another address")
        return existing, False
    user = User(name=name, email=email, role=ROLE_ADMIN, department=department, password_hash='')
    user.set_password(password or os.getenv('SEED_ADMIN_PASSWORD', 'ChangeMe123!'))
    session.add(user)
    session.flush()
    print(f"[INFO] Created admin user {email} with temporary password.")
    return user, True


def ensure_technicians(session, technicians=None, password: str = None):
    """Create each technician whose email is not yet taken. Returns number created."""
    password = password or os.getenv('SEED_TECH_PASSWORD', 'ChangeMe123!')
    created = 0
    for spec in technicians if technicians is not None else DEFAULT_TECHNICIANS:
        if session.execute(select(User).where(User.email==spec['email'])).scalar_one_or_none():
            continue
        tech = User(name=spec['name'], email=spec['email'], role=ROLE_TECHNICIAN, password_hash='')
        tech.set_password(password)
        session.add(tech)
        created += 1
        print(f"[INFO] Technician: {spec['name']} ({spec['email']})")
    session.flush()
    return created


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Seed the admin account and initial technicians",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  seed normally: seed_admin.py\n  dry run: seed_admin.py --dry-run\n""")
    )
    p.add_argument('--dry-run', action='store_true', help='Rollback after operations (no commit)')
    p.add_argument('--no-technicians', action='store_true', help='Skip creating the default technicians')
    return p.parse_args(argv)


def main(argv=None, app=None):
    args = parse_args(argv)
    app = app or create_app()
    with app.app_context():
        session = get_db()
        try:
            session.execute(text('SELECT 1 FROM users LIMIT 1'))
        except Exception:
            # Auto-create schema for bootstrap; in real env prefer alembic upgrade
            session.rollback()
            Base.metadata.create_all(session.get_bind())
        finally:
            session.commit()

        try:
            _, admin_created = ensure_admin(session)
            techs_created = 0 if args.no_technicians else ensure_technicians(session)
            if args.dry_run:
                session.rollback()
                print(f"[DRY-RUN] (rolled back) Admin would create: {int(admin_created)}, Technicians would create: {techs_created}")
            else:
                session.commit()
                print(f"[DONE] Admin created: {int(admin_created)}, Technicians created: {techs_created}")
        except RuntimeError as e:
            session.rollback()
            print(f"[ERROR] {e}", file=sys.stderr)
            return 1
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
    return 0

if __name__ == '__main__':
    sys.exit(main())
