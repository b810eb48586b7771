#!/usr/bin/env python3
"""Seed a demo company with one admin and a few employees.

Usage:
    python scripts/seed_demo.py

Prints the generated login ids and temporary passwords once; they are not
stored in plaintext anywhere.
"""

import asyncio
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from dayflow_hrms.common.exceptions import ConflictError
from dayflow_hrms.deps import get_account_service, get_db

DEMO_COMPANY = "Odoo India"
DEMO_ADMIN_EMAIL = "admin@odoo-india.dev"
DEMO_ADMIN_PASSWORD = "ChangeMe!2024"
DEMO_EMPLOYEES = [
    ("Jane", "Doe"),
    ("Arjun", "Mehta"),
    ("Li", "Wu"),
]


async def seed_demo() -> None:
    db = get_db()
    await db.init()
    await db.create_all()

    svc = get_account_service()

    try:
        async with db.get_session() as session:
            signup = await svc.signup_admin(
                session, DEMO_COMPANY, DEMO_ADMIN_EMAIL, DEMO_ADMIN_PASSWORD
            )
            tenant_id = signup.tenant.id
            print(f"  [created] {signup.tenant.name} ({signup.tenant.code})")
            print(f"  [created] admin {DEMO_ADMIN_EMAIL}")
    except ConflictError as e:
        print(f"  [skip] {e.message}")
        await db.close()
        return

    for first_name, last_name in DEMO_EMPLOYEES:
        async with db.get_session() as session:
            created = await svc.create_employee(session, tenant_id, first_name, last_name)
            print(
                f"  [created] {first_name} {last_name}: "
                f"{created.account.login_id} / {created.temporary_password}"
            )

    await db.close()
    print(f"\nDone. {len(DEMO_EMPLOYEES)} employees seeded.")


if __name__ == "__main__":
    asyncio.run(seed_demo())
