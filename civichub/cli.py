"""CLI for CivicHub — create tables, add users, load demo data."""

from __future__ import annotations

import argparse
import asyncio
import getpass
import sys

DEMO_PROBLEMS = [
    {
        "title": "Pothole on 5th Ave",
        "description": "Deep pothole near the bus stop, cars swerve into the bike lane to avoid it.",
        "location": "5th Ave & Main St",
        "lat": 12.9716,
        "lng": 77.5946,
        "images": ["https://picsum.photos/seed/pothole/800/600"],
        "category": "Infrastructure",
        "priority": "High",
        "tags": ["roads", "safety"],
    },
    {
        "title": "Overflowing bins in Lake Park",
        "description": "Garbage bins at the north entrance overflow every weekend and attract stray dogs.",
        "location": "Lake Park north gate",
        "lat": 12.9352,
        "lng": 77.6245,
        "images": ["https://picsum.photos/seed/bins/800/600"],
        "category": "Environment",
        "priority": "Medium",
        "tags": ["waste", "parks"],
    },
]

DEMO_SOLUTION = (
    "Patch the pothole with cold asphalt this week and schedule a proper resurfacing "
    "with the ward office."
)


async def cmd_init_db(args):
    """Create all tables."""
    from civichub.db.engine import init_db

    await init_db()
    print("Tables created")


async def cmd_create_user(args):
    """Create a user account."""
    from civichub.db.engine import init_db, async_session_factory
    from civichub.errors import ValidationError
    from civichub.services.auth import register_user

    await init_db()

    password = args.password
    if not password:
        password = getpass.getpass("Password: ")
        confirm = getpass.getpass("Confirm password: ")
        if password != confirm:
            print("Passwords do not match")
            sys.exit(1)

    async with async_session_factory() as db:
        try:
            user = await register_user(db, args.name, args.email, password)
        except ValidationError as e:
            for err in e.errors:
                print(f"{err['field']}: {err['message']}")
            sys.exit(1)

    print(f"User created: {user.email} (id={user.id})")


async def cmd_seed(args):
    """Seed demo problems and one proposed solution."""
    from sqlalchemy import select

    from civichub.db import crud
    from civichub.db.engine import init_db, async_session_factory
    from civichub.models import User, Problem
    from civichub.services.auth import hash_password

    await init_db()

    async with async_session_factory() as db:
        existing = await db.execute(select(Problem).where(Problem.title == DEMO_PROBLEMS[0]["title"]))
        if existing.scalars().first():
            print("Demo problems already exist, skipping seed.")
            return

        result = await db.execute(select(User).where(User.email == "demo@civichub.local"))
        demo = result.scalars().first()
        if not demo:
            demo = User(name="Demo Resident", email="demo@civichub.local", password_hash=hash_password("demo1234"))
            db.add(demo)
            await db.commit()
        demo_id = demo.id

        created = []
        for data in DEMO_PROBLEMS:
            problem = await crud.create_problem(db, author_id=demo_id, **data)
            created.append(problem.id)
            print(f"Created problem: {problem.title} (id: {problem.id})")

        solution = await crud.create_solution(
            db, author_id=demo_id, problem_id=created[0], description=DEMO_SOLUTION,
            estimated_cost=250, estimated_time="Days", difficulty="Easy",
        )
        print(f"Created solution: {solution.id}")

    print("\nSeed complete. Log in as demo@civichub.local / demo1234")


def main():
    parser = argparse.ArgumentParser(description="CivicHub CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create database tables")

    cu = subparsers.add_parser("create-user", help="Create a user account")
    cu.add_argument("--name", required=True, help="Display name")
    cu.add_argument("--email", required=True, help="Email address")
    cu.add_argument("--password", default="", help="Password (prompted if not given)")

    subparsers.add_parser("seed", help="Load demo problems and a solution")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "create-user":
        asyncio.run(cmd_create_user(args))
    elif args.command == "seed":
        asyncio.run(cmd_seed(args))


if __name__ == "__main__":
    main()
