"""CLI script to seed the local `services` table with the default catalog.
Usage: python scripts/seed_services.py [--reset] [--admin USERNAME --password PASSWORD]
"""
import sys
import argparse
import pathlib
from typing import Optional
# Ensure `backend/` is on sys.path so `skilltrack` package imports work when running this script directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
from sqlmodel import Session
from skilltrack.database import engine, create_db_and_tables
from skilltrack import models, repositories, services

DEFAULT_SERVICES = [
    {"slug": "ai-machine-learning", "title": "AI & Machine Learning", "icon": "Brain", "sort_order": 1,
     "description": "Build intelligent systems with hands-on machine learning and deep learning courses."},
    {"slug": "software-development", "title": "Software Development", "icon": "Code", "sort_order": 2,
     "description": "Full-stack, backend and frontend engineering from fundamentals to production."},
    {"slug": "cloud-computing", "title": "Cloud Computing", "icon": "Cloud", "sort_order": 3,
     "description": "Design, deploy and operate workloads on AWS, Azure and Google Cloud."},
    {"slug": "mobile-development", "title": "Mobile Development", "icon": "Smartphone", "sort_order": 4,
     "description": "Ship native and cross-platform apps for iOS and Android."},
    {"slug": "data-engineering", "title": "Data Engineering", "icon": "Database", "sort_order": 5,
     "description": "Model, move and analyse data with modern pipelines and warehouses."},
    {"slug": "cybersecurity", "title": "Cybersecurity", "icon": "Shield", "sort_order": 6,
     "description": "Protect systems and data with practical security engineering skills."},
]


def main(reset: bool = False, admin: Optional[str] = None, password: Optional[str] = None):
    """Insert any default service that is not present yet.

    With `reset`, existing rows are deleted first. When `admin` and
    `password` are given an admin account is created as well.
    Results are printed to stdout for a quick CLI feedback loop.
    """
    create_db_and_tables()
    with Session(engine) as session:
        repo = repositories.ServiceRepository(session)
        if reset:
            for row in repo.list_all():
                repo.delete(row)
            print('Removed existing services')
        created = 0
        for item in DEFAULT_SERVICES:
            if repo.get_by_slug(item['slug']):
                print(f"skip {item['slug']} (exists)")
                continue
            repo.save(models.ServiceRow(**item))
            created += 1
            print(f"created {item['slug']}")
        print(f'Created {created} services')
        if admin and password:
            if repositories.UserRepository(session).get_by_username(admin):
                print(f'Admin {admin} already exists')
            else:
                services.AuthService(session).register(admin, password, is_admin=True)
                print(f'Created admin {admin}')


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Seed the local services table')
    parser.add_argument('--reset', action='store_true', help='delete existing services first')
    parser.add_argument('--admin', type=str, default=None, help='admin username to create')
    parser.add_argument('--password', type=str, default=None, help='password for --admin')
    args = parser.parse_args()
    main(reset=args.reset, admin=args.admin, password=args.password)
