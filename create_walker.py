#!/usr/bin/env python3
"""Create a local walker account and print an access token for it"""

import argparse
import sys
import os
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from walkguard import crud
from walkguard.core.security import create_access_token
from walkguard.db.database import SessionLocal
from walkguard.models.user import AuthProvider
from walkguard.schemas.user import UserCreate


def create_walker(email=None, phone=None, name=None):
    """Create the walker unless an account with that email or phone exists"""

    db = SessionLocal()

    try:
        user = None
        if email:
            user = crud.user.get_by_email(db, email=email)
        if user is None and phone:
            user = crud.user.get_by_phone(db, phone=phone)

        if user is None:
            user = crud.user.create(
                db,
                obj_in=UserCreate(
                    email=email,
                    phone=phone,
                    name=name,
                    provider=AuthProvider.EMAIL if email else AuthProvider.PHONE,
                ),
            )
            print(f'Walker created: id={user.id} {user.email or user.phone}')
        else:
            print(f'Walker already exists: id={user.id}')

        print(f'Bearer token: {create_access_token(user.id)}')

    except Exception as e:
        print(f'Error creating walker: {e}')
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--email")
    parser.add_argument("--phone")
    parser.add_argument("--name")
    args = parser.parse_args()

    if not args.email and not args.phone:
        parser.error("one of --email or --phone is required")

    create_walker(email=args.email, phone=args.phone, name=args.name)
