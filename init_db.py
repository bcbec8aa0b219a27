#!/usr/bin/env python
"""Database initialization script for the chat backend.

This script creates all database tables based on the SQLAlchemy models.
Run this once before starting the application for the first time, or use
``flask db upgrade`` to apply the Alembic migrations instead.

Usage:
    python init_db.py
"""

import os
import sys
from duochat import create_app, db

TABLES = [
    ("messages", "Text, image and voice messages between A and B"),
    ("reactions", "Emoji reactions on messages"),
    ("translations", "Cached message translations per language pair"),
    ("translation_preferences", "Per-viewer original/translated display choice"),
    ("workouts", "Public fitness tracker entries"),
]


def init_database():
    """Initialize the database by creating all tables."""
    config_name = os.getenv('FLASK_ENV', 'development')
    app = create_app(config_name)

    print(f"\n{'='*60}")
    print(f"Database Initialization for {config_name.upper()} Environment")
    print(f"{'='*60}\n")

    with app.app_context():
        try:
            print("Creating database tables...")
            db.create_all()

            print("Created tables:")
            for table_name, description in TABLES:
                print(f"  - {table_name:<25} {description}")

            print("\nDatabase initialization complete!")
            print("Next step: start the server with python wsgi.py\n")
            return True

        except Exception as e:
            print(f"Error creating database: {type(e).__name__}: {e}\n")
            return False


if __name__ == '__main__':
    success = init_database()
    sys.exit(0 if success else 1)
