# scripts/setup/init_db.py
"""
Initialize database — creates all tables, optionally seeds sample rows.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from datetime import date, datetime, timedelta
from app.database import SessionLocal, create_tables, engine
from app.config import settings
from app.models import User, Vehicle, VehicleAssignment, VehicleBlockedPeriod
from sqlalchemy import inspect, text


def seed():
    """Two drivers, three vehicles, one approved assignment and one maintenance block."""
    db = SessionLocal()
    try:
        if db.query(Vehicle).count():
            print("ℹ️  Vehicles already present — skipping seed")
            return

        now = datetime.utcnow()
        drivers = [
            User(full_name="Amina Yusuf", email="amina@example.com", phone="555-0101", role="driver",
                 status="active", created_at=now),
            User(full_name="Tom Okafor", email="tom@example.com", phone="555-0102", role="driver",
                 status="active", created_at=now),
        ]
        vehicles = [
            Vehicle(registration_number="KDA 101A", make="Toyota", model="Hilux", year=2021,
                    status="assigned", created_at=now),
            Vehicle(registration_number="KDB 202B", make="Nissan", model="Navara", year=2020,
                    status="available", created_at=now),
            Vehicle(registration_number="KDC 303C", make="Isuzu", model="D-Max", year=2019,
                    status="maintenance", created_at=now),
        ]
        db.add_all(drivers + vehicles)
        db.flush()

        db.add(VehicleAssignment(
            vehicle_id=vehicles[0].id, driver_id=drivers[0].id,
            start_time=now, end_time=None, is_temporary=False,
            status="approved", notes="Permanent field assignment", created_at=now,
        ))
        db.add(VehicleBlockedPeriod(
            vehicle_id=vehicles[2].id, start_date=date.today(),
            end_date=date.today() + timedelta(days=4), reason="Scheduled service", created_at=now,
        ))
        db.commit()
        print(f"✅ Seeded {len(drivers)} drivers, {len(vehicles)} vehicles, 1 assignment, 1 blocked period")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create fleet tables")
    parser.add_argument("--seed", action="store_true", help="Insert sample rows into an empty database")
    args = parser.parse_args()

    print("🗄️  Fleet DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    print("✅ All tables created")

    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed:
        print("\n🌱 Seeding sample data...")
        seed()

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
