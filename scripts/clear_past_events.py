#!/usr/bin/env python3

"""Delete every stored event dated before today.

Registrations of the deleted events are kept. Safe to run next to the
server: the store re-reads the stored event list before writing, and
the server picks up the deletion on its next change or restart.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from housing_portal.db import SqlStorage, get_database
from housing_portal.store import EventStore
from housing_portal.views.admin import AdminDashboard

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def clear_past_events(today: date = None, dry_run: bool = False) -> int:
    """Clear past events from the stored event list"""
    database = get_database()
    database.ensure_tables_exist()
    
    dashboard = AdminDashboard(EventStore.load(SqlStorage(database)))
    if dry_run:
        past = dashboard.past_events(today)
        for event in past:
            logger.info(f"Would delete {event.id}: {event.date} {event.title}")
        return len(past)
    
    count = dashboard.bulk_delete_past(today)
    logger.info(f"Cleared {count} past events")
    return count

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Delete events dated before a day")
    parser.add_argument('--today', type=date.fromisoformat, help="Reference day (YYYY-MM-DD), defaults to today")
    parser.add_argument('--dry-run', action='store_true', help="List the events without deleting them")
    args = parser.parse_args()
    clear_past_events(args.today, args.dry_run)
