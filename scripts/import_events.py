#!/usr/bin/env python3

"""
Import events into the portal from an announcement text file.

The text is sent to the configured generative model, which extracts one
or more events; they are appended to the stored event list in one batch.
A running server keeps the imported events: it re-reads the stored list
before its own next write.

Usage:
    # Import every event found in an announcement
    python scripts/import_events.py announcement.txt

    # Show what would be imported without storing anything
    python scripts/import_events.py announcement.txt --dry-run
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from housing_portal.config.environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401
from housing_portal.config.external_services.openai import MissingCredentialError
from housing_portal.db import InMemoryStorage, SqlStorage, get_database
from housing_portal.importers import EventImportError, OpenAIEventExtractor, import_events_from_text
from housing_portal.store import EventStore
from housing_portal.utils.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

def main() -> int:
    parser = argparse.ArgumentParser(description="Import events from free text")
    parser.add_argument('path', type=Path, help="Text file with the announcement")
    parser.add_argument('--dry-run', action='store_true', help="Extract and print without storing")
    args = parser.parse_args()
    
    text = args.path.read_text(encoding='utf-8')
    if args.dry_run:
        storage = InMemoryStorage()
    else:
        database = get_database()
        database.ensure_tables_exist()
        storage = SqlStorage(database)
    store = EventStore.load(storage)
    
    try:
        events = asyncio.run(import_events_from_text(text, OpenAIEventExtractor(), store))
    except MissingCredentialError as e:
        logger.error(str(e))
        return 2
    except (EventImportError, ValueError) as e:
        logger.error(f"Import failed: {e}")
        return 1
    
    for event in events:
        logger.info(f"{event.date} {event.time} {event.title} @ {event.location} ({event.max_participants} spots)")
    logger.info(f"{'Extracted' if args.dry_run else 'Imported'} {len(events)} events")
    return 0

if __name__ == "__main__":
    sys.exit(main())
