"""Process environment for the portal.

Import this module before anything that reads environment variables: it
loads the .env file once, for the API server and the maintenance scripts
alike. On a hosting platform the variables are set directly and the
.env file is simply absent.

Variables read here:
    ENVIRONMENT: 'development' (default) or 'production'
    PORTAL_DATA_DIR: Directory for the development SQLite file
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

VALID_ENVIRONMENTS = ('development', 'production')

_requested = os.environ.get('ENVIRONMENT', '').strip().lower()
if _requested not in VALID_ENVIRONMENTS:
    logging.warning(
        f"ENVIRONMENT '{_requested}' not recognized, expected one of "
        f"{', '.join(VALID_ENVIRONMENTS)}. Running as development."
    )
    _requested = 'development'

ENVIRONMENT_NAME = _requested
IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT_NAME == 'production'

# SQLite file location when no DATABASE_URL is used
DATA_DIR = Path(os.environ.get('PORTAL_DATA_DIR') or Path(__file__).resolve().parents[2] / 'data')

__all__ = ['ENVIRONMENT_NAME', 'IS_PRODUCTION_ENVIRONMENT', 'DATA_DIR']
