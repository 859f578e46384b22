"""Main application entry point."""

import os

from housing_portal.config.environment import IS_PRODUCTION_ENVIRONMENT
from housing_portal.api.app import app

if __name__ == "__main__":
    port = int(os.environ.get('PORT', 8000))
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - import string so hot-reload can re-import the app
        import uvicorn
        uvicorn.run(
            "housing_portal.api.app:app",
            host="0.0.0.0",
            port=port,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - a single worker, since the store lives in process memory
        import uvicorn
        uvicorn.run(
            app,
            host="0.0.0.0",
            port=port,
            reload=False,
            workers=1,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
