"""Logging configuration for the application."""

import logging
import os
import sys

_configured = False

def setup_logging():
    """Configure logging for the application."""
    global _configured
    if _configured:
        return
    
    # Create a formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    
    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    
    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO').upper())
    root_logger.addHandler(console_handler)
    
    # Set higher log levels for noisy components
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('openai').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    
    # Configure specific loggers
    loggers = [
        'housing_portal.store',
        'housing_portal.importers.openai_extractor',
        'housing_portal.importers.event_builder',
        'housing_portal.views.admin',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.INFO)
        # Don't add handler here since it's already handled by root logger
    
    _configured = True
