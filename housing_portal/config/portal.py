"""Portal settings for admin access and the registration flow."""

import os
import secrets
from dataclasses import dataclass

# Literal compared against the submitted admin password
DEFAULT_ADMIN_PASSWORD = 'admin'

# Stand-in for the confirmation e-mail round trip
DEFAULT_REGISTRATION_DELAY_SECONDS = 1.5

@dataclass
class AdminConfig:
    """Admin configuration settings."""
    
    password: str = ""
    
    def __post_init__(self):
        """Load password from environment if not provided."""
        if not self.password:
            self.password = os.environ.get('ADMIN_PASSWORD', DEFAULT_ADMIN_PASSWORD)
    
    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.password:
            raise ValueError("ADMIN_PASSWORD must not be empty")
        return True
    
    def verify_password(self, password: str) -> bool:
        """Compare against the configured password in constant time."""
        if not password:
            return False
        return secrets.compare_digest(password.encode('utf-8'), self.password.encode('utf-8'))

@dataclass
class RegistrationConfig:
    """Registration flow settings."""
    
    delay_seconds: float = -1.0
    
    def __post_init__(self):
        """Load the submission delay from environment if not provided."""
        if self.delay_seconds < 0:
            self.delay_seconds = float(
                os.environ.get('REGISTRATION_DELAY_SECONDS', DEFAULT_REGISTRATION_DELAY_SECONDS)
            )
    
    def validate(self) -> bool:
        """Validate the configuration."""
        if self.delay_seconds < 0:
            raise ValueError("REGISTRATION_DELAY_SECONDS must be zero or positive")
        return True
