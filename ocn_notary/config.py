"""
Configuration module for OCN Notary.

Centralizes configuration with environment variable support and
validation. Values are read once at import time.
"""

import os
import logging
from typing import Dict, Any

# ============================================================
# Environment Configuration
# ============================================================

ENV = os.getenv("OCN_NOTARY_ENV", "dev")  # dev|stage|prod

# Header transport codec
BROTLI_QUALITY = int(os.getenv("OCN_NOTARY_BROTLI_QUALITY", "4"))
BROTLI_LGWIN = int(os.getenv("OCN_NOTARY_BROTLI_LGWIN", "22"))

# Logging
LOG_LEVEL = os.getenv("OCN_NOTARY_LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("OCN_NOTARY_LOG_JSON", "true").lower() in ("1", "true", "yes")

# Name of the HTTP header carrying the serialized signature
SIGNATURE_HEADER = "OCN-Signature"


# ============================================================
# Accessors
# ============================================================

def compression_settings() -> Dict[str, Any]:
    """Keyword arguments for brotli.compress."""
    return {"quality": BROTLI_QUALITY, "lgwin": BROTLI_LGWIN}


# ============================================================
# Validation
# ============================================================

def validate_config() -> Dict[str, bool]:
    """
    Validate the current configuration.
    Returns dict of check name -> passed.
    """
    return {
        "env": ENV in ("dev", "stage", "prod"),
        "brotli_quality": 0 <= BROTLI_QUALITY <= 11,
        "brotli_lgwin": 10 <= BROTLI_LGWIN <= 24,
        "log_level": isinstance(logging.getLevelName(LOG_LEVEL.upper()), int),
    }


# ============================================================
# Feature Flags
# ============================================================

def is_debug() -> bool:
    """Check if debug mode is enabled."""
    return os.getenv("OCN_NOTARY_DEBUG", "").lower() in ("1", "true", "yes")
