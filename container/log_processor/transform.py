"""
Text transformation applied to every processed log entry
"""

import logging
import re
import time
from typing import Callable

logger = logging.getLogger(__name__)

REDACTION_MARKER = "[REDACTED]"

# Phone-number-like sequences: 3 ASCII digits, hyphen, 4 ASCII digits
PHONE_PATTERN = re.compile(r'\d{3}-\d{4}', re.ASCII)


def redact(text: str) -> str:
    """
    Replace every phone-number-like sequence with the redaction marker.

    The marker contains no digits, so redacting already redacted text
    returns it unchanged.
    """
    return PHONE_PATTERN.sub(REDACTION_MARKER, text)


def simulate_processing_delay(
    text: str,
    delay_per_char: float,
    max_delay: float,
    sleep: Callable[[float], None] = time.sleep
) -> float:
    """
    Sleep in proportion to the text length to imitate variable processing cost

    Args:
        text: Log text being processed
        delay_per_char: Seconds per character, 0 disables the delay
        max_delay: Upper bound on the total delay in seconds
        sleep: Sleep function

    Returns:
        Seconds slept
    """
    delay = len(text) * delay_per_char
    if delay <= 0:
        return 0.0

    if delay > max_delay:
        logger.warning(f"Text too long, capping simulated processing delay at {max_delay}s")
        delay = max_delay

    logger.debug(f"Simulating processing for {delay:.2f}s")
    sleep(delay)
    return delay
