"""
Current Glucose Reading Script

- Reads DEXCOM_USERNAME / DEXCOM_PASSWORD (and optionally DEXCOM_REGION,
  DEXCOM_APPLICATION_ID) from the environment or a .env file
- Logs in to Dexcom Share and prints the latest reading
- Credentials are never printed or logged

Usage:
    python scripts/current_reading.py
"""
import sys
from typing import Optional

from dexcom_share.client import Dexcom
from dexcom_share.errors import DexcomShareError
from dexcom_share.utils.config import Settings, get_settings
from dexcom_share.utils.logging_utils import setup_json_logging


def format_reading(reading) -> str:
    text = f"{reading.value} mg/dL {reading.trend.glyph}".rstrip()
    if reading.trend.description:
        text += f" ({reading.trend.description})"
    return text


def main(settings: Optional[Settings] = None) -> int:
    settings = settings or get_settings()
    setup_json_logging(level=settings.log_level, output='stderr')

    if not settings.has_credentials():
        print("Error: Missing Dexcom Share credentials!")
        print("Set DEXCOM_USERNAME and DEXCOM_PASSWORD in the environment or .env file.")
        return 1

    try:
        with Dexcom.from_settings(settings) as dexcom:
            session_id = dexcom.load_session_id(
                settings.username,
                settings.password.get_secret_value(),
                settings.application_id,
            )
            reading = dexcom.get_current_glucose_reading(session_id)
    except DexcomShareError as e:
        print(f"Error: {e}")
        return 1

    print(format_reading(reading))
    return 0


if __name__ == "__main__":
    sys.exit(main())
