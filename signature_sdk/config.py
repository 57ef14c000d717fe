import logging
import os

from dotenv import load_dotenv

# Pick up a .env from the working directory if there is one
load_dotenv()


class Config:
    # Default test_mode for newly built signature requests
    TEST_MODE = os.getenv('SIGNATURE_TEST_MODE', 'False').lower() == 'true'

    # Logging
    LOG_LEVEL = os.getenv('SIGNATURE_LOG_LEVEL', 'WARNING').upper()

    # Encode form_fields_per_document without whitespace
    JSON_COMPACT = os.getenv('SIGNATURE_JSON_COMPACT', 'True').lower() == 'true'


def configure_logging(level: str = None) -> None:
    """Configure root logging for scripts that use the SDK."""
    logging.basicConfig(
        level=level or Config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
