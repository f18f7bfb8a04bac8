import os

from dotenv import load_dotenv

from jsonpath_filters.constants.settings_constants import SettingsConstants

load_dotenv()


def is_strict_terms() -> bool:
    """
    Whether a whole document term with a non MATCHES kind is rejected.
    Read on every call so the environment can change at runtime.
    """
    raw = os.getenv(SettingsConstants.STRICT_TERMS, SettingsConstants.STRICT_TERMS_DEFAULT)
    return raw.strip().lower() not in SettingsConstants.FALSE_VALUES
