from typing import Any, Optional, Tuple
import re

URL_PATTERN = re.compile(r'^https?://[^\s/$.?#][^\s]*$', re.IGNORECASE)

class Validators:
    @staticmethod
    def require_string(value: Any, message: str) -> str:
        """
        Return the trimmed string or raise ValueError with `message`
        """
        if not isinstance(value, str) or value.strip() == "":
            raise ValueError(message)
        return value.strip()

    @staticmethod
    def optional_string(value: Any, message: str) -> Optional[str]:
        """
        None and empty strings collapse to None; anything that is not a string is rejected
        """
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(message)
        return value if value.strip() != "" else None

    @staticmethod
    def validate_url(url: Optional[str]) -> Tuple[bool, str]:
        """
        Check an http(s) URL
        """
        if not url:
            return True, ""  # URL is optional

        if not URL_PATTERN.match(url):
            return False, "API URL must be a valid http(s) URL."

        return True, ""
