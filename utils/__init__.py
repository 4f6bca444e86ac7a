# Utility modules for Mise
from .auth import login_required, check_household_password, hash_password
from .url_validator import is_safe_url, safe_fetch, SSRFError
from .image_handler import decode_base64_image, validate_image_bytes, ImageValidationError
from .sanitizer import clean_text, clean_name, clean_optional, sanitize_url, to_int
