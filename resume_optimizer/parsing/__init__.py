from .models import ParsedDoc
from .parse import UnsupportedUploadError, decode_upload

__all__ = ["ParsedDoc", "UnsupportedUploadError", "decode_upload"]
