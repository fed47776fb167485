from .errors import error_response, missing_fields, not_found
