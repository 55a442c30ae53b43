# apps/core/utils.py

import json
from typing import Dict

from django.http import JsonResponse


def parse_json_body(request) -> Dict:
    """
    Reads a JSON object from the request body

    Falls back to form-encoded POST data so the endpoints also accept
    plain HTML forms. Anything that is not a JSON object becomes ``{}``.
    """
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except (ValueError, UnicodeDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    return request.POST.dict()


def error_response(message: str, status: int) -> JsonResponse:
    """JSON error body understood by the client: ``{"error": message}``"""
    return JsonResponse({'error': message}, status=status)


def first_form_error(form) -> str:
    """
    Returns the first validation message of a bound form

    Field errors are prefixed with the field label so the client can show
    them verbatim.
    """
    for field, errors in form.errors.items():
        if not errors:
            continue
        if field == '__all__':
            return errors[0]
        label = form.fields[field].label if field in form.fields else field
        return f"{label}: {errors[0]}"
    return "Invalid data"
