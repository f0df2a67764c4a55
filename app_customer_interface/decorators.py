import json
import logging
from functools import wraps

from django.http import JsonResponse

from .exceptions import OrderingError, ValidationError

logger = logging.getLogger(__name__)


def json_body(request):
    """Decoded JSON object from the request body ({} when empty)."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except ValueError:
        raise ValidationError("Invalid JSON body.")
    if not isinstance(data, dict):
        raise ValidationError("Expected a JSON object.")
    return data


def json_endpoint(view_func):
    """Convert store errors into the uniform {success: false, message} response."""
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except OrderingError as e:
            if e.status_code >= 500:
                logger.error("%s %s failed: %s", request.method, request.path, e.message)
            return JsonResponse({'success': False, 'message': e.message}, status=e.status_code)
    return _wrapped_view
