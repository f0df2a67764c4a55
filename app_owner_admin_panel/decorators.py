from functools import wraps

from django.http import JsonResponse

from .models import restaurant_for_user


def allowed_user(allowed_roles=()):
    """Only let through authenticated users in one of ``allowed_roles`` that belong to a restaurant.

    The restaurant is attached to the request as ``request.restaurant``.
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper_func(request, *args, **kwargs):
            user = request.user
            if not user.is_authenticated or not user.groups.filter(name__in=allowed_roles).exists():
                return JsonResponse({'success': False, 'message': 'Access denied.'}, status=403)

            restaurant = restaurant_for_user(user)
            if restaurant is None:
                return JsonResponse({'success': False, 'message': 'User profile not found.'}, status=403)

            request.restaurant = restaurant
            return view_func(request, *args, **kwargs)
        return wrapper_func
    return decorator
