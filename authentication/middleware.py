# =============== MIDDLEWARE FOR LOCATION CONTEXT ===============

class LocationMiddleware:
    """
    Middleware to set the current location context.

    Reads the X-Location-Id header, falling back to the location_id query
    parameter. The raw value is stored as request.location_id and validated
    by the views that need it.
    """
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        location_id = request.META.get('HTTP_X_LOCATION_ID')
        if not location_id:
            location_id = request.GET.get('location_id')

        request.location_id = location_id.strip() if location_id else None

        response = self.get_response(request)
        return response
