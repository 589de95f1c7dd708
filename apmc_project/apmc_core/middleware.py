from django.utils.deprecation import MiddlewareMixin


class CurrentTenantMiddleware(MiddlewareMixin):
    # Run on every request and
    # attach a .tenant attribute to the request, based on the logged-in user
    def process_request(self, request):
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:  # Check authentication
            # Every staff login belongs to exactly one trader
            request.tenant = user.tenant
            # Super admins live outside any tenant, so this can still be None
        else:
            # Unauthenticated users
            request.tenant = None
