from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend


class LocationEmailBackend(BaseBackend):
    """
    Authenticate by email and password, optionally narrowed to one location.

    The same email may exist at several locations; the first account whose
    password matches is returned. Account status is not checked here so the
    login flow can tell a wrong password apart from an inactive account.
    """

    def authenticate(self, request, email=None, password=None, location_id=None, **kwargs):
        if email is None:
            email = kwargs.get(get_user_model().USERNAME_FIELD)
        if not email or password is None:
            return None

        UserModel = get_user_model()
        candidates = UserModel._default_manager.filter(email__iexact=email)
        if location_id:
            candidates = candidates.filter(location_id=location_id)

        candidates = list(candidates.order_by('created_at'))
        if not candidates:
            # Run the hasher once so unknown emails take as long as wrong passwords
            UserModel().set_password(password)
            return None

        for user in candidates:
            if user.check_password(password):
                return user
        return None

    def get_user(self, user_id):
        UserModel = get_user_model()
        try:
            return UserModel._default_manager.get(pk=user_id)
        except (UserModel.DoesNotExist, ValueError):
            return None
