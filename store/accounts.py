import logging

from django.contrib.auth import authenticate, get_user_model, login, logout

from .errors import NotAuthenticated, ValidationFailed

logger = logging.getLogger(__name__)

User = get_user_model()


def register(command):
    if User.objects.filter(username=command.username).exists():
        raise ValidationFailed("Username already exists")
    if User.objects.filter(email__iexact=command.email).exists():
        raise ValidationFailed("Email already exists")

    user = User.objects.create_user(
        username=command.username,
        email=command.email,
        password=command.password,
        first_name=command.first_name or "",
        last_name=command.last_name or "",
    )
    logger.info("Registered user %s (%s)", user.pk, user.username)
    return user


def log_in(request, command):
    user = authenticate(request, username=command.username, password=command.password)
    if user is None:
        raise NotAuthenticated("Incorrect username or password")
    login(request, user)
    return user


def log_out(request):
    logout(request)
