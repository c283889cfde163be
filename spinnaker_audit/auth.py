import base64
import binascii
import hmac

from .config import AuditConfig
from .errors import AuthError

BASIC_PREFIX = "Basic "


def _invalid_credentials() -> None:
    raise AuthError("Invalid credentials")


def _equals(candidate: str, expected: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))


def verify_webhook(authorization: str, config: AuditConfig) -> None:
    """Confere se a requisição veio do echo do Spinnaker.

    Espera um header no formato ``Basic base64(usuario:senha)``.
    """
    if not authorization or not authorization.startswith(BASIC_PREFIX):
        _invalid_credentials()

    encoded = authorization[len(BASIC_PREFIX):].strip()
    # exige padding: tokens sem "=" final são recusados
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        _invalid_credentials()

    if ":" not in decoded:
        _invalid_credentials()
    username, password = decoded.split(":", 1)

    # avalia as duas comparações sempre
    user_ok = _equals(username, config.username)
    password_ok = _equals(password, config.password)
    if not (user_ok and password_ok):
        _invalid_credentials()
