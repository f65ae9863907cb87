"""User-facing messages for authentication provider error codes."""

import enum

from student_directory.core.errors import AuthError

CODE_PREFIX = "auth/"


class AuthFlow(str, enum.Enum):
    SIGN_IN = "sign_in"
    REGISTER = "register"
    SIGN_OUT = "sign_out"


MESSAGES: dict[str, str] = {
    "invalid-email": "Email tidak valid",
    "user-not-found": "Email tidak terdaftar",
    "wrong-password": "Password salah",
    "invalid-credential": "Email atau password salah",
    "user-disabled": "Akun dinonaktifkan",
    "too-many-requests": "Terlalu banyak percobaan, coba lagi nanti",
    "network-request-failed": "Koneksi internet bermasalah",
    "email-already-in-use": "Email sudah terdaftar",
    "weak-password": "Password terlalu lemah",
}

# Registration words some codes differently.
FLOW_MESSAGES: dict[AuthFlow, dict[str, str]] = {
    AuthFlow.REGISTER: {"invalid-email": "Format email tidak valid"},
}

FALLBACK_MESSAGES: dict[AuthFlow, str] = {
    AuthFlow.SIGN_IN: "Login gagal",
    AuthFlow.REGISTER: "Registrasi gagal",
    AuthFlow.SIGN_OUT: "Logout gagal",
}


def normalize_code(code: str | None) -> str | None:
    if not code:
        return None
    code = code.strip()
    if code.startswith(CODE_PREFIX):
        code = code[len(CODE_PREFIX) :]
    return code or None


def message_for(code: str | None, flow: AuthFlow) -> str:
    """Return the message for a provider code, or the flow's generic failure."""
    normalized = normalize_code(code)
    if normalized is None:
        return FALLBACK_MESSAGES[flow]
    overrides = FLOW_MESSAGES.get(flow, {})
    return overrides.get(normalized) or MESSAGES.get(normalized) or FALLBACK_MESSAGES[flow]


def auth_error_for(code: str | None, flow: AuthFlow) -> AuthError:
    return AuthError(code=normalize_code(code), message=message_for(code, flow))
