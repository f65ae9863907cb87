"""Field validation rules gating every student write and every auth attempt.

Every rule is a pure function returning a `FieldCheck`. Reasons are the
messages shown to the user as-is.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from student_directory.core.errors import FieldIssue, FieldValidationError

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN = re.compile(r"[0-9+\-\s()]*")
ANGKATAN_PATTERN = re.compile(r"[0-9]{0,4}")

NIM_MAX_LENGTH = 20
TELEPON_MAX_LENGTH = 15
PASSWORD_MIN_LENGTH = 6


@dataclass(frozen=True, slots=True)
class FieldCheck:
    """Outcome of one rule applied to one field."""

    field: str
    passed: bool
    reason: str | None = None

    @classmethod
    def ok(cls, field: str) -> "FieldCheck":
        return cls(field=field, passed=True)

    @classmethod
    def fail(cls, field: str, reason: str) -> "FieldCheck":
        return cls(field=field, passed=False, reason=reason)


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def digits_only(text: str | None) -> str:
    """Strip everything but ASCII digits, as the cohort-year input does."""
    if not text:
        return ""
    return "".join(ch for ch in text if "0" <= ch <= "9")


def check_required(field: str, value: Any, reason: str) -> FieldCheck:
    if _is_blank(value):
        return FieldCheck.fail(field, reason)
    return FieldCheck.ok(field)


def check_nim(value: Any) -> FieldCheck:
    if _is_blank(value):
        return FieldCheck.fail("nim", "NIM harus diisi")
    if len(str(value)) > NIM_MAX_LENGTH:
        return FieldCheck.fail("nim", f"NIM maksimal {NIM_MAX_LENGTH} karakter")
    return FieldCheck.ok("nim")


def check_nama(value: Any) -> FieldCheck:
    return check_required("nama", value, "Nama harus diisi")


def check_jurusan(value: Any) -> FieldCheck:
    # Any non-blank program name is accepted, listed or not.
    return check_required("jurusan", value, "Jurusan harus dipilih")


def check_angkatan(value: Any) -> FieldCheck:
    if _is_blank(value):
        return FieldCheck.ok("angkatan")
    if not ANGKATAN_PATTERN.fullmatch(str(value)):
        return FieldCheck.fail("angkatan", "Angkatan harus berupa angka, maksimal 4 digit")
    return FieldCheck.ok("angkatan")


def check_email(value: Any, field: str = "email") -> FieldCheck:
    """Optional email: blank passes, anything else must look like local@domain.tld."""
    if _is_blank(value):
        return FieldCheck.ok(field)
    if not EMAIL_PATTERN.fullmatch(str(value)):
        return FieldCheck.fail(field, "Format email tidak valid")
    return FieldCheck.ok(field)


def check_telepon(value: Any) -> FieldCheck:
    if _is_blank(value):
        return FieldCheck.ok("telepon")
    text = str(value)
    if not PHONE_PATTERN.fullmatch(text):
        return FieldCheck.fail("telepon", "Format telepon tidak valid")
    if len(text) > TELEPON_MAX_LENGTH:
        return FieldCheck.fail(
            "telepon", f"Telepon maksimal {TELEPON_MAX_LENGTH} karakter"
        )
    return FieldCheck.ok("telepon")


def check_password(value: Any) -> FieldCheck:
    if _is_blank(value):
        return FieldCheck.fail("password", "Password harus diisi")
    if len(str(value)) < PASSWORD_MIN_LENGTH:
        return FieldCheck.fail(
            "password", f"Password minimal {PASSWORD_MIN_LENGTH} karakter"
        )
    return FieldCheck.ok("password")


def check_password_confirmation(password: Any, confirm_password: Any) -> FieldCheck:
    if _is_blank(confirm_password):
        return FieldCheck.fail("confirm_password", "Konfirmasi password harus diisi")
    if password != confirm_password:
        return FieldCheck.fail("confirm_password", "Password tidak cocok")
    return FieldCheck.ok("confirm_password")


STUDENT_RULES = {
    "nim": check_nim,
    "nama": check_nama,
    "jurusan": check_jurusan,
    "angkatan": check_angkatan,
    "email": check_email,
    "telepon": check_telepon,
}


def validate_student_input(fields: Mapping[str, Any]) -> list[FieldCheck]:
    """Check a complete student record, missing keys counting as blank."""
    return [rule(fields.get(name)) for name, rule in STUDENT_RULES.items()]


def validate_student_update(fields: Mapping[str, Any]) -> list[FieldCheck]:
    """Check only the fields present in a partial update."""
    return [rule(fields[name]) for name, rule in STUDENT_RULES.items() if name in fields]


def validate_sign_in(email: Any, password: Any) -> list[FieldCheck]:
    email_check = check_required("email", email, "Email harus diisi")
    if email_check.passed:
        email_check = check_email(email)
    return [email_check, check_password(password)]


def validate_registration(
    nama: Any, email: Any, password: Any, confirm_password: Any
) -> list[FieldCheck]:
    email_check = check_required("email", email, "Email harus diisi")
    if email_check.passed:
        email_check = check_email(email)
    return [
        check_nama(nama),
        email_check,
        check_password(password),
        check_password_confirmation(password, confirm_password),
    ]


def failed_checks(checks: Iterable[FieldCheck]) -> list[FieldIssue]:
    return [
        FieldIssue(field=check.field, reason=check.reason or "Tidak valid")
        for check in checks
        if not check.passed
    ]


def ensure_valid(checks: Iterable[FieldCheck]) -> None:
    """Raise FieldValidationError carrying every failed check."""
    issues = failed_checks(checks)
    if issues:
        raise FieldValidationError(issues)
