"""Tests for provider error code translation."""

import pytest

from student_directory.features.auth.messages import (
    AuthFlow,
    auth_error_for,
    message_for,
    normalize_code,
)


class TestMessageFor:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("auth/invalid-email", "Email tidak valid"),
            ("auth/user-not-found", "Email tidak terdaftar"),
            ("auth/wrong-password", "Password salah"),
            ("auth/network-request-failed", "Koneksi internet bermasalah"),
            ("wrong-password", "Password salah"),
        ],
    )
    def test_sign_in_codes(self, code: str, expected: str):
        assert message_for(code, AuthFlow.SIGN_IN) == expected

    @pytest.mark.parametrize(
        "code,expected",
        [
            ("auth/email-already-in-use", "Email sudah terdaftar"),
            ("auth/invalid-email", "Format email tidak valid"),
            ("auth/weak-password", "Password terlalu lemah"),
        ],
    )
    def test_register_codes(self, code: str, expected: str):
        assert message_for(code, AuthFlow.REGISTER) == expected

    @pytest.mark.parametrize(
        "flow,expected",
        [
            (AuthFlow.SIGN_IN, "Login gagal"),
            (AuthFlow.REGISTER, "Registrasi gagal"),
            (AuthFlow.SIGN_OUT, "Logout gagal"),
        ],
    )
    def test_unknown_or_missing_code_falls_back(self, flow: AuthFlow, expected: str):
        assert message_for("auth/quota-exceeded", flow) == expected
        assert message_for(None, flow) == expected
        assert message_for("", flow) == expected


class TestAuthErrorFor:
    def test_error_keeps_code_out_of_the_message(self):
        error = auth_error_for("auth/wrong-password", AuthFlow.SIGN_IN)

        assert error.code == "wrong-password"
        assert error.message == "Password salah"
        assert "auth/" not in str(error)

    def test_normalize_code(self):
        assert normalize_code(" auth/user-disabled ") == "user-disabled"
        assert normalize_code("auth/") is None
