"""
Test password policy dan helper token
"""


class TestPasswordStrength:
    """Test validate_password_strength"""

    def test_strong_password_valid(self):
        from persuratan.utils.validators import validate_password_strength

        result = validate_password_strength("Arsip#2025Aman")

        assert result["valid"] is True
        assert result["errors"] == []
        assert result["strength_score"] >= 80

    def test_short_password(self):
        from persuratan.utils.validators import validate_password_strength

        result = validate_password_strength("Ab1!")

        assert result["valid"] is False
        assert "Password minimal 8 karakter" in result["errors"]

    def test_missing_character_classes(self):
        from persuratan.utils.validators import validate_password_strength

        result = validate_password_strength("abcdefgh")

        assert result["valid"] is False
        assert len(result["errors"]) == 3  # huruf besar, angka, spesial

    def test_repeated_characters_rejected(self):
        from persuratan.utils.validators import validate_password_strength

        result = validate_password_strength("Aaaa#2025x")

        assert result["valid"] is False
        assert any("berulang" in error for error in result["errors"])

    def test_common_password_rejected(self):
        from persuratan.utils.validators import validate_password_strength

        result = validate_password_strength("Password123")

        assert any("terlalu umum" in error for error in result["errors"])

    def test_strength_label(self):
        from persuratan.utils.validators import get_strength_label

        assert get_strength_label(100) == "Sangat Kuat"
        assert get_strength_label(45) == "Lemah"
        assert get_strength_label(0) == "Sangat Lemah"


class TestTokenHelpers:
    """Test helper CSRF token dan masking"""

    def test_csrf_token_length(self):
        from persuratan.utils.password import generate_csrf_token

        assert len(generate_csrf_token()) == 64

    def test_tokens_match(self):
        from persuratan.utils.password import tokens_match

        assert tokens_match("abc", "abc") is True
        assert tokens_match("abc", "abd") is False
        assert tokens_match("", "") is False
        assert tokens_match(None, "abc") is False

    def test_mask_email(self):
        from persuratan.utils.password import mask_email

        assert mask_email("admin@dprd.go.id") == "a***n@dprd.go.id"
        assert mask_email("invalid") == "***@***.***"
