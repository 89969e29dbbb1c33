"""Tests for password rules and the strength meter."""

from coachhub.services.passwords import password_rule_errors, password_strength


class TestPasswordRules:
    def test_valid_password_has_no_errors(self):
        assert password_rule_errors("Str0ngPass") == []

    def test_reports_every_broken_rule(self):
        errors = password_rule_errors("abc")
        assert "Password must be at least 8 characters long" in errors
        assert "Password must contain at least one uppercase letter" in errors
        assert "Password must contain at least one number" in errors
        assert len(errors) == 3


class TestPasswordStrength:
    def test_empty_is_weak(self):
        strength = password_strength("")
        assert strength.score == 0
        assert strength.feedback == "Weak"
        assert strength.color == "#EF4444"

    def test_fair(self):
        # length >= 8, lower, upper
        strength = password_strength("abcdEFGH")
        assert strength.score == 3
        assert strength.feedback == "Fair"
        assert strength.color == "#F59E0B"

    def test_good(self):
        strength = password_strength("abcdEFGH1234")
        assert strength.score == 5
        assert strength.feedback == "Good"
        assert strength.color == "#3B82F6"

    def test_strong(self):
        strength = password_strength("abcdEFGH123!")
        assert strength.score == 6
        assert strength.feedback == "Strong"
        assert strength.color == "#10B981"

    def test_only_listed_specials_count(self):
        assert password_strength("abcdEFGH123#").score == 5
