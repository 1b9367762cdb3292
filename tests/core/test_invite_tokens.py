"""
Test suite for invite token generation and format checks.

System role: Verification of self-enrollment token rules
"""

import pytest

from course_backend.core.invite_tokens import (
    MIN_TOKEN_LENGTH,
    TOKEN_ALPHABET,
    generate_invite_token,
    is_well_formed_token,
)


class TestGenerateInviteToken:
    """Test suite for generate_invite_token()."""

    def test_default_token_should_have_24_characters(self) -> None:
        assert len(generate_invite_token()) == 24

    def test_token_should_mix_letters_and_digits(self) -> None:
        for _ in range(50):
            token = generate_invite_token(MIN_TOKEN_LENGTH)
            assert any(c.isalpha() for c in token)
            assert any(c.isdigit() for c in token)
            assert set(token) <= set(TOKEN_ALPHABET)

    def test_tokens_should_differ(self) -> None:
        assert len({generate_invite_token() for _ in range(20)}) == 20

    def test_short_length_should_raise(self) -> None:
        with pytest.raises(ValueError):
            generate_invite_token(MIN_TOKEN_LENGTH - 1)


class TestIsWellFormedToken:
    """Test suite for is_well_formed_token()."""

    def test_generated_token_should_be_well_formed(self) -> None:
        assert is_well_formed_token(generate_invite_token())

    @pytest.mark.parametrize("token", [None, "", "abc123", "abcdefghij-1", "abc def 1234", "ä" * 12])
    def test_malformed_tokens_should_be_rejected(self, token) -> None:
        assert not is_well_formed_token(token)
