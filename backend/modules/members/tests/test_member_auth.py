# backend/modules/members/tests/test_member_auth.py

"""
Tests for member login, session check and token handling.
"""

import pytest
from datetime import timedelta
from fastapi import status

from core.config import settings
from core.exceptions import AuthenticationError
from modules.members.auth import create_access_token, verify_token
from modules.members.models import Member, MemberRole
from modules.members.services import MemberService, verify_password


class TestMemberService:

    def test_authenticate_with_valid_credentials(self, seeded_db):
        member = MemberService(seeded_db).authenticate("brown@email.com", "password")

        assert member.id == 2
        assert member.role == MemberRole.USER

    @pytest.mark.parametrize(
        "email,password",
        [
            ("brown@email.com", "wrong"),
            ("nobody@email.com", "password"),
        ],
    )
    def test_authenticate_with_invalid_credentials(self, seeded_db, email, password):
        with pytest.raises(AuthenticationError) as exc_info:
            MemberService(seeded_db).authenticate(email, password)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED

    def test_add_member_hashes_password(self, seeded_db):
        member = MemberService(seeded_db).add_member("제이", "jay@email.com", "secret")

        assert member.password_hash != "secret"
        assert verify_password("secret", member.password_hash)
        assert not member.is_admin
        assert len(MemberService(seeded_db).list_members()) == 6


class TestAccessToken:

    def test_token_round_trip(self, seeded_db):
        member = seeded_db.get(Member, 1)

        assert verify_token(create_access_token(member)) == 1

    def test_expired_token_is_rejected(self, seeded_db):
        member = seeded_db.get(Member, 1)
        token = create_access_token(member, expires_delta=timedelta(minutes=-1))

        assert verify_token(token) is None

    def test_garbage_token_is_rejected(self):
        assert verify_token("not-a-jwt") is None


class TestAuthAPI:

    def test_login_sets_session_cookie(self, client):
        response = client.post(
            "/login", json={"email": "solar@email.com", "password": "password"}
        )

        assert response.status_code == status.HTTP_200_OK
        token = response.cookies.get(settings.auth_cookie_name)
        assert token
        assert verify_token(token) == 3

    def test_login_with_wrong_password(self, client):
        response = client.post(
            "/login", json={"email": "solar@email.com", "password": "nope"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"errorMessage": "이메일 또는 비밀번호가 올바르지 않습니다."}

    def test_login_check_returns_member_name(self, client):
        client.post("/login", json={"email": "brown@email.com", "password": "password"})

        response = client.get("/login/check")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"name": "브라운"}

    def test_login_check_without_cookie(self, client):
        response = client.get("/login/check")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"errorMessage": "로그인이 필요합니다."}

    def test_logout_clears_session(self, client):
        client.post("/login", json={"email": "brown@email.com", "password": "password"})

        response = client.post("/logout")

        assert response.status_code == status.HTTP_200_OK
        assert client.get("/login/check").status_code == status.HTTP_401_UNAUTHORIZED
