"""
Tests unitaires du service d'authentification (OTP, inscription, connexion, tokens).
"""

from unittest.mock import MagicMock, patch

import pytest

from classroom_api.exceptions import InternalServerError, UnprocessableEntityError
from classroom_api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SendOtpRequest,
)
from classroom_api.security import create_refresh_token, hash_password
from classroom_api.services import auth_service

MODULE = "classroom_api.services.auth_service"


# --- Helpers ---

def make_register_request(**kwargs) -> RegisterRequest:
    data = {
        "email": "eleve@ecole.be",
        "full_name": "Jean Dupont",
        "phone_number": "0470000001",
        "otp_code": "123456",
        "password": "secret123",
        "confirm_password": "secret123",
    }
    data.update(kwargs)
    return RegisterRequest(**data)


def make_user_mock(user_id=1, role="student", is_active=True, password="secret123"):
    user = MagicMock()
    user.id = user_id
    user.email = "eleve@ecole.be"
    user.role = role
    user.is_active = is_active
    user.password_hash = hash_password(password)
    return user


# --- OTP ---

def test_generate_otp_code_six_chiffres():
    for _ in range(50):
        code = auth_service.generate_otp_code()
        assert len(code) == 6
        assert code.isdigit()


def test_send_otp_persiste_puis_envoie():
    db = MagicMock()
    with patch(f"{MODULE}.auth_repo") as auth_repo, patch(f"{MODULE}.email_service") as email_service:
        auth_service.send_otp(db, "eleve@ecole.be", "email_verification")

    kwargs = auth_repo.create_otp_code.call_args.kwargs
    assert kwargs["email"] == "eleve@ecole.be"
    assert kwargs["code_type"] == "email_verification"
    sent = email_service.send_email.call_args.kwargs
    assert sent["email"] == "eleve@ecole.be"
    assert kwargs["code"] in sent["content"]


def test_send_otp_register_echec_email_erreur_interne():
    """Échec SMTP → InternalServerError, le code reste en base."""
    db = MagicMock()
    with patch(f"{MODULE}.auth_repo") as auth_repo, patch(f"{MODULE}.email_service") as email_service:
        email_service.send_email.side_effect = OSError("SMTP indisponible")
        with pytest.raises(InternalServerError):
            auth_service.send_otp_register(db, SendOtpRequest(email="eleve@ecole.be"))

    auth_repo.create_otp_code.assert_called_once()
    auth_repo.delete_otp_codes.assert_not_called()


# --- Inscription ---

def test_register_email_existant_sans_effet_de_bord():
    """Email déjà utilisé → 422 avant tout hachage ou accès à la table OTP."""
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, \
            patch(f"{MODULE}.auth_repo") as auth_repo, \
            patch(f"{MODULE}.hash_password") as hash_mock:
        user_repo.find_by_email.return_value = make_user_mock()

        with pytest.raises(UnprocessableEntityError, match="email"):
            auth_service.register(db, make_register_request())

    hash_mock.assert_not_called()
    assert auth_repo.mock_calls == []
    user_repo.create.assert_not_called()


def test_register_telephone_existant():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.auth_repo") as auth_repo:
        user_repo.find_by_email.return_value = None
        user_repo.find_by_phone_number.return_value = make_user_mock()

        with pytest.raises(UnprocessableEntityError, match="téléphone"):
            auth_service.register(db, make_register_request())

    auth_repo.find_valid_otp_code.assert_not_called()


def test_register_otp_invalide():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.auth_repo") as auth_repo:
        user_repo.find_by_email.return_value = None
        user_repo.find_by_phone_number.return_value = None
        auth_repo.find_valid_otp_code.return_value = None

        with pytest.raises(UnprocessableEntityError, match="OTP"):
            auth_service.register(db, make_register_request())

    auth_repo.delete_otp_codes.assert_not_called()
    user_repo.create.assert_not_called()


def test_register_succes():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, \
            patch(f"{MODULE}.auth_repo") as auth_repo, \
            patch(f"{MODULE}.hash_password", return_value="hashed") as hash_mock:
        user_repo.find_by_email.return_value = None
        user_repo.find_by_phone_number.return_value = None
        auth_repo.find_valid_otp_code.return_value = MagicMock()

        auth_service.register(db, make_register_request())

    auth_repo.find_valid_otp_code.assert_called_once_with(db, "eleve@ecole.be", "123456", "email_verification")
    auth_repo.delete_otp_codes.assert_called_once_with(db, "eleve@ecole.be")
    hash_mock.assert_called_once_with("secret123")
    kwargs = user_repo.create.call_args.kwargs
    assert kwargs["password_hash"] == "hashed"
    assert kwargs["role"] == "student"


def test_register_schema_confirmation_differente():
    with pytest.raises(ValueError):
        make_register_request(confirm_password="autre123")


def test_register_schema_mot_de_passe_trop_court():
    with pytest.raises(ValueError):
        make_register_request(password="abc", confirm_password="abc")


# --- Mot de passe oublié / réinitialisation ---

def test_forgot_password_utilisateur_inconnu():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.send_otp") as send_otp:
        user_repo.find_by_email.return_value = None
        with pytest.raises(UnprocessableEntityError):
            auth_service.forgot_password(db, ForgotPasswordRequest(email="inconnu@ecole.be"))
    send_otp.assert_not_called()


def test_forgot_password_envoie_code_reset():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.send_otp") as send_otp:
        user_repo.find_by_email.return_value = make_user_mock()
        result = auth_service.forgot_password(db, ForgotPasswordRequest(email="eleve@ecole.be"))
    send_otp.assert_called_once_with(db, "eleve@ecole.be", "password_reset")
    assert "message" in result


def test_forgot_password_echec_envoi():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.send_otp") as send_otp:
        user_repo.find_by_email.return_value = make_user_mock()
        send_otp.side_effect = RuntimeError("boom")
        with pytest.raises(InternalServerError):
            auth_service.forgot_password(db, ForgotPasswordRequest(email="eleve@ecole.be"))


def test_reset_password_revoque_les_sessions():
    db = MagicMock()
    user = make_user_mock(user_id=9)
    data = ResetPasswordRequest(
        email="eleve@ecole.be", otp_code="654321", new_password="nouveau1", confirm_new_password="nouveau1"
    )
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.auth_repo") as auth_repo:
        auth_repo.find_valid_otp_code.return_value = MagicMock()
        user_repo.find_by_email.return_value = user

        auth_service.reset_password(db, data)

    auth_repo.find_valid_otp_code.assert_called_once_with(db, "eleve@ecole.be", "654321", "password_reset")
    auth_repo.delete_otp_codes.assert_called_once_with(db, "eleve@ecole.be")
    assert "password_hash" in user_repo.update.call_args.kwargs
    auth_repo.delete_refresh_tokens_of_user.assert_called_once_with(db, 9)


def test_reset_password_otp_invalide():
    db = MagicMock()
    data = ResetPasswordRequest(
        email="eleve@ecole.be", otp_code="000000", new_password="nouveau1", confirm_new_password="nouveau1"
    )
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.auth_repo") as auth_repo:
        auth_repo.find_valid_otp_code.return_value = None
        with pytest.raises(UnprocessableEntityError):
            auth_service.reset_password(db, data)
    user_repo.update.assert_not_called()


# --- Connexion ---

def test_login_email_inconnu():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo:
        user_repo.find_by_email.return_value = None
        with pytest.raises(UnprocessableEntityError):
            auth_service.login(db, LoginRequest(email="x@ecole.be", password="secret123"))


def test_login_mauvais_mot_de_passe():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo:
        user_repo.find_by_email.return_value = make_user_mock(password="secret123")
        with pytest.raises(UnprocessableEntityError):
            auth_service.login(db, LoginRequest(email="eleve@ecole.be", password="mauvais1"))


def test_login_compte_desactive():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo:
        user_repo.find_by_email.return_value = make_user_mock(is_active=False)
        with pytest.raises(UnprocessableEntityError, match="désactivé"):
            auth_service.login(db, LoginRequest(email="eleve@ecole.be", password="secret123"))


def test_login_succes_persiste_refresh_token():
    db = MagicMock()
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.auth_repo") as auth_repo:
        user_repo.find_by_email.return_value = make_user_mock(user_id=3)
        tokens = auth_service.login(db, LoginRequest(email="eleve@ecole.be", password="secret123"))

    assert tokens.access_token
    assert tokens.token_type == "bearer"
    kwargs = auth_repo.create_refresh_token.call_args.kwargs
    assert kwargs["token"] == tokens.refresh_token
    assert kwargs["user_id"] == 3


# --- Refresh / logout ---

def test_refresh_token_inconnu():
    db = MagicMock()
    with patch(f"{MODULE}.auth_repo") as auth_repo:
        auth_repo.find_refresh_token.return_value = None
        with pytest.raises(UnprocessableEntityError):
            auth_service.refresh_token(db, RefreshTokenRequest(refresh_token="abc"))


def test_refresh_token_rotation():
    db = MagicMock()
    old_token = create_refresh_token(3)
    with patch(f"{MODULE}.user_repo") as user_repo, patch(f"{MODULE}.auth_repo") as auth_repo:
        auth_repo.find_refresh_token.return_value = MagicMock()
        user_repo.find_by_id.return_value = make_user_mock(user_id=3)

        tokens = auth_service.refresh_token(db, RefreshTokenRequest(refresh_token=old_token))

    user_repo.find_by_id.assert_called_once_with(db, 3)
    auth_repo.delete_refresh_token.assert_called_once_with(db, old_token)
    assert tokens.refresh_token != old_token


def test_logout_token_inconnu():
    db = MagicMock()
    with patch(f"{MODULE}.auth_repo") as auth_repo:
        auth_repo.delete_refresh_token.return_value = 0
        with pytest.raises(UnprocessableEntityError):
            auth_service.logout(db, RefreshTokenRequest(refresh_token="abc"))


def test_logout_succes():
    db = MagicMock()
    with patch(f"{MODULE}.auth_repo") as auth_repo:
        auth_repo.delete_refresh_token.return_value = 1
        result = auth_service.logout(db, RefreshTokenRequest(refresh_token="abc"))
    assert "message" in result
