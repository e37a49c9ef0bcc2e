"""
Tests unitaires du client de stockage objet et de l'envoi d'emails (clients externes mockés).
"""

import io
from unittest.mock import MagicMock, patch

import pytest

from classroom_api.config import settings
from classroom_api.services import email_service
from classroom_api.services.storage_service import StorageService


# --- Stockage ---

def test_upload_cree_le_bucket_une_seule_fois():
    client = MagicMock()
    client.bucket_exists.return_value = False
    storage = StorageService(client)

    storage.upload("classroom-media", "users/7/a.pdf", io.BytesIO(b"abc"), 3, content_type="application/pdf")
    storage.upload("classroom-media", "users/7/b.pdf", io.BytesIO(b"abc"), 3)

    client.make_bucket.assert_called_once_with("classroom-media")
    client.bucket_exists.assert_called_once()
    assert client.put_object.call_count == 2
    assert client.put_object.call_args.kwargs["content_type"] == "application/octet-stream"


def test_download_libere_la_connexion():
    client = MagicMock()
    response = client.get_object.return_value
    response.stream.return_value = iter([b"ab", b"cd"])
    storage = StorageService(client)

    assert b"".join(storage.download("classroom-media", "users/7/a.pdf")) == b"abcd"
    response.close.assert_called_once()
    response.release_conn.assert_called_once()


def test_download_ouvre_l_objet_immediatement():
    client = MagicMock()
    client.get_object.side_effect = RuntimeError("NoSuchKey")
    storage = StorageService(client)
    with pytest.raises(RuntimeError):
        storage.download("classroom-media", "users/7/absent.pdf")
    client.get_object.assert_called_once_with("classroom-media", "users/7/absent.pdf")


def test_move_copie_puis_supprime():
    client = MagicMock()
    storage = StorageService(client)
    storage.move("classroom-media", "users/7/old.pdf", "users/7/new.pdf")

    bucket, target, source = client.copy_object.call_args.args
    assert (bucket, target) == ("classroom-media", "users/7/new.pdf")
    assert source.object_name == "users/7/old.pdf"
    client.remove_object.assert_called_once_with("classroom-media", "users/7/old.pdf")


def test_move_echec_copie_source_conservee():
    client = MagicMock()
    client.copy_object.side_effect = RuntimeError("copie impossible")
    storage = StorageService(client)
    with pytest.raises(RuntimeError):
        storage.move("classroom-media", "users/7/old.pdf", "users/7/new.pdf")
    client.remove_object.assert_not_called()


def test_presigned_url_expiration():
    client = MagicMock()
    client.presigned_get_object.return_value = "http://signed"
    storage = StorageService(client)

    assert storage.presigned_url("classroom-media", "k", 600) == "http://signed"
    assert client.presigned_get_object.call_args.kwargs["expires"].total_seconds() == 600


# --- Email ---

def test_send_email_smtp():
    with patch("classroom_api.services.email_service.smtplib.SMTP") as smtp_cls:
        server = smtp_cls.return_value.__enter__.return_value
        email_service.send_email("eleve@ecole.be", "Code de vérification", "Votre code OTP est : 123456.")

    smtp_cls.assert_called_once_with(settings.SMTP_HOST, settings.SMTP_PORT)
    message = server.send_message.call_args.args[0]
    assert message["To"] == "eleve@ecole.be"
    assert message["Subject"] == "Code de vérification"
    plain_part = message.get_payload()[0]
    assert "123456" in plain_part.get_payload(decode=True).decode("utf-8")
