"""
Unit tests for account routes.

Tests /send, /verificar and /login through the test client with the
in-memory repository and recording email sender.
"""

import re

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_repository
from src.domain.exceptions import StoreError
from tests.fakes import InMemoryRegistrationRepository, RecordingEmailSender

ANA = {
    "name": "Ana",
    "surname": "Lopez",
    "email": "ana@example.com",
    "password": "Secret123",
    "address": "Calle 1",
    "city": "Madrid",
    "postal_code": "28001",
    "country": "ES",
}


def issued_token(email_sender: RecordingEmailSender) -> str:
    match = re.search(r"token=([0-9a-f]+)", email_sender.sent[-1].message.html)
    assert match is not None
    return match.group(1)


class TestRegisterEndpoint:
    """Tests for POST /send."""

    def test_register_success(
        self,
        client: TestClient,
        repository: InMemoryRegistrationRepository,
        email_sender: RecordingEmailSender,
    ) -> None:
        response = client.post("/send", json=ANA)

        assert response.status_code == 200
        assert response.json() == {"message": "Correo de verificación enviado correctamente."}
        assert repository.writes == 1
        assert repository.rows["ana@example.com"].verified is False
        assert len(email_sender.sent) == 1

    def test_register_accepts_spanish_form_fields(
        self, client: TestClient, repository: InMemoryRegistrationRepository
    ) -> None:
        response = client.post(
            "/send",
            data={
                "nombre": "Ana",
                "apellido": "Lopez",
                "correo": "ana@example.com",
                "contrasena": "Secret123",
                "direccion": "Calle 1",
                "ciudad": "Madrid",
                "cp": "28001",
                "pais": "ES",
            },
        )

        assert response.status_code == 200
        assert repository.rows["ana@example.com"].postal_code == "28001"

    def test_link_uses_request_host_without_base_url(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        client.post("/send", json=ANA)

        assert "http://testserver/verificar?token=" in email_sender.sent[0].message.html

    def test_link_uses_configured_base_url(
        self, client: TestClient, settings, email_sender: RecordingEmailSender
    ) -> None:
        settings.public_base_url = "https://pericial.example/"

        client.post("/send", json=ANA)

        assert "https://pericial.example/verificar?token=" in email_sender.sent[0].message.html

    @pytest.mark.parametrize("missing", list(ANA))
    def test_missing_field_returns_400(
        self,
        client: TestClient,
        repository: InMemoryRegistrationRepository,
        email_sender: RecordingEmailSender,
        missing: str,
    ) -> None:
        body = {k: v for k, v in ANA.items() if k != missing}

        response = client.post("/send", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Todos los campos son obligatorios."}
        assert repository.writes == 0
        assert email_sender.attempts == []

    def test_blank_field_returns_400(self, client: TestClient) -> None:
        response = client.post("/send", json={**ANA, "city": "   "})

        assert response.status_code == 400

    def test_overlong_password_returns_400(
        self,
        client: TestClient,
        repository: InMemoryRegistrationRepository,
        email_sender: RecordingEmailSender,
    ) -> None:
        response = client.post("/send", json={**ANA, "password": "p" * 80})

        assert response.status_code == 400
        assert response.json() == {"error": "La contraseña admite hasta 72 bytes."}
        assert repository.writes == 0
        assert email_sender.attempts == []

    def test_72_byte_password_is_accepted(self, client: TestClient) -> None:
        response = client.post("/send", json={**ANA, "password": "ñ" * 36})

        assert response.status_code == 200

    def test_duplicate_email_returns_400(
        self, client: TestClient, repository: InMemoryRegistrationRepository
    ) -> None:
        client.post("/send", json=ANA)

        response = client.post("/send", json=ANA)

        assert response.status_code == 400
        assert response.json() == {"error": "Este correo ya está registrado."}
        assert repository.writes == 1

    def test_mail_failure_returns_500(
        self,
        client: TestClient,
        repository: InMemoryRegistrationRepository,
        email_sender: RecordingEmailSender,
    ) -> None:
        email_sender.fail_for.add("ana@example.com")

        response = client.post("/send", json=ANA)

        assert response.status_code == 500
        assert "error" in response.json()
        assert "ana@example.com" in repository.rows

    def test_store_failure_returns_500(self, app: FastAPI, client: TestClient) -> None:
        class BrokenRepository(InMemoryRegistrationRepository):
            def find_by_email(self, email: str):
                raise StoreError()

        app.dependency_overrides[get_repository] = BrokenRepository

        response = client.post("/send", json=ANA)

        assert response.status_code == 500


class TestVerifyEndpoint:
    """Tests for GET /verificar."""

    def test_scenario_register_then_verify(
        self,
        client: TestClient,
        repository: InMemoryRegistrationRepository,
        email_sender: RecordingEmailSender,
    ) -> None:
        assert client.post("/send", json=ANA).status_code == 200
        token = issued_token(email_sender)

        response = client.get("/verificar", params={"token": token})

        assert response.status_code == 302
        assert response.headers["location"] == "/verificado.html"
        row = repository.rows["ana@example.com"]
        assert row.verified is True
        assert row.verification_token is None

    def test_token_is_single_use(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        client.post("/send", json=ANA)
        token = issued_token(email_sender)
        client.get("/verificar", params={"token": token})

        response = client.get("/verificar", params={"token": token})

        assert response.status_code == 404
        assert response.text == "Token no encontrado o expirado."

    def test_missing_token_returns_400(self, client: TestClient) -> None:
        response = client.get("/verificar")

        assert response.status_code == 400
        assert response.text == "Token inválido."

    def test_unknown_token_returns_404(self, client: TestClient) -> None:
        response = client.get("/verificar", params={"token": "deadbeef"})

        assert response.status_code == 404


class TestLoginEndpoint:
    """Tests for POST /login."""

    @pytest.fixture
    def verified(self, client: TestClient, email_sender: RecordingEmailSender) -> None:
        client.post("/send", json=ANA)
        client.get("/verificar", params={"token": issued_token(email_sender)})

    @pytest.mark.usefixtures("verified")
    def test_login_success(self, client: TestClient) -> None:
        response = client.post(
            "/login", json={"email": "ana@example.com", "password": "Secret123"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Inicio de sesión exitoso",
            "name": "Ana",
            "surname": "Lopez",
            "email": "ana@example.com",
        }

    @pytest.mark.usefixtures("verified")
    def test_login_never_returns_hash(self, client: TestClient) -> None:
        response = client.post(
            "/login", json={"email": "ana@example.com", "password": "Secret123"}
        )

        body = response.text
        assert "password" not in body
        assert "$2b$" not in body

    @pytest.mark.usefixtures("verified")
    def test_wrong_password(self, client: TestClient) -> None:
        response = client.post("/login", json={"email": "ana@example.com", "password": "nope"})

        assert response.status_code == 400
        assert response.json() == {"error": "Contraseña incorrecta."}

    @pytest.mark.usefixtures("verified")
    def test_overlong_password_is_wrong_password(self, client: TestClient) -> None:
        response = client.post(
            "/login", json={"email": "ana@example.com", "password": "Secret123" * 10}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Contraseña incorrecta."}

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.post(
            "/login", json={"email": "nobody@example.com", "password": "Secret123"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Usuario no encontrado."}

    def test_unverified_with_correct_password_returns_403(self, client: TestClient) -> None:
        client.post("/send", json=ANA)

        response = client.post(
            "/login", json={"email": "ana@example.com", "password": "Secret123"}
        )

        assert response.status_code == 403
        assert response.json() == {"error": "Debes verificar tu correo antes de iniciar sesión."}

    def test_unverified_with_wrong_password_returns_400(self, client: TestClient) -> None:
        client.post("/send", json=ANA)

        response = client.post("/login", json={"email": "ana@example.com", "password": "nope"})

        assert response.status_code == 400
        assert response.json() == {"error": "Contraseña incorrecta."}

    @pytest.mark.parametrize("body", [{}, {"email": "ana@example.com"}, {"password": "x"}])
    def test_missing_fields(self, client: TestClient, body: dict) -> None:
        response = client.post("/login", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Todos los campos son obligatorios."}

    @pytest.mark.usefixtures("verified")
    def test_login_accepts_form_body(self, client: TestClient) -> None:
        response = client.post(
            "/login", data={"correo": "ana@example.com", "contrasena": "Secret123"}
        )

        assert response.status_code == 200


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.text == "OK"
