from datetime import timedelta

import pytest

from pilates_api.core.timezone_utils import utcnow
from pilates_api.models.booking import Booking
from pilates_api.models.schedule import PilatesClass
from pilates_api.models.user import UserRole


class TestTrainerEndpoints:
    """Tests para registro, login y disponibilidad de entrenadores."""

    def test_register_trainer(self, client):
        response = client.post("/trainers", json={
            "name": "Laura Pérez",
            "email": "laura@test.com",
            "password": "secreto123",
            "specialization": "Mat",
            "availability": ["tuesday 18:00-21:00", {"day": "friday", "from": "08:00"}],
        })
        assert response.status_code == 201
        data = response.json()
        assert data["role"] == UserRole.TRAINER.value
        assert data["specialization"] == "Mat"
        assert data["availability"][1] == {"day": "friday", "from": "08:00"}
        assert "password" not in data

    def test_register_trainer_duplicate_email(self, client, member_user):
        """El email es único para todos los roles."""
        response = client.post("/trainers", json={
            "name": "Duplicado",
            "email": member_user.email,
            "password": "secreto123",
        })
        assert response.status_code == 400

    def test_trainer_login(self, client, trainer_user):
        response = client.post("/trainer/login", json={
            "email": "trainer@test.com",
            "password": "trainer_password",
        })
        assert response.status_code == 200
        assert response.json()["user"]["role"] == UserRole.TRAINER.value

    def test_trainer_login_rejects_members(self, client, member_user):
        """El login de entrenadores no acepta cuentas de otros roles."""
        response = client.post("/trainer/login", json={
            "email": "member@test.com",
            "password": "member_password",
        })
        assert response.status_code == 401

    def test_update_availability(self, client, trainer_user, trainer_headers):
        """La disponibilidad se reemplaza por completo."""
        response = client.put(
            f"/trainers/{trainer_user.id}/availability",
            json={"availability": ["saturday 10:00-12:00"]},
            headers=trainer_headers,
        )
        assert response.status_code == 200
        assert response.json()["availability"] == ["saturday 10:00-12:00"]

    def test_update_availability_requires_array(self, client, trainer_user, trainer_headers):
        response = client.put(
            f"/trainers/{trainer_user.id}/availability",
            json={"availability": "monday"},
            headers=trainer_headers,
        )
        assert response.status_code == 400

    def test_update_availability_member_forbidden(self, client, trainer_user, member_headers):
        response = client.put(
            f"/trainers/{trainer_user.id}/availability",
            json={"availability": []},
            headers=member_headers,
        )
        assert response.status_code == 403

    def test_update_availability_of_non_trainer(self, client, admin_headers, member_user):
        response = client.put(
            f"/trainers/{member_user.id}/availability",
            json={"availability": []},
            headers=admin_headers,
        )
        assert response.status_code == 404


class TestTrainerMembers:
    """Tests para el listado de miembros con reserva en clases del entrenador."""

    @pytest.fixture
    def other_trainer_class(self, db, make_user):
        trainer = make_user(
            name="Otro Entrenador", email="otro.trainer@test.com",
            password="trainer_password", role=UserRole.TRAINER,
        )
        pilates_class = PilatesClass(
            name="Mat Básico", date=utcnow() + timedelta(days=5), time="18:00",
            duration=45, max_participants=12, trainer_id=trainer.id,
        )
        db.add(pilates_class)
        db.commit()
        db.refresh(pilates_class)
        return pilates_class

    def test_members_of_trainer(
        self, client, db, trainer_user, trainer_headers, member_user, pilates_class, other_trainer_class
    ):
        """Una reserva produce exactamente una fila, sin IDs de unión."""
        db.add(Booking(class_id=pilates_class.id, user_id=member_user.id, status="booked"))
        db.add(Booking(class_id=other_trainer_class.id, user_id=member_user.id, status="booked"))
        db.commit()

        response = client.get(f"/trainers/{trainer_user.id}/members", headers=trainer_headers)
        assert response.status_code == 200
        rows = response.json()
        assert len(rows) == 1
        row = rows[0]
        assert set(row) == {"memberName", "memberEmail", "className", "classDate", "classTime"}
        assert row["memberName"] == "Member Test"
        assert row["memberEmail"] == "member@test.com"
        assert row["className"] == "Reformer Intermedio"
        assert row["classTime"] == "10:00"

    def test_members_one_row_per_member_and_class(
        self, client, db, trainer_user, admin_headers, member_user, other_member, pilates_class
    ):
        second_class = PilatesClass(
            name="Reformer Avanzado", date=utcnow() + timedelta(days=4), time="11:00",
            duration=50, max_participants=6, trainer_id=trainer_user.id,
        )
        db.add(second_class)
        db.commit()
        db.add_all([
            Booking(class_id=pilates_class.id, user_id=member_user.id, status="booked"),
            Booking(class_id=pilates_class.id, user_id=other_member.id, status="booked"),
            Booking(class_id=second_class.id, user_id=member_user.id, status="booked"),
        ])
        db.commit()

        response = client.get(f"/trainers/{trainer_user.id}/members", headers=admin_headers)
        assert response.status_code == 200
        pairs = {(row["memberEmail"], row["className"]) for row in response.json()}
        assert pairs == {
            ("member@test.com", "Reformer Intermedio"),
            ("other@test.com", "Reformer Intermedio"),
            ("member@test.com", "Reformer Avanzado"),
        }

    def test_members_without_bookings(self, client, trainer_user, trainer_headers, pilates_class):
        response = client.get(f"/trainers/{trainer_user.id}/members", headers=trainer_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_members_member_forbidden(self, client, trainer_user, member_headers):
        response = client.get(f"/trainers/{trainer_user.id}/members", headers=member_headers)
        assert response.status_code == 403

    def test_members_unknown_trainer(self, client, admin_headers, member_user):
        response = client.get(f"/trainers/{member_user.id}/members", headers=admin_headers)
        assert response.status_code == 404
