from datetime import datetime, timedelta

from pilates_api.core.timezone_utils import utcnow
from pilates_api.models.booking import Booking
from pilates_api.models.schedule import PilatesClass


def _class_payload(trainer_id, **overrides):
    payload = {
        "name": "Reformer Principiantes",
        "description": "Introducción al reformer",
        "date": (utcnow() + timedelta(days=7)).replace(microsecond=0).isoformat(),
        "time": "09:30",
        "duration": 45,
        "maxParticipants": 10,
        "trainerId": trainer_id,
    }
    payload.update(overrides)
    return payload


class TestClassEndpoints:
    """Tests para creación, actualización y eliminación de clases."""

    def test_create_class(self, client, trainer_user, trainer_headers):
        response = client.post("/classes", json=_class_payload(trainer_user.id), headers=trainer_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Reformer Principiantes"
        assert data["trainerId"] == trainer_user.id
        assert data["maxParticipants"] == 10
        assert data["createdAt"] is not None
        assert data["updatedAt"] is not None

    def test_create_class_as_admin(self, client, trainer_user, admin_headers):
        response = client.post("/classes", json=_class_payload(trainer_user.id), headers=admin_headers)
        assert response.status_code == 201

    def test_create_class_member_forbidden(self, client, trainer_user, member_headers):
        response = client.post("/classes", json=_class_payload(trainer_user.id), headers=member_headers)
        assert response.status_code == 403

    def test_create_class_unknown_trainer(self, client, trainer_headers):
        response = client.post("/classes", json=_class_payload(9999), headers=trainer_headers)
        assert response.status_code == 404

    def test_create_class_trainer_id_not_a_trainer(self, client, member_user, trainer_headers):
        """trainerId debe corresponder a un usuario con rol de entrenador."""
        response = client.post("/classes", json=_class_payload(member_user.id), headers=trainer_headers)
        assert response.status_code == 404

    def test_create_class_invalid_time(self, client, trainer_user, trainer_headers):
        response = client.post(
            "/classes", json=_class_payload(trainer_user.id, time="25:00"), headers=trainer_headers
        )
        assert response.status_code == 400

    def test_read_class(self, client, pilates_class, member_headers):
        response = client.get(f"/classes/{pilates_class.id}", headers=member_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Reformer Intermedio"

    def test_update_class_refreshes_updated_at(self, client, db, pilates_class, trainer_headers):
        pilates_class.updated_at = datetime(2020, 1, 1)
        db.commit()

        response = client.put(
            f"/classes/{pilates_class.id}", json={"maxParticipants": 12}, headers=trainer_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["maxParticipants"] == 12
        assert data["name"] == "Reformer Intermedio"
        assert not data["updatedAt"].startswith("2020-01-01")

    def test_update_class_unknown_trainer(self, client, pilates_class, trainer_headers):
        response = client.put(
            f"/classes/{pilates_class.id}", json={"trainerId": 9999}, headers=trainer_headers
        )
        assert response.status_code == 404

    def test_update_class_null_required_field(self, client, pilates_class, trainer_headers):
        response = client.put(
            f"/classes/{pilates_class.id}", json={"name": None}, headers=trainer_headers
        )
        assert response.status_code == 400

    def test_update_unknown_class(self, client, trainer_headers):
        response = client.put("/classes/9999", json={"duration": 30}, headers=trainer_headers)
        assert response.status_code == 404

    def test_delete_class_with_bookings(self, client, db, pilates_class, member_user, trainer_headers):
        """Una clase con reservas no se puede eliminar."""
        db.add(Booking(class_id=pilates_class.id, user_id=member_user.id, status="booked"))
        db.commit()

        response = client.delete(f"/classes/{pilates_class.id}", headers=trainer_headers)
        assert response.status_code == 400
        assert db.get(PilatesClass, pilates_class.id) is not None

    def test_delete_class(self, client, pilates_class, trainer_headers):
        class_id = pilates_class.id
        response = client.delete(f"/classes/{class_id}", headers=trainer_headers)
        assert response.status_code == 204
        assert response.content == b""

        response = client.get(f"/classes/{class_id}", headers=trainer_headers)
        assert response.status_code == 404

    def test_delete_unknown_class(self, client, admin_headers):
        response = client.delete("/classes/9999", headers=admin_headers)
        assert response.status_code == 404


class TestClassSchedule:
    """Tests para el calendario de próximas clases."""

    def test_schedule_excludes_past_and_is_sorted(self, client, db, trainer_user, member_headers):
        now = utcnow()
        day = (now + timedelta(days=2)).replace(hour=0, minute=0, second=0, microsecond=0)
        db.add_all([
            PilatesClass(name="Pasada", date=now - timedelta(days=1), time="10:00",
                         duration=50, max_participants=8, trainer_id=trainer_user.id),
            PilatesClass(name="Tarde", date=day, time="19:00",
                         duration=50, max_participants=8, trainer_id=trainer_user.id),
            PilatesClass(name="Mañana", date=day, time="08:00",
                         duration=50, max_participants=8, trainer_id=trainer_user.id),
            PilatesClass(name="Próxima semana", date=now + timedelta(days=7), time="07:00",
                         duration=50, max_participants=8, trainer_id=trainer_user.id),
        ])
        db.commit()

        response = client.get("/classes/schedule", headers=member_headers)
        assert response.status_code == 200
        names = [c["name"] for c in response.json()]
        assert names == ["Mañana", "Tarde", "Próxima semana"]

    def test_schedule_empty(self, client, member_headers):
        response = client.get("/classes/schedule", headers=member_headers)
        assert response.status_code == 200
        assert response.json() == []
