# Importar todos los modelos para que create_all los detecte
from pilates_api.db.base_class import Base  # noqa
from pilates_api.models.user import User  # noqa
from pilates_api.models.schedule import PilatesClass  # noqa
from pilates_api.models.booking import Booking  # noqa
from pilates_api.models.payment import Payment  # noqa
