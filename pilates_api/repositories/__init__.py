from pilates_api.repositories.user import user_repository
from pilates_api.repositories.schedule import class_repository
from pilates_api.repositories.booking import booking_repository
from pilates_api.repositories.payment import payment_repository
