from fastapi import APIRouter

# Import routers from modules
from pilates_api.api.v1.endpoints import users, trainers, classes, bookings, payments, memberships

api_router = APIRouter()

# Members, admins and account management
api_router.include_router(users.router, tags=["users"])

# Trainers module
api_router.include_router(trainers.router, tags=["trainers"])

# Classes and schedule
api_router.include_router(classes.router, tags=["classes"])

# Bookings module
api_router.include_router(bookings.router, tags=["bookings"])

# Payments module
api_router.include_router(payments.router, tags=["payments"])

# Memberships module
api_router.include_router(memberships.router, tags=["memberships"])
