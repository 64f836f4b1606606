from fastapi import APIRouter

from .applications import application_router
from .borrowers import borrower_router
from .health import build_health_router
from .notifications import notification_router
from .notify import notify_router
from .payments import payment_router

lending_router = APIRouter()
lending_router.include_router(build_health_router("lending-api"), tags=["Health"])
lending_router.include_router(application_router, tags=["Applications"])
lending_router.include_router(borrower_router, tags=["Borrowers"])
lending_router.include_router(notify_router, tags=["Notifications"])

notifications_api_router = APIRouter()
notifications_api_router.include_router(build_health_router("notification-service"), tags=["Health"])
notifications_api_router.include_router(notification_router, tags=["Notifications"])

payments_api_router = APIRouter()
payments_api_router.include_router(build_health_router("payment-service"), tags=["Health"])
payments_api_router.include_router(payment_router, tags=["Payments"])
