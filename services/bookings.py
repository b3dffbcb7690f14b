import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import or_

from database.db import db
from models.accounts import Account
from models.bookings import Booking, BOOKING_STATUSES
from services.accounts import find_by_public_id
from utils.errors import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from utils.events import emit

logger = logging.getLogger(__name__)


# ---------- legacy schema compatibility ----------

def provider_match_clause(user_id):
    """Filter matching bookings assigned to the provider ``user_id``.

    Records written by the earlier schema carry the provider's public id in
    ``service_provider_unique_id`` instead of ``assigned_to_user_id``. This is
    the only query that looks at the legacy column.
    """
    return or_(
        Booking.assigned_to_user_id == user_id,
        Booking.service_provider_unique_id == user_id,
    )


def normalize_legacy_fields(booking):
    """Copy the legacy provider id onto the current field before a write."""
    if not booking.assigned_to_user_id and booking.service_provider_unique_id:
        booking.assigned_to_user_id = booking.service_provider_unique_id
    return booking


# ---------- lifecycle ----------

def create_booking(customer_name, customer_phone, service_type, provider_user_id,
                   date, time, address, notes=None):
    provider = find_by_public_id(provider_user_id, service_type)

    booking = Booking(
        customer_name=customer_name.strip(),
        customer_phone=customer_phone.strip(),
        service_type=service_type,
        date=date,
        time=time,
        address=address.strip(),
        notes=notes.strip() if notes else notes,
        service_provider_id=provider.id,
        assigned_to_user_id=provider.user_id,
        status="pending",
    )
    provider.bookings.append(booking)
    db.session.add(booking)
    db.session.commit()

    emit("booking.created", booking_id=booking.id, provider=provider.user_id, service_type=service_type)
    return booking


def get_booking(booking_id):
    booking = db.session.get(Booking, booking_id)
    if not booking:
        raise NotFoundError("Booking not found")
    return booking


def _ensure_assigned(booking, account):
    if booking.service_provider_id != account.id:
        raise AuthorizationError("Not authorized to update this booking")


def get_booking_for_provider(booking_id, account):
    booking = get_booking(booking_id)
    _ensure_assigned(booking, account)
    return booking


def list_for_provider(user_id):
    return (
        Booking.query
        .filter(provider_match_clause(user_id))
        .order_by(Booking.created_at.desc(), Booking.id.desc())
        .all()
    )


def list_available_providers(service_type):
    # is_available is deliberately not consulted here; /api/users filters on it
    return Account.query.filter_by(role=service_type).order_by(Account.id).all()


def update_status(booking_id, new_status, account):
    booking = get_booking(booking_id)
    _ensure_assigned(booking, account)
    if new_status not in BOOKING_STATUSES:
        raise ValidationError(
            "Status must be one of: " + ", ".join(BOOKING_STATUSES),
            details=[{"field": "status", "msg": "Invalid status"}],
        )

    previous = booking.status
    normalize_legacy_fields(booking)
    booking.status = new_status
    db.session.commit()

    emit("booking.status_changed", booking_id=booking.id, old=previous, new=new_status)
    return booking


def rate_booking(booking_id, score, review=None):
    booking = get_booking(booking_id)
    if booking.status != "completed":
        raise InvalidStateError("You can only rate completed bookings")

    normalize_legacy_fields(booking)
    booking.rating_score = score
    booking.rating_review = review
    db.session.commit()
    emit("booking.rated", booking_id=booking.id, score=score)

    recompute_provider_rating(booking.service_provider_id)
    return booking


def average_rating(scores):
    """Mean of ``scores`` rounded half-up to one decimal place."""
    if not scores:
        return None
    mean = Decimal(sum(scores)) / Decimal(len(scores))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def recompute_provider_rating(provider_id):
    scores = [
        score for (score,) in
        db.session.query(Booking.rating_score)
        .filter(Booking.service_provider_id == provider_id, Booking.rating_score.isnot(None))
        .all()
    ]
    provider = db.session.get(Account, provider_id)
    if not provider:
        logger.warning("Rated booking references missing provider %s", provider_id)
        return None

    provider.rating = average_rating(scores)
    db.session.commit()
    emit("provider.rating_recomputed", account_id=provider.id, rating=provider.rating, count=len(scores))
    return provider.rating
