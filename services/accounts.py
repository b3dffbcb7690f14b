import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from database.db import db
from models.accounts import Account
from utils.errors import ConflictError, InvalidCredentialsError, NotFoundError
from utils.events import emit
from utils.ids import generate_user_id

logger = logging.getLogger(__name__)


def normalize_email(email):
    return email.strip().lower()


def _email_taken(email, role, exclude_id=None):
    query = Account.query.filter_by(role=role, email=email)
    if exclude_id is not None:
        query = query.filter(Account.id != exclude_id)
    return query.first() is not None


def unique_user_id(role):
    """Draw public ids until one is unused for ``role``.

    Gives up with ConflictError after ``USER_ID_MAX_ATTEMPTS`` draws.
    """
    attempts = current_app.config.get("USER_ID_MAX_ATTEMPTS", 50)
    for _ in range(attempts):
        candidate = generate_user_id(role)
        if not Account.query.filter_by(role=role, user_id=candidate).first():
            return candidate
        logger.warning("Public id collision for %s: %s", role, candidate)
    raise ConflictError("Could not allocate a unique user id, try again")


def register(name, email, password, role, phone):
    email = normalize_email(email)
    if _email_taken(email, role):
        raise ConflictError("User already exists")

    account = Account(
        name=name.strip(),
        email=email,
        phone=phone.strip(),
        role=role,
        user_id=unique_user_id(role),
        password_hash=generate_password_hash(password),
    )
    db.session.add(account)
    try:
        db.session.commit()
    except IntegrityError:
        # another request registered the same email or id in between
        db.session.rollback()
        raise ConflictError("User already exists")

    emit("account.registered", account_id=account.id, user_id=account.user_id, role=role)
    return account


def verify_login(email, password, role):
    account = Account.query.filter_by(role=role, email=normalize_email(email)).first()
    if not account or not check_password_hash(account.password_hash, password):
        raise InvalidCredentialsError()
    emit("account.login", account_id=account.id, role=role)
    return account


def find_by_public_id(user_id, role):
    account = Account.query.filter_by(role=role, user_id=user_id).first()
    if not account:
        raise NotFoundError("Service provider not found")
    return account


def update_profile(account, name=None, phone=None, email=None):
    if email is not None:
        email = normalize_email(email)
        if email != account.email and _email_taken(email, account.role, exclude_id=account.id):
            raise ConflictError("Email already in use")
        account.email = email
    if name is not None:
        account.name = name.strip()
    if phone is not None:
        account.phone = phone.strip()
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("Email already in use")
    return account


def set_availability(account, is_available):
    account.is_available = is_available
    db.session.commit()
    emit("provider.availability_changed", account_id=account.id, is_available=is_available)
    return account


def list_accounts(role=None, available_only=False):
    query = Account.query
    if role:
        query = query.filter_by(role=role)
    if available_only:
        query = query.filter_by(is_available=True)
    return query.order_by(Account.id).all()
