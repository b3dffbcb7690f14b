from flask import Blueprint, jsonify, g

from services import accounts
from utils.auth import generate_token, token_required
from utils.validation import (
    ROLES, validate, json_body, not_empty, is_email, min_length, one_of, optional,
)

auth_bp = Blueprint('auth', __name__)


def token_response(account):
    return {"token": generate_token(account), "user": account.to_dict()}

#=========== REGISTER / LOGIN ================

@auth_bp.route('/register', methods=['POST'])
def register():
    data = json_body()
    validate(data, [
        ('name', not_empty, 'Name is required'),
        ('email', is_email, 'Please include a valid email'),
        ('password', min_length(6), 'Please enter a password with 6 or more characters'),
        ('role', one_of(ROLES), 'Role is required'),
        ('phone', not_empty, 'Phone number is required'),
    ])

    account = accounts.register(
        name=data['name'],
        email=data['email'],
        password=data['password'],
        role=data['role'],
        phone=data['phone'],
    )
    return jsonify(token_response(account)), 201

@auth_bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    validate(data, [
        ('email', is_email, 'Please include a valid email'),
        ('password', min_length(1), 'Password is required'),
        ('role', one_of(ROLES), 'Role is required'),
    ])

    account = accounts.verify_login(data['email'], data['password'], data['role'])
    return jsonify(token_response(account)), 200

#=========== PROFILE ================

@auth_bp.route('/user', methods=['GET'])
@token_required
def current_user():
    return jsonify({**g.current_user.to_dict(), "role": g.current_role})

@auth_bp.route('/profile', methods=['PUT'])
@token_required
def update_profile():
    data = json_body()
    validate(data, [
        ('name', optional(not_empty), 'Name cannot be empty'),
        ('phone', optional(not_empty), 'Phone number cannot be empty'),
        ('email', optional(is_email), 'Please include a valid email'),
    ])

    account = accounts.update_profile(
        g.current_user,
        name=data.get('name'),
        phone=data.get('phone'),
        email=data.get('email'),
    )
    return jsonify({"message": "Profile updated successfully", "user": account.to_dict()}), 200
