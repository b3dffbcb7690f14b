from flask import Blueprint, jsonify, request

from services.accounts import list_accounts
from utils.errors import ValidationError
from utils.validation import ROLES

users_bp = Blueprint('users', __name__)

@users_bp.route('', methods=['GET'])
@users_bp.route('/', methods=['GET'])
def get_users():
    role = request.args.get('userType')
    if role and role not in ROLES:
        raise ValidationError(
            'userType must be either driver or maid',
            details=[{"field": "userType", "msg": "Invalid user type"}],
        )
    available_only = request.args.get('isAvailable') == 'true'
    return jsonify([a.to_dict() for a in list_accounts(role, available_only)])
