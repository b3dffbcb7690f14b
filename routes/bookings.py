from flask import Blueprint, jsonify, request, g

from services import accounts, bookings
from utils.auth import provider_required, token_required
from utils.errors import ValidationError
from utils.validation import (
    ROLES, validate, json_body, not_empty, one_of, int_between, optional, is_string, is_boolean,
)

bookings_bp = Blueprint('bookings', __name__)

@bookings_bp.route('', methods=['POST'])
@bookings_bp.route('/', methods=['POST'])
def create_booking():
    data = json_body()
    validate(data, [
        ('customer_name', not_empty, 'Customer name is required'),
        ('customer_phone', not_empty, 'Customer phone is required'),
        ('service_type', one_of(ROLES), 'Service type must be either driver or maid'),
        ('serviceProviderUniqueId', not_empty, 'Service provider user_id is required'),
        ('date', not_empty, 'Date is required'),
        ('time', not_empty, 'Time is required'),
        ('address', not_empty, 'Address is required'),
        ('notes', optional(is_string), 'Notes must be a string'),
    ])

    booking = bookings.create_booking(
        customer_name=data['customer_name'],
        customer_phone=data['customer_phone'],
        service_type=data['service_type'],
        provider_user_id=data['serviceProviderUniqueId'],
        date=data['date'],
        time=data['time'],
        address=data['address'],
        notes=data.get('notes'),
    )
    return jsonify({"message": "Booking created successfully", "booking": booking.to_dict()}), 201

@bookings_bp.route('/available-providers', methods=['GET'])
def available_providers():
    service_type = request.args.get('type')
    if service_type not in ROLES:
        raise ValidationError(
            'Please provide a valid service type (driver or maid)',
            details=[{"field": "type", "msg": "Invalid service type"}],
        )
    providers = bookings.list_available_providers(service_type)
    return jsonify([p.to_dict() for p in providers])

@bookings_bp.route('/my-dashboard', methods=['GET'])
@token_required
def my_dashboard():
    items = bookings.list_for_provider(g.current_user.user_id)
    return jsonify({
        "success": True,
        "bookings": [b.to_dict() for b in items],
    })

@bookings_bp.route('/<int:booking_id>', methods=['GET'])
@provider_required
def get_booking(booking_id):
    booking = bookings.get_booking_for_provider(booking_id, g.current_user)
    return jsonify(booking.to_dict())

@bookings_bp.route('/<int:booking_id>/status', methods=['PUT'])
@provider_required
def update_status(booking_id):
    data = json_body()
    booking = bookings.update_status(booking_id, data.get('status'), g.current_user)
    return jsonify(booking.to_dict())

@bookings_bp.route('/<int:booking_id>/rate', methods=['PUT'])
def rate_booking(booking_id):
    data = json_body()
    validate(data, [
        ('rating', int_between(1, 5), 'Please provide a rating between 1 and 5'),
        ('review', optional(is_string), 'Review must be a string'),
    ])

    booking = bookings.rate_booking(booking_id, int(data['rating']), data.get('review'))
    return jsonify({"message": "Thank you for your feedback!", "booking": booking.to_dict()})

@bookings_bp.route('/profile/availability', methods=['PUT'])
@provider_required
def update_availability():
    data = json_body()
    validate(data, [
        ('isAvailable', is_boolean, 'Availability status is required'),
    ])

    account = accounts.set_availability(g.current_user, data['isAvailable'])
    state = 'available' if account.is_available else 'unavailable'
    return jsonify({
        "message": f"You are now {state} for bookings",
        "user": account.to_dict(),
    })
