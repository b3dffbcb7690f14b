from datetime import datetime
from database.db import db

BOOKING_STATUSES = ("pending", "accepted", "rejected", "completed", "cancelled")
SERVICE_TYPES = ("driver", "maid")


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)
    customer_name = db.Column(db.String(120), nullable=False)
    customer_phone = db.Column(db.String(30), nullable=False)
    service_type = db.Column(db.Enum(*SERVICE_TYPES, name="service_type"), nullable=False)
    # Display strings, not parsed as calendar values
    date = db.Column(db.String(40), nullable=False)
    time = db.Column(db.String(40), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    notes = db.Column(db.Text)
    status = db.Column(db.String(20), nullable=False, default="pending")
    service_provider_id = db.Column(db.Integer, db.ForeignKey("accounts.id"), nullable=False, index=True)
    assigned_to_user_id = db.Column(db.String(32), index=True)
    # Written by the earlier schema only; see services.bookings.provider_match_clause
    service_provider_unique_id = db.Column(db.String(32), index=True)
    rating_score = db.Column(db.Integer)
    rating_review = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    provider = db.relationship("Account", back_populates="bookings")

    def to_dict(self):
        rating = None
        if self.rating_score is not None:
            rating = {"score": self.rating_score, "review": self.rating_review}
        return {
            "id": self.id,
            "customer_name": self.customer_name,
            "customer_phone": self.customer_phone,
            "service_type": self.service_type,
            "date": self.date,
            "time": self.time,
            "address": self.address,
            "notes": self.notes,
            "status": self.status or "pending",
            "service_provider_id": self.service_provider_id,
            "assigned_to_user_id": self.assigned_to_user_id,
            "rating": rating,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Booking {self.id} {self.status}>"
