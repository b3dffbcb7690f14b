from datetime import datetime
from database.db import db


class Account(db.Model):
    """A bookable service provider. Drivers and maids share this table."""

    __tablename__ = "accounts"
    __table_args__ = (
        db.UniqueConstraint("role", "email", name="uq_accounts_role_email"),
        db.UniqueConstraint("role", "user_id", name="uq_accounts_role_user_id"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(32), nullable=False, index=True)
    role = db.Column(db.Enum("driver", "maid", name="account_role"), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    phone = db.Column(db.String(30), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    is_available = db.Column(db.Boolean, nullable=False, default=True)
    rating = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    bookings = db.relationship(
        "Booking",
        back_populates="provider",
        lazy=True,
        order_by="Booking.id",
    )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "role": self.role,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "is_available": self.is_available,
            "rating": self.rating,
            "bookings": [b.id for b in self.bookings],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Account {self.role} {self.user_id}>"
