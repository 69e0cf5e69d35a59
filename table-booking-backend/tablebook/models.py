
from sqlalchemy import func
from .extensions import db

class StoredValue(db.Model):
    __tablename__ = "storage"
    key = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.Text, nullable=False)

    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
